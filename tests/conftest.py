"""Shared fixtures for dashboard tests."""

import asyncio

import pytest

from nasa_dashboard.models import ApodRecord, RoverCamera, RoverManifest, RoverPhoto


class FakeGateway:
    """
    Stand-in for NASAClient whose calls block on futures the test resolves.

    Calls are recorded in ``calls`` and their futures queued per key, so a
    test can settle them in any order it likes.
    """

    def __init__(self):
        self.calls = []
        self.pending = {}
        self.closed = False

    def _enqueue(self, key):
        future = asyncio.get_running_loop().create_future()
        self.calls.append(key)
        self.pending.setdefault(key, []).append(future)
        return future

    async def fetch_apod(self, date=None):
        return await self._enqueue(("apod", date))

    async def fetch_rover_photos(self, rover, sol):
        return await self._enqueue(("photos", rover, sol))

    async def fetch_rover_manifest(self, rover):
        return await self._enqueue(("manifest", rover))

    def resolve(self, key, value, index=0):
        self.pending[key][index].set_result(value)

    def fail(self, key, exc, index=0):
        self.pending[key][index].set_exception(exc)

    async def close(self):
        self.closed = True

    @staticmethod
    async def settle(rounds=10):
        """Let scheduled tasks run up to their next suspension point."""
        for _ in range(rounds):
            await asyncio.sleep(0)


def make_apod(date="2024-01-05", title="Orion Nebula"):
    return ApodRecord(
        title=title,
        date=date,
        explanation="A stellar nursery.",
        media_type="image",
        url=f"https://apod.nasa.gov/{date}.jpg",
    )


def make_photo(photo_id=1, sol=1000, camera="Front Hazard Avoidance Camera"):
    return RoverPhoto(
        id=photo_id,
        img_src=f"https://mars.nasa.gov/{photo_id}.jpg",
        sol=sol,
        earth_date="2015-05-30",
        camera=RoverCamera(name="FHAZ", full_name=camera),
    )


def make_manifest(name="Curiosity", max_sol=4102):
    return RoverManifest(
        name=name,
        launch_date="2011-11-26",
        landing_date="2012-08-06",
        status="active",
        max_sol=max_sol,
        max_date="2024-02-19",
        total_photos=695670,
    )


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture(autouse=True)
def no_api_key_env(monkeypatch):
    monkeypatch.delenv("NASA_API_KEY", raising=False)
    monkeypatch.delenv("NASA_DASHBOARD_CONFIG", raising=False)
