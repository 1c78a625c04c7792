"""
Panel controllers for NASA Mission Control dashboard.

Each controller owns its panel state and the draft/committed input values.
Every submit commits a new value and schedules a load; each load takes a new
generation number and only the latest generation may write panel state, so a
response for a superseded commit is dropped when it finally arrives.

:copyright: (c) 2025 by Meir Miyara.
:license: MPL-2.0, see LICENSE for more details.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Any, Callable, Coroutine, Generic, List, Optional, Set, TypeVar

from nasa_dashboard.client import NASAClient
from nasa_dashboard.config import ROVERS
from nasa_dashboard.formatting import get_local_iso_date, normalize_sol
from nasa_dashboard.models import (
    ApodRecord,
    PanelState,
    PanelStatus,
    RoverQuery,
    RoverTelemetry,
)

_LOG = logging.getLogger(__name__)

T = TypeVar("T")
StateListener = Callable[[PanelState], None]

APOD_FALLBACK_ERROR = "Unable to load the Astronomy Picture of the Day."
ROVER_FALLBACK_ERROR = "Unable to load Mars rover telemetry right now."
SOL_REQUIRED_NOTICE = "Enter a sol to retrieve imagery."
NO_PHOTOS_NOTICE = "No images available for that sol. Try a nearby sol or a different rover."


class PanelController(Generic[T]):
    """Shared state ownership, listener and load-task plumbing."""

    name = "panel"
    fallback_error = "Unable to load data."

    def __init__(self, gateway: NASAClient):
        self._gateway = gateway
        self._state: PanelState[T] = PanelState()
        self._generation = 0
        self._listeners: List[StateListener] = []
        self._tasks: Set[asyncio.Task] = set()

    @property
    def state(self) -> PanelState[T]:
        """Current immutable panel snapshot."""
        return self._state

    def add_listener(self, listener: StateListener) -> None:
        """Register a callback invoked with the new state after every change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _set_state(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as ex:
                _LOG.error("State listener failed for %s panel: %s", self.name, ex, exc_info=True)

    def _begin_load(self) -> int:
        self._generation += 1
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _release(self, generation: int) -> None:
        """Never leave the panel stuck in LOADING once the latest load ends."""
        if self._is_current(generation) and self._state.loading:
            self._set_state(status=PanelStatus.IDLE)

    def _error_message(self, ex: BaseException) -> str:
        return str(ex) or self.fallback_error

    def _schedule(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait until every scheduled load has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel loads still in flight."""
        tasks = [task for task in self._tasks if not task.done()]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()


class ApodController(PanelController[ApodRecord]):
    """Astronomy Picture of the Day panel."""

    name = "apod"
    fallback_error = APOD_FALLBACK_ERROR

    def __init__(self, gateway: NASAClient, initial_date: Optional[str] = None):
        super().__init__(gateway)
        today = initial_date or get_local_iso_date()
        self._draft = today
        self._committed = today

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def committed(self) -> str:
        return self._committed

    def set_draft(self, value: str) -> None:
        """Keystroke-level edit, never triggers a fetch."""
        self._draft = value

    def submit(self) -> bool:
        """
        Commit the draft date and schedule a load.

        Only an empty draft is refused. Future or malformed dates go to the
        gateway untouched and fail there.
        """
        if not self._draft:
            _LOG.debug("Ignoring APOD submit with empty date")
            return False

        self._committed = self._draft
        _LOG.info("APOD date committed: %s", self._committed)
        self._schedule(self.load(self._committed))
        return True

    def start(self) -> asyncio.Task:
        """Load the committed date at startup."""
        return self._schedule(self.load(self._committed))

    async def load(self, date: str) -> None:
        generation = self._begin_load()
        self._set_state(status=PanelStatus.LOADING, error="")
        try:
            try:
                record = await self._gateway.fetch_apod(date)
            except Exception as ex:
                if not self._is_current(generation):
                    _LOG.debug("Discarding stale APOD failure for %s", date)
                    return
                _LOG.warning("APOD load failed for %s: %s", date, ex)
                self._set_state(
                    status=PanelStatus.FAILED,
                    payload=None,
                    error=self._error_message(ex),
                )
                return

            if not self._is_current(generation):
                _LOG.debug("Discarding stale APOD result for %s", date)
                return
            self._set_state(status=PanelStatus.LOADED, payload=record, error="")
        finally:
            self._release(generation)


class RoverController(PanelController[RoverTelemetry]):
    """Mars rover photos and mission manifest panel."""

    name = "rover"
    fallback_error = ROVER_FALLBACK_ERROR

    def __init__(self, gateway: NASAClient, initial_query: RoverQuery):
        super().__init__(gateway)
        self._draft_rover = initial_query.rover
        self._draft_sol = str(initial_query.sol)
        self._committed = initial_query

    @property
    def draft_rover(self) -> str:
        return self._draft_rover

    @property
    def draft_sol(self) -> str:
        return self._draft_sol

    @property
    def committed(self) -> RoverQuery:
        return self._committed

    def set_draft_rover(self, rover_id: str) -> bool:
        if rover_id not in ROVERS:
            _LOG.warning("Unknown rover: %s", rover_id)
            return False
        self._draft_rover = rover_id
        return True

    def set_draft_sol(self, text: str) -> None:
        self._draft_sol = text

    def submit(self) -> bool:
        """
        Validate the draft and commit it.

        An empty sol only sets a notice and suppresses the commit; anything
        else is normalized into range and committed with the drafted rover.
        """
        sol = normalize_sol(self._draft_sol)
        if sol is None:
            self._set_state(notice=SOL_REQUIRED_NOTICE)
            return False

        self._committed = RoverQuery(rover=self._draft_rover, sol=sol)
        _LOG.info("Rover query committed: %s sol %d", self._committed.rover, sol)
        self._schedule(self.load(self._committed))
        return True

    def start(self) -> asyncio.Task:
        """Load the committed query at startup."""
        return self._schedule(self.load(self._committed))

    async def load(self, query: RoverQuery) -> None:
        generation = self._begin_load()
        self._set_state(status=PanelStatus.LOADING, error="", notice="")
        try:
            # both requests must settle before the panel changes
            photos, manifest = await asyncio.gather(
                self._gateway.fetch_rover_photos(query.rover, query.sol),
                self._gateway.fetch_rover_manifest(query.rover),
                return_exceptions=True,
            )

            if not self._is_current(generation):
                _LOG.debug("Discarding stale rover result for %s sol %d", query.rover, query.sol)
                return

            for result in (photos, manifest):
                if isinstance(result, asyncio.CancelledError):
                    raise result

            # photo failure wins when both requests failed
            failure = next(
                (result for result in (photos, manifest) if isinstance(result, Exception)),
                None,
            )
            previous = self._state.payload or RoverTelemetry()
            if failure is not None:
                _LOG.warning("Rover load failed for %s sol %d: %s", query.rover, query.sol, failure)
                self._set_state(
                    status=PanelStatus.FAILED,
                    payload=RoverTelemetry(photos=(), manifest=previous.manifest),
                    error=self._error_message(failure),
                )
                return

            changes = dict(
                status=PanelStatus.LOADED,
                payload=RoverTelemetry(photos=tuple(photos), manifest=manifest),
                error="",
            )
            # a notice raised since the load started survives a non-empty result
            if not photos:
                changes["notice"] = NO_PHOTOS_NOTICE
            self._set_state(**changes)
        finally:
            self._release(generation)
