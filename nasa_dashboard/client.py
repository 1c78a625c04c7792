"""
NASA API client used as the dashboard's request gateway.

:copyright: (c) 2025 by Meir Miyara.
:license: MPL-2.0, see LICENSE for more details.
"""

import asyncio
import logging
import ssl
from typing import Any, Dict, List, Optional

import aiohttp
import certifi

from nasa_dashboard.config import DEMO_API_KEY, Config
from nasa_dashboard.models import ApodRecord, RoverManifest, RoverPhoto

_LOG = logging.getLogger(__name__)


class NASAClientError(Exception):
    """Base error for failed gateway calls."""


class TransportError(NASAClientError):
    """Request never produced a usable response (network, timeout, bad payload)."""


class HttpError(NASAClientError):
    """Remote answered with a non-success status."""

    def __init__(self, friendly_name: str, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(
            f"{friendly_name} request failed ({status}): {body or 'Unknown error'}"
        )


class NASAClient:
    """NASA API client for APOD and Mars rover data."""

    def __init__(self, config: Config):
        """Initialize NASA client."""
        self._config = config
        self._session: Optional[aiohttp.ClientSession] = None
        self._api_key = self._resolve_api_key()
        self._base_url = config.base_url

    async def __aenter__(self):
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> None:
        """Ensure aiohttp session exists."""
        if self._session is None or self._session.closed:
            ssl_context = ssl.create_default_context(cafile=certifi.where())
            ssl_context.check_hostname = True
            ssl_context.verify_mode = ssl.CERT_REQUIRED

            connector = aiohttp.TCPConnector(
                ssl=ssl_context,
                limit=10,
                limit_per_host=5,
                ttl_dns_cache=300,
            )

            timeout = aiohttp.ClientTimeout(
                total=self._config.request_timeout,
                connect=5
            )

            headers = {
                'User-Agent': 'NASA-Mission-Control-Dashboard',
                'Accept': 'application/json'
            }

            self._session = aiohttp.ClientSession(
                timeout=timeout,
                connector=connector,
                headers=headers
            )

            _LOG.info("🌐 NASA HTTP session created with SSL verification")

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    def _resolve_api_key(self) -> str:
        """Resolve the API key once, falling back to the public demo key."""
        api_key = self._config.api_key
        if not api_key:
            _LOG.warning("No NASA API key configured, using rate-limited %s", DEMO_API_KEY)
            return DEMO_API_KEY
        return api_key

    async def _make_request(self, path: str, friendly_name: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Issue a GET against the NASA API and return the decoded JSON body.

        :raises HttpError: remote answered with a non-2xx status
        :raises TransportError: connection failure, timeout or undecodable body
        """
        await self._ensure_session()

        url = f"{self._base_url}{path}"
        query = {"api_key": self._api_key}
        if params:
            query.update(params)

        _LOG.debug("Making request to %s", url)
        try:
            async with self._session.get(url, params=query) as response:
                _LOG.debug("Response: HTTP %s from %s", response.status, url)
                if response.status >= 400:
                    body = await response.text()
                    raise HttpError(friendly_name, response.status, body)
                # NASA occasionally serves JSON without the proper content-type
                return await response.json(content_type=None)
        except asyncio.TimeoutError as ex:
            raise TransportError(f"{friendly_name} request failed: timed out") from ex
        except ValueError as ex:
            raise TransportError(f"{friendly_name} request failed: invalid JSON response") from ex
        except aiohttp.ClientError as ex:
            raise TransportError(f"{friendly_name} request failed: {ex}") from ex

    async def fetch_apod(self, date: Optional[str] = None) -> ApodRecord:
        """Fetch the Astronomy Picture of the Day, today's when ``date`` is empty."""
        params = {"date": date} if date else None
        data = await self._make_request("/planetary/apod", "APOD", params)
        if not isinstance(data, dict):
            raise TransportError("APOD request failed: unexpected response format")

        record = ApodRecord.from_api(data)
        _LOG.info("APOD data fetched: %s", record.title[:30])
        return record

    async def fetch_rover_photos(self, rover: str, sol: int) -> List[RoverPhoto]:
        """Fetch the photos a rover took on ``sol``, in API order."""
        data = await self._make_request(
            f"/mars-photos/api/v1/rovers/{rover}/photos", "Mars photos", {"sol": str(sol)}
        )
        try:
            photos = [RoverPhoto.from_api(item) for item in data["photos"]]
        except (KeyError, TypeError, AttributeError) as ex:
            raise TransportError("Mars photos request failed: unexpected response format") from ex

        _LOG.info("Mars data fetched: %s Sol %d, %d images", rover.title(), sol, len(photos))
        return photos

    async def fetch_rover_manifest(self, rover: str) -> RoverManifest:
        """Fetch the mission manifest for a rover."""
        data = await self._make_request(
            f"/mars-photos/api/v1/manifests/{rover}", "Mars mission manifest"
        )
        try:
            manifest = RoverManifest.from_api(data["photo_manifest"])
        except (KeyError, TypeError, AttributeError) as ex:
            raise TransportError("Mars mission manifest request failed: unexpected response format") from ex

        _LOG.info("Mars manifest fetched: %s (%s)", rover.title(), manifest.status)
        return manifest
