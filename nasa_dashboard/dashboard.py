"""
NASA Mission Control dashboard shell.

Wires the request gateway to both panel controllers and routes commands
coming from the presentation layer.

:copyright: (c) 2025 by Meir Miyara.
:license: MPL-2.0, see LICENSE for more details.
"""

import asyncio
import logging
from enum import IntEnum
from typing import Any, Optional

from nasa_dashboard.client import NASAClient
from nasa_dashboard.config import Config
from nasa_dashboard.controllers import ApodController, RoverController
from nasa_dashboard.formatting import normalize_sol
from nasa_dashboard.models import RoverQuery

_LOG = logging.getLogger(__name__)


class Commands:
    """Command identifiers accepted by :meth:`Dashboard.handle_command`."""

    SET_APOD_DRAFT = "set_apod_draft"
    SUBMIT_APOD = "submit_apod"
    SET_ROVER_DRAFT_ROVER = "set_rover_draft_rover"
    SET_ROVER_DRAFT_SOL = "set_rover_draft_sol"
    SUBMIT_ROVER = "submit_rover"


class StatusCodes(IntEnum):
    OK = 200
    BAD_REQUEST = 400
    NOT_FOUND = 404
    NOT_IMPLEMENTED = 501


class Dashboard:
    """APOD and Mars rover panels sharing one NASA client."""

    def __init__(self, config: Config, client: Optional[NASAClient] = None):
        """
        Build both panels.

        :param config: dashboard configuration
        :param client: gateway override, a :class:`NASAClient` is created when omitted
        """
        self._config = config
        self._client = client or NASAClient(config)

        initial_sol = normalize_sol(config.default_sol)
        self.apod = ApodController(self._client)
        self.rover = RoverController(
            self._client,
            RoverQuery(rover=config.default_rover, sol=initial_sol if initial_sol is not None else 0),
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def start(self) -> None:
        """Kick off the startup loads for both panels. Needs a running loop."""
        _LOG.info("Starting NASA Mission Control dashboard")
        self.apod.start()
        self.rover.start()

    async def wait_idle(self) -> None:
        """Wait for every load currently scheduled on either panel."""
        await asyncio.gather(self.apod.wait_idle(), self.rover.wait_idle())

    async def close(self) -> None:
        """Cancel outstanding loads and close the HTTP session."""
        _LOG.debug("Shutting down NASA Mission Control dashboard")
        await self.apod.shutdown()
        await self.rover.shutdown()
        close = getattr(self._client, "close", None)
        if close is not None:
            await close()

    def set_apod_draft(self, date: str) -> None:
        self.apod.set_draft(date)

    def submit_apod(self) -> bool:
        return self.apod.submit()

    def set_rover_draft_rover(self, rover_id: str) -> bool:
        return self.rover.set_draft_rover(rover_id)

    def set_rover_draft_sol(self, text: str) -> None:
        self.rover.set_draft_sol(text)

    def submit_rover(self) -> bool:
        return self.rover.submit()

    async def handle_command(self, cmd_id: str, params: dict[str, Any] | None = None) -> StatusCodes:
        """Route a presentation-layer command by identifier."""
        _LOG.debug("COMMAND: %s", cmd_id)
        params = params or {}

        if cmd_id == Commands.SET_APOD_DRAFT:
            if "date" not in params:
                return StatusCodes.BAD_REQUEST
            self.set_apod_draft(params["date"])
            return StatusCodes.OK
        elif cmd_id == Commands.SUBMIT_APOD:
            return StatusCodes.OK if self.submit_apod() else StatusCodes.BAD_REQUEST
        elif cmd_id == Commands.SET_ROVER_DRAFT_ROVER:
            if "rover" not in params:
                return StatusCodes.BAD_REQUEST
            return StatusCodes.OK if self.set_rover_draft_rover(params["rover"]) else StatusCodes.NOT_FOUND
        elif cmd_id == Commands.SET_ROVER_DRAFT_SOL:
            if "sol" not in params:
                return StatusCodes.BAD_REQUEST
            self.set_rover_draft_sol(str(params["sol"]))
            return StatusCodes.OK
        elif cmd_id == Commands.SUBMIT_ROVER:
            return StatusCodes.OK if self.submit_rover() else StatusCodes.BAD_REQUEST
        else:
            _LOG.warning("Unexpected command: %s", cmd_id)
            return StatusCodes.NOT_IMPLEMENTED
