#!/usr/bin/env python3
"""
NASA Mission Control dashboard driver.

:copyright: (c) 2025 by Meir Miyara.
:license: MPL-2.0, see LICENSE for more details.
"""
import logging

from nasa_dashboard.config import Config
from nasa_dashboard.dashboard import Dashboard
from nasa_dashboard.formatting import describe_apod_panel, describe_rover_panel

_LOG = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)8s | %(name)s | %(message)s"
    )
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def log_panels(dashboard: Dashboard) -> None:
    """Write a text rendering of both panels to the log."""
    for line in describe_apod_panel(dashboard.apod.state):
        _LOG.info("[APOD] %s", line)
    for line in describe_rover_panel(dashboard.rover.state):
        _LOG.info("[Mars] %s", line)


async def main():
    """Main entry point."""
    setup_logging()
    _LOG.info("Starting NASA Mission Control Dashboard")

    config = Config()
    async with Dashboard(config) as dashboard:
        dashboard.start()
        await dashboard.wait_idle()
        log_panels(dashboard)
