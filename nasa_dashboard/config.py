"""
Configuration management for NASA Mission Control dashboard.

:copyright: (c) 2025 by Meir Miyara.
:license: MPL-2.0, see LICENSE for more details.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

_LOG = logging.getLogger(__name__)

DEMO_API_KEY = "DEMO_KEY"
MAX_SOL = 5000
PHOTO_DISPLAY_LIMIT = 6

DEFAULT_CONFIG = {
    "api_key": "",
    "base_url": "https://api.nasa.gov",
    "request_timeout": 15,
    "default_rover": "curiosity",
    "default_sol": 1000
}

ROVERS = {
    "curiosity": {
        "name": "Curiosity"
    },
    "perseverance": {
        "name": "Perseverance"
    },
    "opportunity": {
        "name": "Opportunity"
    },
    "spirit": {
        "name": "Spirit"
    }
}


class Config:
    """Configuration management for the dashboard."""

    def __init__(self, config_file_path: Optional[str] = None):
        """Initialize configuration."""
        if config_file_path is None:
            config_file_path = os.environ.get("NASA_DASHBOARD_CONFIG")
        self._config_file_path = config_file_path
        self._config: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        """Load configuration from file, falling back to defaults."""
        self._config = DEFAULT_CONFIG.copy()
        if not self._config_file_path:
            _LOG.info("No configuration file given, using defaults")
            return

        try:
            if os.path.exists(self._config_file_path):
                with open(self._config_file_path, "r", encoding="utf-8") as file:
                    self._config.update(json.load(file))
                    _LOG.info("Configuration loaded from %s", self._config_file_path)
            else:
                _LOG.info("Configuration file not found, using defaults")
        except (OSError, ValueError) as ex:
            _LOG.error("Failed to load configuration: %s", ex)
            self._config = DEFAULT_CONFIG.copy()

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value."""
        self._config[key] = value

    @property
    def api_key(self) -> str:
        """Get NASA API key, the NASA_API_KEY environment variable wins."""
        return os.environ.get("NASA_API_KEY") or self._config.get("api_key", "")

    @property
    def base_url(self) -> str:
        """Get API base URL without trailing slash."""
        return str(self._config.get("base_url", DEFAULT_CONFIG["base_url"])).rstrip("/")

    @property
    def request_timeout(self) -> float:
        """Get total request timeout in seconds."""
        return float(self._config.get("request_timeout", 15))

    @property
    def default_rover(self) -> str:
        """Get the rover committed at startup."""
        rover = self._config.get("default_rover", "curiosity")
        if rover not in ROVERS:
            _LOG.warning("Unknown default rover %r, using curiosity", rover)
            return "curiosity"
        return rover

    @property
    def default_sol(self) -> int:
        """Get the sol committed at startup."""
        return self._config.get("default_sol", 1000)
