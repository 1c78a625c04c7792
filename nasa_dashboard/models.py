"""
Data records and panel state for NASA Mission Control dashboard.

:copyright: (c) 2025 by Meir Miyara.
:license: MPL-2.0, see LICENSE for more details.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RoverQuery:
    """Committed rover selection driving a telemetry fetch."""

    rover: str
    sol: int


@dataclass(frozen=True)
class ApodRecord:
    """Astronomy Picture of the Day entry."""

    title: str
    date: str
    explanation: str
    media_type: str
    url: str
    hdurl: Optional[str] = None
    copyright: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ApodRecord":
        """Build record from APOD JSON payload."""
        return cls(
            title=data.get("title", ""),
            date=data.get("date", ""),
            explanation=data.get("explanation", ""),
            media_type=data.get("media_type", "image"),
            url=data.get("url", ""),
            hdurl=data.get("hdurl"),
            copyright=str(data.get("copyright") or "").strip() or None,
        )

    @property
    def is_video(self) -> bool:
        return self.media_type == "video"


@dataclass(frozen=True)
class RoverCamera:
    name: str
    full_name: str


@dataclass(frozen=True)
class RoverPhoto:
    """Single Mars rover photo."""

    id: int
    img_src: str
    sol: int
    earth_date: str
    camera: RoverCamera

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RoverPhoto":
        camera = data.get("camera") or {}
        return cls(
            id=data["id"],
            img_src=data.get("img_src", ""),
            sol=data.get("sol", 0),
            earth_date=data.get("earth_date", ""),
            camera=RoverCamera(
                name=camera.get("name", ""),
                full_name=camera.get("full_name", ""),
            ),
        )


@dataclass(frozen=True)
class RoverManifest:
    """Aggregate mission metadata for a rover."""

    name: str
    launch_date: str
    landing_date: str
    status: str
    max_sol: int
    max_date: str
    total_photos: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RoverManifest":
        """Build manifest from the ``photo_manifest`` object."""
        return cls(
            name=data.get("name", ""),
            launch_date=data.get("launch_date", ""),
            landing_date=data.get("landing_date", ""),
            status=data.get("status", ""),
            max_sol=data.get("max_sol", 0),
            max_date=data.get("max_date", ""),
            total_photos=data.get("total_photos", 0),
        )


@dataclass(frozen=True)
class RoverTelemetry:
    """Rover panel payload: photo list plus last known manifest."""

    photos: Tuple[RoverPhoto, ...] = ()
    manifest: Optional[RoverManifest] = None


class PanelStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class PanelState(Generic[T]):
    """
    Immutable snapshot of one dashboard panel.

    ``notice`` is advisory and independent of ``status``: an empty but
    successful result is LOADED with a notice, never FAILED.
    """

    status: PanelStatus = PanelStatus.IDLE
    payload: Optional[T] = None
    error: str = ""
    notice: str = ""

    @property
    def loading(self) -> bool:
        return self.status is PanelStatus.LOADING

    @property
    def failed(self) -> bool:
        return self.status is PanelStatus.FAILED
