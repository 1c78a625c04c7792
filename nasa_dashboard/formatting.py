"""
Formatting and input helpers for NASA Mission Control dashboard.

:copyright: (c) 2025 by Meir Miyara.
:license: MPL-2.0, see LICENSE for more details.
"""

import math
from datetime import date, datetime
from typing import List, Optional, Sequence, Union

from nasa_dashboard.config import MAX_SOL, PHOTO_DISPLAY_LIMIT, ROVERS
from nasa_dashboard.models import ApodRecord, PanelState, RoverPhoto, RoverTelemetry

APOD_LOADING_LABEL = "Fetching today's cosmos..."
ROVER_LOADING_LABEL = "Calling mission control..."


def get_local_iso_date(now: Optional[datetime] = None) -> str:
    """
    Return ``now`` as a ``YYYY-MM-DD`` string in the viewer's local timezone.

    Aware datetimes are shifted into local time before the date is taken, so
    an instant stored in UTC still lands on the viewer's calendar day.
    """
    if now is None:
        now = datetime.now()
    elif now.tzinfo is not None:
        now = now.astimezone()
    return now.date().isoformat()


def format_pretty_date(iso_date: str) -> str:
    """Render an ISO date as e.g. ``January 5, 2024``. Display only."""
    try:
        parsed = date.fromisoformat(iso_date[:10])
    except (TypeError, ValueError):
        return iso_date
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def format_count(value: int) -> str:
    return f"{value:,}"


def normalize_sol(value: Union[str, int, float, None]) -> Optional[int]:
    """
    Coerce sol input into the ``[0, MAX_SOL]`` range.

    Returns None for empty input, meaning the commit must be suppressed.
    Non-numeric text becomes 0, fractions are truncated and out-of-range
    values are clamped rather than rejected.
    """
    if value is None:
        return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            number = 0.0
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = 0.0

    if math.isnan(number):
        number = 0.0
    return int(min(MAX_SOL, max(0.0, number)))


def visible_photos(photos: Sequence[RoverPhoto]) -> List[RoverPhoto]:
    """Photos shown in the grid; the full list stays in the panel state."""
    return list(photos[:PHOTO_DISPLAY_LIMIT])


def describe_apod_panel(state: PanelState[ApodRecord]) -> List[str]:
    """Text rendering of the APOD panel."""
    lines = []
    if state.loading:
        lines.append(APOD_LOADING_LABEL)
    if state.error:
        lines.append(f"Error: {state.error}")

    record = state.payload
    if not state.loading and record is not None:
        kind = "Video" if record.is_video else "Image"
        lines.append(f"{record.title} ({format_pretty_date(record.date)})")
        lines.append(f"{kind}: {record.url}")
        if record.copyright:
            lines.append(f"© {record.copyright}")
        lines.append(record.explanation)
    return lines


def describe_rover_panel(state: PanelState[RoverTelemetry]) -> List[str]:
    """Text rendering of the rover telemetry panel."""
    lines = []
    if state.loading:
        lines.append(ROVER_LOADING_LABEL)
    if state.error:
        lines.append(f"Error: {state.error}")
    if not state.loading and not state.error and state.notice:
        lines.append(state.notice)

    telemetry = state.payload or RoverTelemetry()
    manifest = telemetry.manifest
    if manifest is not None:
        rover_name = ROVERS.get(manifest.name.lower(), {}).get("name", manifest.name)
        lines.append(f"{rover_name} mission")
        lines.append(f"  Launch: {format_pretty_date(manifest.launch_date)}")
        lines.append(f"  Landing: {format_pretty_date(manifest.landing_date)}")
        lines.append(f"  Status: {manifest.status.upper()}")
        lines.append(f"  Max Sol: {manifest.max_sol}")
        lines.append(f"  Max Date: {format_pretty_date(manifest.max_date)}")
        lines.append(f"  Total Photos: {format_count(manifest.total_photos)}")

    for photo in visible_photos(telemetry.photos):
        lines.append(
            f"{photo.camera.full_name} | Sol {photo.sol} | {format_pretty_date(photo.earth_date)}"
        )
    return lines
