"""Display formatting for route distances and durations."""

from __future__ import annotations


def format_distance(meters: float) -> str:
    """Kilometres with one decimal from 1 km up, whole metres below."""
    if meters >= 1000:
        return f"{meters / 1000:.1f} km"
    return f"{meters:.0f} m"


def format_duration(seconds: float) -> str:
    """"H hr M min" when the drive takes an hour or more, else "M min"."""
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    if hours > 0:
        return f"{hours} hr {minutes} min"
    return f"{minutes} min"
