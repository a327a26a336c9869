"""TravelEstimate value object — one origin→destination driving estimate."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TravelEstimate:
    """Distance and duration of a single drive.

    The numeric magnitudes are what totals are accumulated from; the text
    fields are whatever the provider (or our formatter) rendered for display.
    """

    distance_meters: float
    duration_seconds: float
    distance_text: str
    duration_text: str
