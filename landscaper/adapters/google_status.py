"""Google Maps web service status codes → provider error taxonomy."""

from __future__ import annotations

from landscaper.application.errors import ProviderUnavailableError, TransientProviderError

PROVIDER = "Google Maps"

# Statuses meaning "this item has no answer"
NOT_FOUND_STATUSES = {"ZERO_RESULTS", "NOT_FOUND", "INVALID_REQUEST", "MAX_ROUTE_LENGTH_EXCEEDED"}
# Statuses worth retrying
TRANSIENT_STATUSES = {"OVER_QUERY_LIMIT", "UNKNOWN_ERROR"}
# Statuses meaning the key / account cannot be used
FATAL_STATUSES = {"REQUEST_DENIED", "OVER_DAILY_LIMIT"}


def check_status(status: str, error_message: str | None = None) -> bool:
    """Return True for OK, False for a per-item miss, raise otherwise."""
    if status == "OK":
        return True
    if status in FATAL_STATUSES:
        raise ProviderUnavailableError(PROVIDER, error_message or status)
    if status in TRANSIENT_STATUSES:
        raise TransientProviderError(f"{PROVIDER} status {status}")
    return False
