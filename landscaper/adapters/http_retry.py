"""Bounded retry with exponential backoff for maps provider calls."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx

from landscaper.application.errors import ProviderUnavailableError, TransientProviderError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# HTTP statuses worth retrying
TRANSIENT_STATUS = {429, 500, 502, 503, 504}
# HTTP statuses meaning the credentials are refused
AUTH_STATUS = {401, 403}


def raise_for_provider_status(provider: str, response: httpx.Response) -> None:
    """Classify a non-2xx response into our provider error taxonomy."""
    if response.status_code in AUTH_STATUS:
        raise ProviderUnavailableError(provider, f"HTTP {response.status_code}")
    if response.status_code in TRANSIENT_STATUS:
        raise TransientProviderError(f"{provider} HTTP {response.status_code}")
    response.raise_for_status()


async def call_with_retries(
    provider: str,
    call: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    backoff_seconds: float = 0.5,
) -> T:
    """Run *call*, retrying transient failures with exponential backoff.

    - TransientProviderError / read, write and pool timeouts are retried;
      once attempts run out the last TransientProviderError is raised.
    - Connection errors and connect timeouts are retried too; if the
      provider is still unreachable afterwards this becomes
      ProviderUnavailableError.
    - ProviderUnavailableError is never retried.
    """
    attempts = max(1, max_attempts)
    for attempt in range(attempts):
        try:
            return await call()
        except ProviderUnavailableError:
            raise
        except httpx.TransportError as e:
            # A connect timeout means no connection at all, same as a refusal
            if isinstance(e, httpx.TimeoutException) and not isinstance(e, httpx.ConnectTimeout):
                last_error: Exception = TransientProviderError(f"{provider} timeout: {e}")
            else:
                last_error = ProviderUnavailableError(provider, f"unreachable: {e}")
            logger.warning("%s call failed (attempt %d/%d): %s", provider, attempt + 1, attempts, e)
        except TransientProviderError as e:
            last_error = e
            logger.warning("%s call failed (attempt %d/%d): %s", provider, attempt + 1, attempts, e)

        # Exponential backoff
        if attempt < attempts - 1:
            await asyncio.sleep(backoff_seconds * (2**attempt))

    raise last_error
