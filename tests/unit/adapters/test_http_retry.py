"""Tests for call_with_retries."""

import httpx
import pytest

from landscaper.adapters import http_retry
from landscaper.adapters.http_retry import call_with_retries, raise_for_provider_status
from landscaper.application.errors import ProviderUnavailableError, TransientProviderError


@pytest.fixture
def sleeps(monkeypatch):
    """Capture backoff delays instead of sleeping."""
    delays: list[float] = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr(http_retry.asyncio, "sleep", fake_sleep)
    return delays


def _failing(*errors, result="ok"):
    queue = list(errors)

    async def call():
        if queue:
            raise queue.pop(0)
        return result

    return call


@pytest.mark.asyncio
async def test_success_first_try(sleeps):
    assert await call_with_retries("P", _failing()) == "ok"
    assert sleeps == []


@pytest.mark.asyncio
async def test_transient_then_success_backs_off_exponentially(sleeps):
    call = _failing(TransientProviderError("429"), TransientProviderError("429"))
    assert await call_with_retries("P", call, max_attempts=3, backoff_seconds=0.5) == "ok"
    assert sleeps == [0.5, 1.0]


@pytest.mark.asyncio
async def test_transient_exhausted_raises_transient(sleeps):
    call = _failing(*[TransientProviderError("503")] * 5)
    with pytest.raises(TransientProviderError):
        await call_with_retries("P", call, max_attempts=3, backoff_seconds=1)
    assert sleeps == [1, 2]


@pytest.mark.asyncio
async def test_timeout_exhausted_is_transient(sleeps):
    call = _failing(*[httpx.ReadTimeout("slow")] * 2)
    with pytest.raises(TransientProviderError):
        await call_with_retries("P", call, max_attempts=2)


@pytest.mark.asyncio
async def test_unreachable_exhausted_is_unavailable(sleeps):
    call = _failing(*[httpx.ConnectError("refused")] * 3)
    with pytest.raises(ProviderUnavailableError):
        await call_with_retries("P", call, max_attempts=3)


@pytest.mark.asyncio
async def test_connect_timeout_exhausted_is_unavailable(sleeps):
    call = _failing(*[httpx.ConnectTimeout("no answer")] * 3)
    with pytest.raises(ProviderUnavailableError, match="unreachable"):
        await call_with_retries("P", call, max_attempts=3, backoff_seconds=1)
    assert sleeps == [1, 2]


@pytest.mark.asyncio
async def test_pool_timeout_exhausted_is_transient(sleeps):
    call = _failing(*[httpx.PoolTimeout("busy")] * 2)
    with pytest.raises(TransientProviderError):
        await call_with_retries("P", call, max_attempts=2)


@pytest.mark.asyncio
async def test_connect_error_then_success(sleeps):
    call = _failing(httpx.ConnectError("refused"))
    assert await call_with_retries("P", call, max_attempts=3) == "ok"


@pytest.mark.asyncio
async def test_unavailable_is_not_retried(sleeps):
    attempts = []

    async def call():
        attempts.append(1)
        raise ProviderUnavailableError("P", "denied")

    with pytest.raises(ProviderUnavailableError):
        await call_with_retries("P", call, max_attempts=5)
    assert len(attempts) == 1
    assert sleeps == []


def test_raise_for_provider_status_classification():
    request = httpx.Request("GET", "https://example.test")
    with pytest.raises(ProviderUnavailableError):
        raise_for_provider_status("P", httpx.Response(401, request=request))
    with pytest.raises(TransientProviderError):
        raise_for_provider_status("P", httpx.Response(502, request=request))
    with pytest.raises(httpx.HTTPStatusError):
        raise_for_provider_status("P", httpx.Response(400, request=request))
