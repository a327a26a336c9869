"""Google Maps geocoder adapter — implements GeocoderPort."""

from __future__ import annotations

import logging

import httpx

from landscaper.adapters.google_status import PROVIDER, check_status
from landscaper.adapters.http_retry import call_with_retries, raise_for_provider_status
from landscaper.application.errors import ProviderUnavailableError, TransientProviderError
from landscaper.application.ports.geocoder_port import GeocoderPort
from landscaper.config import settings
from landscaper.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class GoogleMapsAdapter(GeocoderPort):
    """Google Maps implementation of GeocoderPort."""

    def __init__(
        self,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        max_attempts: int | None = None,
        backoff_seconds: float | None = None,
    ):
        self._api_key = api_key or settings.google_maps_api_key
        self._transport = transport
        self._max_attempts = max_attempts or settings.provider_max_attempts
        self._backoff = settings.provider_backoff_seconds if backoff_seconds is None else backoff_seconds
        self._cache: dict[str, GeoPoint | None] = {}

    async def geocode(self, address: str) -> GeoPoint | None:
        """Geocode address using Google Maps Geocoding API."""
        if not self._api_key:
            raise ProviderUnavailableError(PROVIDER, "API key is not set")

        cache_key = address.strip().lower()
        if cache_key in self._cache:
            return self._cache[cache_key]

        try:
            point = await call_with_retries(
                PROVIDER,
                lambda: self._lookup(address),
                max_attempts=self._max_attempts,
                backoff_seconds=self._backoff,
            )
        except (TransientProviderError, httpx.HTTPStatusError):
            logger.exception("Google Maps geocoding gave up on '%s'", address)
            return None
        except (ValueError, KeyError, IndexError, TypeError):
            logger.exception("Google Maps sent a malformed geocode response for '%s'", address)
            return None

        # Transient failures are not cached, definitive answers are
        self._cache[cache_key] = point
        return point

    async def _lookup(self, address: str) -> GeoPoint | None:
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.get(
                GOOGLE_GEOCODE_URL,
                params={"address": address, "key": self._api_key},
                timeout=settings.provider_timeout_seconds,
            )
            if response.is_error:
                raise_for_provider_status(PROVIDER, response)
            data = response.json()

        if not check_status(data["status"], data.get("error_message")):
            logger.warning("Google Maps could not resolve '%s': %s", address, data["status"])
            return None

        loc = data["results"][0]["geometry"]["location"]
        point = GeoPoint(latitude=loc["lat"], longitude=loc["lng"])
        logger.info("Google Maps resolved '%s' → (%f, %f)", address, point.latitude, point.longitude)
        return point
