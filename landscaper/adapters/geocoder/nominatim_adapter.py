"""Nominatim geocoder adapter — implements GeocoderPort."""

from __future__ import annotations

import logging

import httpx

from landscaper.adapters.http_retry import call_with_retries, raise_for_provider_status
from landscaper.application.errors import TransientProviderError
from landscaper.application.ports.geocoder_port import GeocoderPort
from landscaper.config import settings
from landscaper.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
PROVIDER = "Nominatim"


class NominatimAdapter(GeocoderPort):
    """Nominatim geocoding with a broader-query fallback and caching."""

    def __init__(
        self,
        user_agent: str | None = None,
        country_codes: str = "us",
        transport: httpx.AsyncBaseTransport | None = None,
        max_attempts: int | None = None,
        backoff_seconds: float | None = None,
    ):
        self._user_agent = user_agent or settings.geocoder_user_agent
        self._country_codes = country_codes
        self._transport = transport
        self._max_attempts = max_attempts or settings.provider_max_attempts
        self._backoff = settings.provider_backoff_seconds if backoff_seconds is None else backoff_seconds
        self._cache: dict[str, GeoPoint | None] = {}

    async def geocode(self, address: str) -> GeoPoint | None:
        """Geocode an address string to GeoPoint.

        Strategy:
        1. Check in-memory cache
        2. Try the full address
        3. Try the address without its street line (city / state / zip)
        """
        cache_key = address.strip().lower()

        if cache_key in self._cache:
            logger.debug("Cache hit for '%s'", address)
            return self._cache[cache_key]

        try:
            point = None
            for query in self._build_queries(address):
                point = await call_with_retries(
                    PROVIDER,
                    lambda q=query: self._search(q),
                    max_attempts=self._max_attempts,
                    backoff_seconds=self._backoff,
                )
                if point:
                    logger.info("Nominatim resolved '%s' (q='%s') → (%f, %f)", address, query, point.latitude, point.longitude)
                    break
        except (TransientProviderError, httpx.HTTPStatusError):
            logger.exception("Nominatim API error for '%s'", address)
            return None
        except (ValueError, KeyError, IndexError, TypeError):
            logger.exception("Nominatim sent a malformed response for '%s'", address)
            return None

        if point is None:
            logger.warning("No geocoding result for '%s'", address)
        self._cache[cache_key] = point
        return point

    async def _search(self, query: str) -> GeoPoint | None:
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.get(
                NOMINATIM_URL,
                params={
                    "q": query,
                    "format": "json",
                    "limit": 1,
                    "countrycodes": self._country_codes,
                },
                headers={"User-Agent": self._user_agent},
                timeout=settings.provider_timeout_seconds,
            )
            if response.is_error:
                raise_for_provider_status(PROVIDER, response)
            results = response.json()

        if not results:
            return None
        return GeoPoint(latitude=float(results[0]["lat"]), longitude=float(results[0]["lon"]))

    @staticmethod
    def _build_queries(address: str) -> list[str]:
        """Build a few query variants for better hit rate.

        1) full address
        2) without the street part (city, state zip), which still lands
           inside the right town when the street is unknown to OSM
        """
        q1 = address.strip()
        queries = [q1]
        parts = [p.strip() for p in q1.split(",") if p.strip()]
        if len(parts) > 2:
            queries.append(", ".join(parts[1:]))
        return queries
