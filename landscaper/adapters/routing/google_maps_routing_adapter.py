"""Google Maps routing adapter — Directions + Distance Matrix, implements RoutingPort."""

from __future__ import annotations

import logging

import httpx

from landscaper.adapters.google_status import PROVIDER, check_status
from landscaper.adapters.http_retry import call_with_retries, raise_for_provider_status
from landscaper.application.errors import ProviderUnavailableError, TransientProviderError
from landscaper.application.ports.routing_port import RoutingPort
from landscaper.config import settings
from landscaper.domain.value_objects.geo_point import GeoPoint
from landscaper.domain.value_objects.travel import TravelEstimate

logger = logging.getLogger(__name__)

GOOGLE_DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"
GOOGLE_DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"


def _estimate_from(element: dict) -> TravelEstimate:
    """Build an estimate from a leg / matrix element with distance + duration."""
    return TravelEstimate(
        distance_meters=float(element["distance"]["value"]),
        duration_seconds=float(element["duration"]["value"]),
        distance_text=element["distance"]["text"],
        duration_text=element["duration"]["text"],
    )


class GoogleMapsRoutingAdapter(RoutingPort):
    """Driving estimates from the Google Maps web services."""

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

    async def route_between(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> TravelEstimate | None:
        params = {
            "origin": origin.as_query(),
            "destination": destination.as_query(),
            "mode": "driving",
        }
        try:
            data = await self._get(GOOGLE_DIRECTIONS_URL, params)
            if not check_status(data["status"], data.get("error_message")):
                logger.warning("Directions request returned %s for %s → %s", data["status"], params["origin"], params["destination"])
                return None
            return _estimate_from(data["routes"][0]["legs"][0])
        except (TransientProviderError, httpx.HTTPStatusError):
            logger.exception("Directions request failed for %s → %s", params["origin"], params["destination"])
            return None
        except (ValueError, KeyError, IndexError, TypeError, AttributeError):
            logger.exception("Malformed directions response for %s → %s", params["origin"], params["destination"])
            return None

    async def distance_matrix(
        self, origin: GeoPoint, destinations: list[GeoPoint]
    ) -> list[TravelEstimate | None]:
        if not destinations:
            return []

        params = {
            "origins": origin.as_query(),
            "destinations": "|".join(d.as_query() for d in destinations),
            "mode": "driving",
        }
        try:
            data = await self._get(GOOGLE_DISTANCE_MATRIX_URL, params)
            if not check_status(data["status"], data.get("error_message")):
                logger.warning("Distance matrix request returned %s", data["status"])
                return [None] * len(destinations)
            elements = data["rows"][0]["elements"]
            if len(elements) != len(destinations):
                logger.warning(
                    "Distance matrix returned %d elements for %d destinations",
                    len(elements), len(destinations),
                )
                return [None] * len(destinations)
            return [
                _estimate_from(e) if e.get("status") == "OK" else None
                for e in elements
            ]
        except (TransientProviderError, httpx.HTTPStatusError):
            logger.exception("Distance matrix request failed from %s", params["origins"])
            return [None] * len(destinations)
        except (ValueError, KeyError, IndexError, TypeError, AttributeError):
            logger.exception("Malformed distance matrix response from %s", params["origins"])
            return [None] * len(destinations)

    async def _get(self, url: str, params: dict[str, str]) -> dict:
        if not self._api_key:
            raise ProviderUnavailableError(PROVIDER, "API key is not set")

        async def call() -> dict:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    url,
                    params={**params, "key": self._api_key},
                    timeout=settings.provider_timeout_seconds,
                )
                if response.is_error:
                    raise_for_provider_status(PROVIDER, response)
                data = response.json()
            # Retry over-limit answers too, they arrive as HTTP 200
            if data.get("status") in ("OVER_QUERY_LIMIT", "UNKNOWN_ERROR"):
                check_status(data["status"])
            return data

        return await call_with_retries(
            PROVIDER, call, max_attempts=self._max_attempts, backoff_seconds=self._backoff,
        )
