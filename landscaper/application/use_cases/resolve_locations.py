"""JobsToLocationsUseCase — turn scheduled jobs into geocoded route stops."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from landscaper.application.ports.geocoder_port import GeocoderPort
from landscaper.domain.entities.job import Job
from landscaper.domain.entities.location import Location

logger = logging.getLogger(__name__)


@dataclass
class ResolvedLocations:
    """Geocoded stops plus the ids of jobs that could not be placed on a map."""

    locations: list[Location] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)


class JobsToLocationsUseCase:
    """Resolve each job's site address and geocode it.

    The custom address block in the job description wins over the client's
    stored address. Jobs that cannot be geocoded are dropped from
    ``locations`` and reported in ``unresolved``; they are never returned
    with empty coordinates. Unscheduled jobs are never geocoded.

    The first error raised by the geocoder (e.g. ProviderUnavailableError)
    cancels the lookups still waiting or in flight and is re-raised.
    """

    def __init__(self, geocoder: GeocoderPort, concurrency: int = 5):
        self._geocoder = geocoder
        self._concurrency = max(1, concurrency)

    async def execute(self, jobs: Sequence[Job]) -> ResolvedLocations:
        semaphore = asyncio.Semaphore(self._concurrency)

        async def resolve(job: Job) -> Location | None:
            if job.start_date is None:
                logger.warning("Job %s is not scheduled, skipping", job.id)
                return None

            address = job.site_address()
            if not address:
                logger.warning("Job %s has incomplete address information", job.id)
                return None

            async with semaphore:
                point = await self._geocoder.geocode(address)

            if point is None:
                logger.warning("Could not geocode address for job %s: %s", job.id, address)
                return None

            return Location(
                id=job.id,
                name=job.title,
                address=address,
                lat=point.latitude,
                lng=point.longitude,
            )

        result = ResolvedLocations()
        if not jobs:
            return result

        tasks = [asyncio.create_task(resolve(job)) for job in jobs]
        try:
            # Per-job misses come back as None; anything raised is systemic
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            pending = [t for t in tasks if not t.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.wait(pending)

        for task in tasks:
            if not task.cancelled() and task.exception() is not None:
                raise task.exception()

        for job, task in zip(jobs, tasks):
            location = task.result()
            if location is None:
                result.unresolved.append(job.id)
            else:
                result.locations.append(location)

        logger.info(
            "Resolved %d/%d job locations", len(result.locations), len(jobs),
        )
        return result
