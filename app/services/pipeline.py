import asyncio
from dataclasses import replace
from typing import List, Optional

from structlog import get_logger

from app.config import settings
from app.core.errors import (
    DistanceBatchRejected,
    DistanceServiceError,
    OriginUnresolved,
    ProximityError,
    UnexpectedError,
)
from app.core.result import Err, Ok, Result
from app.core.types import Candidate, Location, RankedResult
from app.schemas.closest import ProximityQuery
from app.services.directory import CandidateDirectory
from app.services.distance_matrix import (
    DistanceMatrixBatchRejected,
    DistanceMatrixClient,
    DistanceMatrixServiceError,
)
from app.services.geocode import GeocodeError, GeocodeResolver
from app.services.ranking import rank
from app.services.static_map import StaticMapAnnotator

logger = get_logger()


class ProximityPipeline:
    """
    Resolves the closest clubs for one query:
    origin -> directory snapshot -> one distance matrix call -> rank -> best-effort map images.
    """

    def __init__(
        self,
        geocoder: GeocodeResolver,
        directory: CandidateDirectory,
        distance_client: DistanceMatrixClient,
        annotator: StaticMapAnnotator,
        k: int = None,
        annotation_timeout: float = None,
        annotation_concurrency: int = None,
    ):
        self.geocoder = geocoder
        self.directory = directory
        self.distance_client = distance_client
        self.annotator = annotator
        self.k = settings.CLOSEST_CLUBS_TO_RETURN if k is None else k
        if self.k < 1:
            raise ValueError("k must be a positive integer")
        self.annotation_timeout = annotation_timeout or settings.ANNOTATION_TIMEOUT_SECONDS
        self.annotation_concurrency = annotation_concurrency or settings.ANNOTATION_CONCURRENCY

    async def resolve_closest(self, query: ProximityQuery, k: Optional[int] = None) -> Result[List[RankedResult]]:
        k = self.k if k is None else k
        try:
            results = await self._run(query, k)
        except ProximityError as e:
            logger.warning("Closest clubs lookup failed", kind=e.kind.value, detail=e.detail)
            return Err(e)
        except Exception as e:
            logger.error("Closest clubs lookup failed unexpectedly", error=str(e), exc_info=True)
            return Err(UnexpectedError(str(e)))
        logger.info("Closest clubs resolved", result_count=len(results), k=k)
        return Ok(results)

    async def _run(self, query: ProximityQuery, k: int) -> List[RankedResult]:
        if k < 1:
            raise ValueError("k must be a positive integer")

        origin = await self._resolve_origin(query)

        candidates = await self.directory.fetch_all()
        if not candidates:
            logger.info("Club directory is empty", origin=origin.as_param())
            return []

        try:
            distances = await self.distance_client.compute_distances(origin, [c.location for c in candidates])
        except DistanceMatrixServiceError as e:
            raise DistanceServiceError(str(e)) from e
        except DistanceMatrixBatchRejected as e:
            raise DistanceBatchRejected(str(e)) from e

        ranked = [
            RankedResult(candidate=candidates[i], distance_m=distances[i].distance_m)
            for i in rank(distances, k)
        ]
        return await self._annotate_all(origin, ranked)

    async def _resolve_origin(self, query: ProximityQuery) -> Location:
        if query.coordinates is not None:
            return Location(lat=query.coordinates.lat, lng=query.coordinates.long)
        try:
            return await self.geocoder.resolve(query.address, query.region)
        except GeocodeError as e:
            raise OriginUnresolved(str(e)) from e

    async def _annotate_all(self, origin: Location, ranked: List[RankedResult]) -> List[RankedResult]:
        semaphore = asyncio.Semaphore(self.annotation_concurrency)

        async def bounded(position: int, candidate: Candidate) -> Optional[str]:
            async with semaphore:
                return await self._annotate_one(origin, position, candidate)

        # gather keeps argument order, so images line up with rank positions
        images = await asyncio.gather(*(bounded(pos, r.candidate) for pos, r in enumerate(ranked)))
        return [replace(r, image_url=image) for r, image in zip(ranked, images)]

    async def _annotate_one(self, origin: Location, position: int, candidate: Candidate) -> Optional[str]:
        try:
            return await asyncio.wait_for(
                self.annotator.annotate(origin, candidate.location),
                timeout=self.annotation_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Map image timed out", club_id=candidate.id, rank=position, timeout=self.annotation_timeout)
        except Exception as e:
            logger.warning("Map image failed", club_id=candidate.id, rank=position, error=str(e))
        return None
