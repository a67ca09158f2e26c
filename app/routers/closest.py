from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_limiter.depends import RateLimiter
from structlog import get_logger

from app.core.errors import ErrorKind
from app.core.result import Err
from app.core.types import RankedResult
from app.dependencies.pipeline import get_pipeline
from app.schemas.closest import ClosestResponse, ClubOut, ProximityQuery
from app.services.intake import region_hint_for
from app.services.pipeline import ProximityPipeline

logger = get_logger()
router = APIRouter(prefix="/api/v1/clubs", tags=["clubs"])

closest_rate_limit = RateLimiter(times=10, seconds=60)

ERROR_STATUS = {
    ErrorKind.origin_unresolved: status.HTTP_404_NOT_FOUND,
    ErrorKind.distance_service_error: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.distance_batch_rejected: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.unexpected_error: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _club_out(item: RankedResult) -> ClubOut:
    club = item.candidate
    return ClubOut(
        id=club.id,
        name=club.name,
        lat=club.location.lat,
        lng=club.location.lng,
        distance_m=item.distance_m,
        image_url=item.image_url,
        website=club.attributes.get("website"),
        membership_contact=club.attributes.get("membership_contact"),
        address=club.attributes.get("address"),
    )


@router.post("/closest", response_model=ClosestResponse, dependencies=[Depends(closest_rate_limit)])
async def closest_clubs(query: ProximityQuery, pipeline: ProximityPipeline = Depends(get_pipeline)):
    if query.coordinates is None and query.region is None:
        query = query.model_copy(update={"region": region_hint_for(query.address)})

    logger.info("Received closest clubs request", query=query.model_dump())
    result = await pipeline.resolve_closest(query)
    if isinstance(result, Err):
        error = result.error
        raise HTTPException(
            status_code=ERROR_STATUS[error.kind],
            detail={"kind": error.kind.value, "message": error.message},
        )

    results = [_club_out(item) for item in result.value]
    return ClosestResponse(count=len(results), results=results)
