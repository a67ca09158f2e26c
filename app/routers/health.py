from fastapi import APIRouter, Depends
from structlog import get_logger
from redis.asyncio import Redis

from app.config import settings
from app.dependencies.pipeline import get_pipeline
from app.services.pipeline import ProximityPipeline

logger = get_logger()
router = APIRouter(prefix="/api/v1", tags=["health"])

@router.get("/health")
async def health():
    return {"status": "ok"}

@router.get("/health/ready")
async def readiness(pipeline: ProximityPipeline = Depends(get_pipeline)):
    details = {"status": "ok", "checks": {}}

    # Rate limiter backend; one short-lived client per check
    redis = Redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
    try:
        pong = await redis.ping()
        details["checks"]["redis"] = "ok" if pong else "fail"
    except Exception as e:
        logger.warning("health redis fail", error=str(e))
        details["checks"]["redis"] = f"fail: {str(e)}"
    finally:
        await redis.aclose()

    # Club directory, through the engine the pipeline already holds
    try:
        reachable = await pipeline.directory.ping()
        details["checks"]["directory"] = "ok" if reachable else "fail"
    except Exception as e:
        logger.warning("health directory fail", error=str(e))
        details["checks"]["directory"] = f"fail: {str(e)}"

    if any(check != "ok" for check in details["checks"].values()):
        details["status"] = "degraded"
    return details
