from functools import lru_cache

from app.config import settings
from app.services.directory import SqlClubDirectory
from app.services.distance_matrix import DistanceMatrixClient
from app.services.geocode import GeocodeResolver
from app.services.pipeline import ProximityPipeline
from app.services.static_map import StaticMapAnnotator

@lru_cache
def get_pipeline() -> ProximityPipeline:
    """Build the pipeline once per process; K and the collaborators come from settings."""
    return ProximityPipeline(
        geocoder=GeocodeResolver(),
        directory=SqlClubDirectory(settings.DATABASE_URL),
        distance_client=DistanceMatrixClient(),
        annotator=StaticMapAnnotator(),
        k=settings.CLOSEST_CLUBS_TO_RETURN,
        annotation_timeout=settings.ANNOTATION_TIMEOUT_SECONDS,
        annotation_concurrency=settings.ANNOTATION_CONCURRENCY,
    )
