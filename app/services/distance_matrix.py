import math
from typing import List, Optional, Sequence

import httpx
from structlog import get_logger

from app.config import settings
from app.core.types import OK_STATUS, DistanceResult, Location

logger = get_logger()


class DistanceMatrixError(Exception):
    pass


class DistanceMatrixServiceError(DistanceMatrixError):
    """The distance call itself failed (transport or non-200 HTTP status)."""


class DistanceMatrixBatchRejected(DistanceMatrixError):
    """The service answered but flagged the whole batch as unsuccessful."""


def _element_distance(element: dict) -> float:
    if not isinstance(element, dict) or element.get("status") != OK_STATUS:
        return math.inf
    try:
        value = float(element["distance"]["value"])
    except (KeyError, TypeError, ValueError):
        return math.inf
    if not math.isfinite(value) or value < 0:
        return math.inf
    return value


class DistanceMatrixClient:
    def __init__(
        self,
        api_key: str = None,
        base_url: str = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or settings.GOOGLE_API_KEY
        self.base_url = base_url or settings.DISTANCE_MATRIX_API_URL
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    async def compute_distances(self, origin: Location, destinations: Sequence[Location]) -> List[DistanceResult]:
        """
        Compute distances from ``origin`` to every destination in a single batched request.
        Result ``i`` always belongs to destination ``i``. Destinations the service could not
        route carry an infinite distance and a non-OK status.
        """
        if not destinations:
            return []

        params = {
            "origins": origin.as_param(),
            "destinations": "|".join(d.as_param() for d in destinations),
            "key": self.api_key,
        }
        logger.info("Distance matrix request", origin=params["origins"], destination_count=len(destinations))
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.base_url, params=params)
        except httpx.RequestError as e:
            logger.error("Distance matrix unavailable", error=str(e))
            raise DistanceMatrixServiceError(str(e)) from e

        if response.status_code != 200:
            logger.error("Distance matrix error", status=response.status_code, text=response.text[:200])
            raise DistanceMatrixServiceError(f"Distance matrix returned HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Distance matrix returned invalid JSON", error=str(e))
            raise DistanceMatrixServiceError("Invalid distance matrix response") from e

        if data.get("status") != OK_STATUS:
            logger.warning("Distance matrix batch rejected", status=data.get("status"), error_message=data.get("error_message"))
            raise DistanceMatrixBatchRejected(data.get("error_message") or str(data.get("status")))

        rows = data.get("rows") or []
        elements = rows[0].get("elements") if rows and isinstance(rows[0], dict) else None
        if not isinstance(elements, list) or len(elements) != len(destinations):
            logger.warning(
                "Distance matrix row does not match destinations",
                expected=len(destinations),
                received=len(elements) if isinstance(elements, list) else None,
            )
            raise DistanceMatrixBatchRejected("Distance matrix row does not match destinations")

        results = []
        for index, element in enumerate(elements):
            distance = _element_distance(element)
            status = element.get("status") if isinstance(element, dict) else None
            if status == OK_STATUS and math.isinf(distance):
                status = "INVALID_DISTANCE"
            results.append(DistanceResult(index=index, status=status or "UNKNOWN", distance_m=distance))

        unusable = sum(1 for r in results if not r.usable)
        if unusable:
            logger.warning("Distance matrix has unusable destinations", unusable=unusable, total=len(results))
        return results
