from typing import Optional

import httpx
from structlog import get_logger

from app.config import settings
from app.core.types import OK_STATUS, Location

logger = get_logger()


class GeocodeError(Exception):
    """Raised when an address cannot be turned into coordinates."""


class GeocodeNotFound(GeocodeError):
    """The service answered but produced no usable result."""


class GeocodeServiceError(GeocodeError):
    """Transport failure or unreadable response from the geocoding service."""


class GeocodeResolver:
    def __init__(
        self,
        api_key: str = None,
        base_url: str = None,
        default_region: str = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or settings.GOOGLE_API_KEY
        self.base_url = base_url or settings.GEOCODE_API_URL
        self.default_region = default_region or settings.DEFAULT_REGION
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    async def resolve(self, address: str, region: Optional[str] = None) -> Location:
        """
        Look up ``address`` once (no retry, no cache) and return the first result's location.
        ``region`` biases interpretation; the configured default region is used when omitted.
        """
        if not address or not address.strip():
            raise GeocodeNotFound("Address is empty")

        params = {"address": address.strip(), "region": region or self.default_region, "key": self.api_key}
        logger.info("Geocoding address", address=params["address"], region=params["region"])
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.base_url, params=params)
        except httpx.RequestError as e:
            logger.error("Geocoding service unavailable", address=address, error=str(e))
            raise GeocodeServiceError(str(e)) from e

        if response.status_code != 200:
            logger.warning("Geocoding failed", address=address, status_code=response.status_code, response=response.text[:200])
            raise GeocodeNotFound(f"Geocoding returned HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Geocoding returned invalid JSON", address=address, error=str(e))
            raise GeocodeServiceError("Invalid geocoding response") from e

        status = data.get("status")
        results = data.get("results") or []
        if status != OK_STATUS or not results:
            logger.warning("Geocoding returned no results", address=address, status=status, error_message=data.get("error_message"))
            raise GeocodeNotFound(data.get("error_message") or status or "No results")

        try:
            loc = results[0]["geometry"]["location"]
            origin = Location(lat=float(loc["lat"]), lng=float(loc["lng"]))
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Geocoding result has no location", address=address, error=str(e))
            raise GeocodeServiceError("Geocoding result has no location") from e

        logger.info("Geocode successful", address=address, origin=origin.as_param())
        return origin
