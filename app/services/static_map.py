from typing import Optional

import httpx
from structlog import get_logger

from app.config import settings
from app.core.types import Location

logger = get_logger()

ORIGIN_MARKER_STYLE = "size:mid|color:blue"
CLUB_MARKER_STYLE = "size:mid|color:red"


class StaticMapAnnotator:
    """Builds Static Maps image URLs showing the user (blue) and a club (red)."""

    def __init__(
        self,
        api_key: str = None,
        base_url: str = None,
        size: str = None,
        maptype: str = None,
        image_format: str = None,
        verify: bool = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or settings.GOOGLE_API_KEY
        self.base_url = base_url or settings.STATIC_MAP_API_URL
        self.size = size or settings.STATIC_MAP_SIZE
        self.maptype = maptype or settings.STATIC_MAP_TYPE
        self.image_format = image_format or settings.STATIC_MAP_FORMAT
        self.verify = settings.STATIC_MAP_VERIFY if verify is None else verify
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    def build_url(self, origin: Location, location: Location) -> str:
        params = [
            ("size", self.size),
            ("maptype", self.maptype),
            ("format", self.image_format),
            ("markers", f"{ORIGIN_MARKER_STYLE}|{origin.as_param()}"),
            ("markers", f"{CLUB_MARKER_STYLE}|{location.as_param()}"),
            ("key", self.api_key),
        ]
        return str(httpx.URL(self.base_url, params=params))

    async def annotate(self, origin: Location, location: Location) -> str:
        url = self.build_url(origin, location)
        if self.verify:
            # Confirm the image actually renders before handing the URL out
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
        return url
