from abc import ABC, abstractmethod
from typing import List

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from structlog import get_logger

from app.config import settings
from app.core.types import Candidate, Location
from app.models.club import Club

logger = get_logger()


class CandidateDirectory(ABC):
    @abstractmethod
    async def fetch_all(self) -> List[Candidate]:
        """Return every candidate in directory order, unfiltered."""
        ...

    async def ping(self) -> bool:
        """Return True when the backing store is reachable."""
        return True


def club_to_candidate(club: Club) -> Candidate:
    return Candidate(
        id=club.id,
        name=club.club_name,
        location=Location(lat=float(club.lat), lng=float(club.lng)),
        attributes={
            "website": club.website,
            "membership_contact": {
                "name": club.membership_contact_name,
                "phone": club.membership_contact_phone,
            },
            "address": {
                "street_number": club.street_number,
                "street_name": club.street_name,
                "city": club.city,
                "province": club.province,
                "postal": club.postal,
            },
        },
    )


class SqlClubDirectory(CandidateDirectory):
    def __init__(self, database_url: str = None):
        self.async_engine = create_async_engine(database_url or settings.DATABASE_URL)

    async def fetch_all(self) -> List[Candidate]:
        async with AsyncSession(self.async_engine) as db:
            result = await db.execute(select(Club).order_by(Club.id))
            candidates = [club_to_candidate(club) for club in result.scalars()]
        logger.info("Fetched club directory", count=len(candidates))
        return candidates

    async def ping(self) -> bool:
        async with self.async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
