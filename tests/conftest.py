import asyncio

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.types import OK_STATUS, Candidate, DistanceResult, Location
from app.dependencies.pipeline import get_pipeline
from app.main import app
from app.routers.closest import closest_rate_limit
from app.services.directory import CandidateDirectory
from app.services.pipeline import ProximityPipeline


def make_candidates(count):
    return [
        Candidate(
            id=i + 1,
            name=f"Club {i + 1}",
            location=Location(lat=45.0 + i / 10, lng=-75.0 - i / 10),
            attributes={"website": f"https://club{i + 1}.example.org"},
        )
        for i in range(count)
    ]


def make_distances(values):
    return [DistanceResult(index=i, status=OK_STATUS, distance_m=float(v)) for i, v in enumerate(values)]


class StaticDirectory(CandidateDirectory):
    """In-memory directory over a fixed list of candidates."""

    def __init__(self, candidates, reachable=True):
        self._candidates = list(candidates)
        self.reachable = reachable

    async def fetch_all(self):
        return list(self._candidates)

    async def ping(self):
        if not self.reachable:
            raise ConnectionError("database unreachable")
        return True


class FakeGeocoder:
    def __init__(self, origin=None, error=None):
        self.origin = origin or Location(lat=45.4215, lng=-75.6972)
        self.error = error
        self.calls = []

    async def resolve(self, address, region=None):
        self.calls.append((address, region))
        if self.error:
            raise self.error
        return self.origin


class FakeDistanceClient:
    def __init__(self, distances=None, error=None):
        self.distances = distances or []
        self.error = error
        self.calls = []

    async def compute_distances(self, origin, destinations):
        self.calls.append((origin, list(destinations)))
        if self.error:
            raise self.error
        return self.distances


class FakeAnnotator:
    """Returns a deterministic URL; clubs listed in ``failing`` raise, those in ``slow`` hang."""

    def __init__(self, failing=(), slow=()):
        self.failing = {Location(*pair) for pair in failing}
        self.slow = {Location(*pair) for pair in slow}
        self.calls = []

    async def annotate(self, origin, location):
        self.calls.append((origin, location))
        if location in self.failing:
            raise RuntimeError("static map unavailable")
        if location in self.slow:
            await asyncio.sleep(5)
        return f"https://maps.example.com/{origin.as_param()}/{location.as_param()}"


def build_pipeline(candidates=None, distances=None, geocoder=None, directory=None, distance_client=None, annotator=None, k=3, **kwargs):
    candidates = make_candidates(5) if candidates is None else candidates
    return ProximityPipeline(
        geocoder=geocoder or FakeGeocoder(),
        directory=directory or StaticDirectory(candidates),
        distance_client=distance_client or FakeDistanceClient(distances=make_distances(distances or [])),
        annotator=annotator or FakeAnnotator(),
        k=k,
        **kwargs,
    )


async def allow_all():
    return None


@pytest_asyncio.fixture
async def client():
    app.dependency_overrides[closest_rate_limit] = allow_all
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides = {}


@pytest.fixture
def use_pipeline():
    def _use(pipeline):
        app.dependency_overrides[get_pipeline] = lambda: pipeline
        return pipeline
    return _use
