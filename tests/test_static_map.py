import httpx
import pytest

from app.core.types import Location
from app.services.static_map import StaticMapAnnotator

ORIGIN = Location(lat=45.0, lng=-75.0)
CLUB = Location(lat=45.4215, lng=-75.6972)


def test_build_url_has_both_markers_and_fixed_parameters():
    annotator = StaticMapAnnotator(api_key="test-key", verify=False)
    url = httpx.URL(annotator.build_url(ORIGIN, CLUB))

    assert url.path.endswith("/staticmap")
    assert url.params["size"] == "573x300"
    assert url.params["maptype"] == "roadmap"
    assert url.params["format"] == "png"
    assert url.params["key"] == "test-key"
    assert url.params.get_list("markers") == [
        "size:mid|color:blue|45,-75",
        "size:mid|color:red|45.4215,-75.6972",
    ]


def test_build_url_is_deterministic():
    annotator = StaticMapAnnotator(api_key="test-key", verify=False)
    assert annotator.build_url(ORIGIN, CLUB) == annotator.build_url(ORIGIN, CLUB)


@pytest.mark.asyncio
async def test_annotate_without_verification_makes_no_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200)

    annotator = StaticMapAnnotator(api_key="test-key", verify=False, transport=httpx.MockTransport(handler))
    url = await annotator.annotate(ORIGIN, CLUB)

    assert url == annotator.build_url(ORIGIN, CLUB)
    assert calls == []


@pytest.mark.asyncio
async def test_annotate_with_verification_checks_image():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png"})

    annotator = StaticMapAnnotator(api_key="test-key", verify=True, transport=httpx.MockTransport(handler))
    url = await annotator.annotate(ORIGIN, CLUB)

    assert len(calls) == 1
    assert calls[0].url.params.get_list("markers") == httpx.URL(url).params.get_list("markers")


@pytest.mark.asyncio
async def test_annotate_with_verification_raises_on_error():
    def handler(request):
        return httpx.Response(403, text="denied")

    annotator = StaticMapAnnotator(api_key="test-key", verify=True, transport=httpx.MockTransport(handler))
    with pytest.raises(httpx.HTTPStatusError):
        await annotator.annotate(ORIGIN, CLUB)
