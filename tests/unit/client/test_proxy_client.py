import httpx
import pytest

from dndref.client.fetcher import AsyncReferenceFetcher
from dndref.client.proxy import DndProxyClient, endpoint_from_url
from dndref.exceptions import ProxyClientError
from dndref.server import create_app


def listing(kind: str, n: int) -> dict:
    return {
        "count": n,
        "results": [
            {"index": f"{kind}-{i}", "name": f"{kind} {i}", "url": f"/api/{kind}/{kind}-{i}"}
            for i in range(n)
        ],
    }


@pytest.fixture
def proxy():
    """A DndProxyClient whose proxy answers from a dict keyed by endpoint."""
    seen: list[str] = []
    data: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/dnd"
        endpoint = request.url.params["endpoint"]
        seen.append(endpoint)
        if endpoint not in data:
            return httpx.Response(500, json={"error": "boom"})
        return httpx.Response(200, json=data[endpoint])

    client = DndProxyClient("http://proxy.test/", transport=httpx.MockTransport(handler))
    return client, data, seen


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("/api/2014/spells/aid", "spells/aid"),
        ("/api/classes/bard", "classes/bard"),
        ("spells/aid", "spells/aid"),
    ],
)
def test_endpoint_from_url(url, expected):
    assert endpoint_from_url(url) == expected


@pytest.mark.asyncio
async def test_fetch_list_and_item(proxy):
    client, data, seen = proxy
    data["classes"] = listing("classes", 2)
    data["classes/bard"] = {"index": "bard", "hit_die": 8}

    async with client:
        assert await client.fetch_list("classes") == data["classes"]
        assert (await client.fetch_item("classes", "bard"))["hit_die"] == 8

    assert seen == ["classes", "classes/bard"]


@pytest.mark.asyncio
async def test_fetch_by_url_strips_api_prefix(proxy):
    client, data, seen = proxy
    data["spells/aid"] = {"index": "aid"}

    async with client:
        assert await client.fetch_by_url("/api/2014/spells/aid") == {"index": "aid"}

    assert seen == ["spells/aid"]


@pytest.mark.asyncio
async def test_fetch_multiple_keeps_order(proxy):
    client, data, _ = proxy
    for index in ("aid", "alarm", "bless"):
        data[f"spells/{index}"] = {"index": index}

    async with client:
        items = await client.fetch_multiple_items("spells", ["bless", "aid", "alarm"])
        by_url = await client.fetch_multiple_by_urls(["/api/spells/alarm", "/api/spells/aid"])

    assert [item["index"] for item in items] == ["bless", "aid", "alarm"]
    assert [item["index"] for item in by_url] == ["alarm", "aid"]


@pytest.mark.asyncio
async def test_error_status_raises(proxy):
    client, _, _ = proxy

    async with client:
        with pytest.raises(ProxyClientError) as exc_info:
            await client.fetch_list("monsters")

    assert exc_info.value.status_code == 500
    assert "endpoint=monsters" in exc_info.value.url


@pytest.mark.asyncio
async def test_fetch_sample_data(proxy):
    client, data, _ = proxy
    data["classes"] = listing("classes", 12)
    data["races"] = listing("races", 3)

    async with client:
        sample = await client.fetch_sample_data(["classes", "races", "monsters"])

    assert sample["classes"]["count"] == 12
    assert len(sample["classes"]["results"]) == 5
    assert sample["races"]["results"] == data["races"]["results"]
    assert sample["monsters"] == {"count": 0, "results": []}


@pytest.mark.asyncio
async def test_against_running_app(upstreams, scripted_transport):
    """The client talking to the real app, whose upstreams are all down."""
    upstream_transport, _ = scripted_transport({})
    app = create_app(
        fetcher=AsyncReferenceFetcher(upstreams=upstreams, transport=upstream_transport)
    )
    client = DndProxyClient("http://proxy.test", transport=httpx.ASGITransport(app=app))

    async with client:
        data = await client.fetch_list("classes")

    assert data["count"] == 12
    assert data["_mock"] is True


def test_endpoint_from_url_removes_first_match_anywhere():
    url = "https://www.dnd5eapi.co/api/spells/aid"

    assert endpoint_from_url(url) == "https://www.dnd5eapi.cospells/aid"
