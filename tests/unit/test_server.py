import httpx
import pytest
from fastapi.testclient import TestClient

from dndref.client.fetcher import AsyncReferenceFetcher
from dndref.constants import MOCK_MESSAGE
from dndref.server import create_app

SPELLS = {"count": 1, "results": [{"index": "aid", "name": "Aid", "url": "/api/spells/aid"}]}


@pytest.fixture
def client(upstreams):
    app = create_app(fetcher=AsyncReferenceFetcher(upstreams=upstreams, timeout=1.0))
    with TestClient(app) as test_client:
        yield test_client


def test_missing_endpoint_is_a_client_error(client, respx_mock):
    response = client.get("/api/dnd")

    assert response.status_code == 400
    assert response.json() == {"error": "Endpoint parameter is required"}
    assert respx_mock.calls.call_count == 0


def test_empty_endpoint_is_a_client_error(client):
    response = client.get("/api/dnd", params={"endpoint": ""})

    assert response.status_code == 400


def test_proxies_first_upstream(client, respx_mock):
    respx_mock.get("https://primary.test/api/spells").mock(
        return_value=httpx.Response(200, json=SPELLS)
    )

    response = client.get("/api/dnd", params={"endpoint": "spells"})

    assert response.status_code == 200
    assert response.json() == SPELLS


def test_second_upstream_after_failure(client, respx_mock):
    respx_mock.get("https://primary.test/api/spells/aid").mock(
        side_effect=httpx.ConnectError("down")
    )
    respx_mock.get("https://secondary.test/api/spells/aid").mock(
        return_value=httpx.Response(200, json={"index": "aid", "level": 2})
    )

    response = client.get("/api/dnd", params={"endpoint": "spells/aid"})

    assert response.status_code == 200
    assert response.json() == {"index": "aid", "level": 2}


def test_all_upstreams_503_serves_mock_classes(client, respx_mock):
    route = respx_mock.get(url__startswith="https://").mock(return_value=httpx.Response(503))

    response = client.get("/api/dnd", params={"endpoint": "classes"})

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 12
    assert len(body["results"]) == 12
    assert body["_mock"] is True
    assert body["_message"] == MOCK_MESSAGE
    assert route.call_count == 3


def test_strict_route_success(client, respx_mock):
    respx_mock.get("https://primary.test/api/equipment/longsword").mock(
        return_value=httpx.Response(200, json={"index": "longsword"})
    )

    response = client.get("/api/dnd5e/equipment/longsword")

    assert response.status_code == 200
    assert response.json() == {"index": "longsword"}


@pytest.mark.parametrize(
    ("path", "message"),
    [
        ("/api/dnd5e/spells", "Failed to fetch spells"),
        ("/api/dnd5e/spells/aid", "Failed to fetch spell"),
        ("/api/dnd5e/monsters", "Failed to fetch monsters"),
        ("/api/dnd5e/races", "Failed to fetch races"),
        ("/api/dnd5e/equipment/longsword", "Failed to fetch equipment"),
    ],
)
def test_strict_routes_do_not_serve_mock(client, respx_mock, path, message):
    respx_mock.get(url__startswith="https://").mock(return_value=httpx.Response(500))

    response = client.get(path)

    assert response.status_code == 500
    assert response.json() == {"error": message}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_app_from_config(mock_config):
    app = create_app(mock_config)

    fetcher = app.state.fetcher
    assert fetcher.upstreams == tuple(mock_config.upstreams)
    assert fetcher.timeout == 1.0
