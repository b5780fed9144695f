from fastapi.testclient import TestClient

from sanctionlink.api import create_app
from sanctionlink.client.errors import InvalidCredentialError, NetworkUnreachableError
from tests.fakes import FakeEntityClient, make_record


def test_enriched_entity_endpoint(test_client: TestClient) -> None:
    response = test_client.get("/entities/X")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "X"
    assert data["schema"] == "Person"
    assert data["relationships"]["owner_of"] == ["Acme Corp"]
    assert data["relationships"]["owned_by"] == ["Z"]
    assert data["relationships"]["family"] == ["John Doe"]
    assert {edge["relationship_id"] for edge in data["edges"]} == {
        "own-1",
        "own-2",
        "dir-1",
        "fam-1",
        "fam-2",
    }


def test_unknown_entity_returns_404(test_client: TestClient) -> None:
    response = test_client.get("/entities/missing")

    assert response.status_code == 404
    assert response.json()["detail"]["kind"] == "not_found"


def test_network_failure_returns_502() -> None:
    client = FakeEntityClient(errors={"X": NetworkUnreachableError("Network error")})
    response = TestClient(create_app(client=client)).get("/entities/X")

    assert response.status_code == 502
    assert response.json()["detail"] == {"kind": "network_unreachable", "message": "Network error"}


def test_invalid_credential_keeps_status() -> None:
    error = InvalidCredentialError("API key is invalid.", status_code=401)
    client = FakeEntityClient(errors={"X": error})
    response = TestClient(create_app(client=client)).get("/entities/X")

    assert response.status_code == 401


def test_adjacent_endpoint(test_client: TestClient) -> None:
    response = test_client.get("/entities/X/adjacent")

    assert response.status_code == 200
    assert [record["id"] for record in response.json()] == [
        "own-1",
        "own-2",
        "dir-1",
        "fam-1",
        "fam-2",
    ]


def test_search_endpoint(test_client: TestClient) -> None:
    response = test_client.get("/search", params={"q": "acme", "limit": 5})

    assert response.status_code == 200
    data = response.json()
    assert data["total"]["value"] == 1
    assert data["results"][0]["caption"] == "Acme Corp"


def test_search_endpoint_rejects_bad_limit(test_client: TestClient) -> None:
    response = test_client.get("/search", params={"q": "acme", "limit": 0})
    assert response.status_code == 422


def test_catalog_endpoint(test_client: TestClient) -> None:
    response = test_client.get("/catalog")

    assert response.status_code == 200
    assert response.json() == {"datasets": [{"name": "default"}]}


def test_health_endpoint(test_client: TestClient) -> None:
    response = test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["success"] is True


def test_client_closed_on_shutdown() -> None:
    client = FakeEntityClient(entities={"X": make_record("X", "Person", "Ivan Petrov")})

    with TestClient(create_app(client=client)) as test_client:
        assert test_client.get("/entities/X").status_code == 200

    assert client.closed
