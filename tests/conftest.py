import pytest
from fastapi.testclient import TestClient

from sanctionlink.api import create_app
from sanctionlink.client.errors import NetworkUnreachableError
from sanctionlink.domain.entity import EntityRecord
from tests.fakes import FakeEntityClient, make_record


@pytest.fixture
def anchor() -> EntityRecord:
    return make_record("X", "Person", "Ivan Petrov", name=["Ivan Petrov"])


@pytest.fixture
def test_entities(anchor: EntityRecord) -> dict[str, EntityRecord]:
    return {
        "X": anchor,
        "Y": make_record("Y", "Company", "Acme Corp"),
        "W": make_record("W", "Company", "Globex Holdings"),
        "P": make_record("P", "Person", "John Doe"),
        "Q": make_record("Q", "Person", "John Doe"),
    }


@pytest.fixture
def test_adjacent() -> dict[str, list[EntityRecord]]:
    return {
        "X": [
            make_record("own-1", "Ownership", owner=["X"], asset=["Y"]),
            make_record("own-2", "Ownership", owner=["Z"], asset=["X"]),
            make_record("dir-1", "Directorship", director=["X"], organization=["W"]),
            make_record("fam-1", "Family", person=["X"], relative=["P"]),
            make_record("fam-2", "Family", person=["Q"], relative=["X"]),
        ]
    }


@pytest.fixture
def fake_client(
    test_entities: dict[str, EntityRecord], test_adjacent: dict[str, list[EntityRecord]]
) -> FakeEntityClient:
    """Fake client where "Z" is referenced but unreachable."""
    return FakeEntityClient(
        entities=test_entities,
        adjacent=test_adjacent,
        errors={"Z": NetworkUnreachableError("Network error: Could not connect to OpenSanctions.")},
    )


@pytest.fixture
def test_client(fake_client: FakeEntityClient) -> TestClient:
    """Create test client backed by the fake API client."""
    app = create_app(client=fake_client)
    return TestClient(app)
