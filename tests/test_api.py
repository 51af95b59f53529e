"""
Tests for the HTTP surface: health endpoints and item CRUD.
"""

import uuid

from fastapi.testclient import TestClient

from catalog_api.app import create_app
from catalog_api.core.config import AppConfig, MongoDbSettings
from catalog_api.health import HealthStatus, ProbeRegistration

from conftest import failing_probe, static_probe


class TestHealthEndpoints:
    """Test /health/ready and /health/live."""

    def test_ready_healthy(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        data = response.json()
        assert data["status"] == "Healthy"
        assert len(data["checks"]) == 1
        check = data["checks"][0]
        assert check["name"] == "mongodb"
        assert check["status"] == "Healthy"
        assert check["exception"] == "none"
        assert set(check) == {"name", "status", "exception", "duration"}

    def test_ready_unhealthy_still_200(self, make_client):
        client = make_client(
            [ProbeRegistration("mongodb", failing_probe("Connection refused"), tags={"ready"})]
        )

        response = client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "Unhealthy"
        assert data["checks"][0]["status"] == "Unhealthy"
        assert data["checks"][0]["exception"] == "Connection refused"

    def test_ready_timeout_still_200(self, make_client):
        client = make_client(
            [ProbeRegistration("mongodb", static_probe(delay=5.0), tags={"ready"}, timeout=0.05)]
        )

        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"][0]["status"] == "Unhealthy"

    def test_live_ignores_probes(self, make_client):
        client = make_client(
            [ProbeRegistration("mongodb", failing_probe(), tags={"ready"})]
        )

        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "Healthy", "checks": []}

    def test_ready_with_no_ready_probes(self, make_client):
        client = make_client(
            [ProbeRegistration("disk", static_probe(HealthStatus.DEGRADED), tags={"startup"})]
        )

        assert client.get("/health/ready").json() == {"status": "Healthy", "checks": []}


class TestItemsEndpoints:
    """Test item CRUD against the in-memory repository."""

    def _create(self, client, name="Potion", price=9, description="Restores HP"):
        response = client.post(
            "/items",
            json={"name": name, "description": description, "price": price},
        )
        assert response.status_code == 201
        return response

    def test_create_and_get(self, client):
        response = self._create(client)
        created = response.json()

        assert created["name"] == "Potion"
        assert created["description"] == "Restores HP"
        assert float(created["price"]) == 9
        assert response.headers["location"] == f"/items/{created['id']}"

        fetched = client.get(f"/items/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == created

    def test_list_and_filter(self, client):
        self._create(client, name="Potion")
        self._create(client, name="Hi-Potion")
        self._create(client, name="Antidote")

        assert len(client.get("/items").json()) == 3

        names = sorted(item["name"] for item in client.get("/items", params={"name": "potion"}).json())
        assert names == ["Hi-Potion", "Potion"]

    def test_get_missing(self, client):
        assert client.get(f"/items/{uuid.uuid4()}").status_code == 404

    def test_get_malformed_id(self, client):
        assert client.get("/items/not-a-uuid").status_code == 422

    def test_update_keeps_id_and_created_date(self, client):
        created = self._create(client).json()

        response = client.put(
            f"/items/{created['id']}",
            json={"name": "Elixir", "description": "Restores all", "price": 500},
        )
        assert response.status_code == 204

        updated = client.get(f"/items/{created['id']}").json()
        assert updated["name"] == "Elixir"
        assert updated["description"] == "Restores all"
        assert float(updated["price"]) == 500
        assert updated["id"] == created["id"]
        assert updated["created_date"] == created["created_date"]

    def test_update_missing(self, client):
        response = client.put(
            f"/items/{uuid.uuid4()}",
            json={"name": "Elixir", "price": 500},
        )
        assert response.status_code == 404

    def test_delete(self, client):
        created = self._create(client).json()

        assert client.delete(f"/items/{created['id']}").status_code == 204
        assert client.get(f"/items/{created['id']}").status_code == 404
        assert client.delete(f"/items/{created['id']}").status_code == 404

    def test_validation(self, client):
        assert client.post("/items", json={"name": "", "price": 5}).status_code == 422
        assert client.post("/items", json={"name": "Free", "price": 0}).status_code == 422
        assert client.post("/items", json={"name": "Pricey", "price": 1001}).status_code == 422
        assert client.post("/items", json={"price": 5}).status_code == 422


class TestAppWiring:
    """Test create_app() choices driven by configuration."""

    def test_docs_hidden_outside_development(self, client):
        assert client.get("/docs").status_code == 404
        assert client.get("/openapi.json").status_code == 404

    def test_docs_served_in_development(self, repository):
        config = AppConfig(
            environment="Development", repository="memory", mongodb=MongoDbSettings()
        )
        client = TestClient(create_app(config=config, repository=repository, probes=[]))

        assert client.get("/docs").status_code == 200
        paths = client.get("/openapi.json").json()["paths"]
        assert "/health/ready" in paths
        assert "/items" in paths

    def test_memory_backend_from_config(self, memory_config):
        app = create_app(config=memory_config, probes=[])

        assert type(app.state.repository).__name__ == "InMemoryItemsRepository"

    def test_default_probe_is_mongodb(self, memory_config):
        app = create_app(config=memory_config)

        registrations = app.state.health_reporter.registrations
        assert [r.name for r in registrations] == ["mongodb"]
        assert registrations[0].tags == frozenset({"ready"})
        assert registrations[0].timeout == 3.0
