"""HTTP tests for the service-level endpoints."""

from fastapi.testclient import TestClient

from orderdesk.config import Settings
from orderdesk.infrastructure.api.app import VERSION, create_app
from tests.fakes import fake_container


class TestServiceEndpoints:

    def test_health(self, client):
        resp = client.get("/health")

        assert resp.status_code == 200
        payload = resp.json()
        assert payload["status"] == "success"
        assert payload["database"] == "connected"
        assert payload["uptime"] >= 0

    def test_health_reports_database_down(self):
        container = fake_container()
        container.database_ok = lambda: False
        with TestClient(create_app(container=container, settings=Settings())) as client:
            assert client.get("/health").json()["database"] == "unavailable"

    def test_index_lists_endpoints(self, client):
        payload = client.get("/").json()
        assert payload["version"] == VERSION
        assert payload["endpoints"]["orders"]["create"] == "POST /api/orders"

    def test_unknown_route(self, client):
        resp = client.get("/api/nothing-here")

        assert resp.status_code == 404
        payload = resp.json()
        assert payload["message"] == "Route /api/nothing-here not found"
        assert payload["code"] == "NOT_FOUND"

    def test_lifespan_hooks_run(self):
        calls = []
        container = fake_container()
        container.startup = lambda: calls.append("startup")
        container.shutdown = lambda: calls.append("shutdown")

        with TestClient(create_app(container=container, settings=Settings())):
            assert calls == ["startup"]
        assert calls == ["startup", "shutdown"]


class TestRequestLimits:

    def test_101st_request_in_window_is_throttled(self, client):
        for _ in range(100):
            assert client.get("/health").status_code == 200

        resp = client.get("/health")

        assert resp.status_code == 429
        payload = resp.json()
        assert payload["status"] == "error"
        assert payload["code"] == "RATE_LIMIT_EXCEEDED"
        assert payload["message"] == "Too many requests from this IP, please try again later."
        assert "timestamp" in payload

    def test_limit_is_shared_across_routes(self):
        app = create_app(container=fake_container(), settings=Settings(rate_limit="2/minute"))
        with TestClient(app) as client:
            assert client.get("/api/products").status_code == 200
            assert client.get("/api/orders").status_code == 200
            assert client.get("/health").status_code == 429

    def test_empty_limit_disables_throttling(self):
        app = create_app(container=fake_container(), settings=Settings(rate_limit=""))
        with TestClient(app) as client:
            assert all(client.get("/health").status_code == 200 for _ in range(105))

    def test_oversized_body_rejected(self):
        app = create_app(container=fake_container(), settings=Settings(max_body_bytes=64))
        with TestClient(app) as client:
            resp = client.post("/api/products", json={"name": "x" * 100})

        assert resp.status_code == 413
        assert resp.json()["code"] == "PAYLOAD_TOO_LARGE"
