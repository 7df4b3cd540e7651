"""Integration tests for application wiring: health, headers and errors."""

import pytest

from src.catalog.api.http.app import create_app
from src.catalog.runtime.config.config_data import AppConfig, ConfigData


class TestHealth:
    """Test health endpoints."""

    def test_liveness(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"]["database"]["status"] == "healthy"

    def test_readiness_reports_database_outage(self, client, app, monkeypatch):
        database_service = app.state.app_dependencies.database_service
        monkeypatch.setattr(database_service, "health_check", lambda: False)

        response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"


class TestMiddleware:
    """Test headers added to every response."""

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_in_error_body(self, client):
        response = client.get("/products", headers={"X-Request-ID": "req-456"})

        assert response.json()["request_id"] == "req-456"

    def test_security_headers(self, client):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestCreateApp:
    """Test the application factory."""

    def test_production_without_secret_fails_fast(self):
        with pytest.raises(ValueError):
            create_app(ConfigData(app=AppConfig(environment="production")))

    def test_docs_hidden_in_production(self, test_config):
        test_config.app.environment = "production"

        app = create_app(test_config)

        assert app.docs_url is None
