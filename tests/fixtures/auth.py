"""HTTP-level fixtures: application, client and an authenticated caller."""

from collections.abc import Generator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.catalog.api.http.app import create_app
from src.catalog.runtime.config.config_data import ConfigData

TEST_USERNAME = "alice_tester"
TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def app(test_config: ConfigData) -> FastAPI:
    return create_app(test_config)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient]:
    """Test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client: TestClient) -> dict[str, Any]:
    """Register the standard test user; returns the response body."""
    response = client.post(
        "/auth/register", json={"username": TEST_USERNAME, "password": TEST_PASSWORD}
    )
    assert response.status_code == 201, response.text
    # Registration sets the token cookie; tests opt into cookies explicitly
    client.cookies.clear()
    return response.json()


@pytest.fixture
def auth_token(registered_user: dict[str, Any]) -> str:
    return registered_user["token"]


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {auth_token}"}
