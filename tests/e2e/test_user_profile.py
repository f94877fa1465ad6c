"""End-to-end tests for user profile and community endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from port42.domain.repository import CommunityRepository, UserRepository
from port42.interface.api.app import create_app
from tests.conftest import make_community, make_user, store
from tests.di import build_test_container


@pytest.fixture
def container():
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client with test container."""
    with TestClient(create_app(container=container)) as test_client:
        yield test_client


class TestUserProfileEndpoints:
    """End-to-end tests for user profile API endpoints.

    Note: These tests focus on the HTTP API interface layer.
    More detailed business logic tests are in unit tests.
    """

    def test_get_user_profile(self, client, container):
        """Should return the public profile with its level."""
        # Arrange
        user = store(client, container, UserRepository, make_user("alice", 120))

        # Act
        response = client.get(f"/users/{user.id}")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "alice"
        assert body["reputation"] == 120
        assert body["level"] == "Apprentice"
        assert "email" not in body

    def test_get_nonexistent_user_profile(self, client):
        """Should return 404 for nonexistent user."""
        # Act
        response = client.get(f"/users/{uuid4()}")

        # Assert
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_get_user_profile_with_malformed_id(self, client):
        """Should return 400 for an ID that is not a UUID."""
        # Act
        response = client.get("/users/not-a-uuid")

        # Assert
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_argument"


class TestCommunityEndpoints:
    """End-to-end tests for community API endpoints."""

    def test_list_and_get_community(self, client, container):
        """Communities are listed and fetched by slug."""
        # Arrange
        store(client, container, CommunityRepository, make_community("python"))
        store(client, container, CommunityRepository, make_community("red-team"))

        # Act
        listing = client.get("/communities")
        single = client.get("/communities/red-team")

        # Assert
        assert listing.status_code == 200
        slugs = {c["slug"] for c in listing.json()["communities"]}
        assert slugs == {"python", "red-team"}
        assert single.status_code == 200
        assert single.json()["slug"] == "red-team"

    def test_get_unknown_community(self, client):
        """Should return 404 for an unknown slug."""
        # Act
        response = client.get("/communities/unknown")

        # Assert
        assert response.status_code == 404


class TestHealthEndpoint:
    """Health check."""

    def test_health(self, client):
        """Should report healthy with the realtime connection count."""
        # Act
        response = client.get("/health")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["realtime_connections"] == 0
