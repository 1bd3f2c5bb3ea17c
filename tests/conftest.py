"""Pytest configuration and fixtures."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from userhub.api.main import create_app
from userhub.config import Settings
from userhub.store.memory import InMemorySessionStore, InMemoryUserStore


@pytest.fixture
def settings() -> Settings:
    """Settings for tests: in-memory stores, fast bcrypt."""
    return Settings(
        STORE_BACKEND="memory",
        SESSION_SECRET="test-secret-key-for-testing",
        BCRYPT_ROUNDS=4,
    )


@pytest.fixture
def user_store() -> InMemoryUserStore:
    """Empty in-memory user store."""
    return InMemoryUserStore()


@pytest.fixture
def session_store() -> InMemorySessionStore:
    """Empty in-memory session store."""
    return InMemorySessionStore()


@pytest.fixture
def app(settings, user_store, session_store) -> FastAPI:
    """Application wired to the in-memory stores."""
    return create_app(settings, user_store=user_store, session_store=session_store)


@pytest.fixture
def client(app):
    """Test client sharing one event loop across requests and sockets."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def signup_data() -> dict:
    """Sample signup body."""
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phoneNumber": "+44 20 7946 0000",
        "role": "admin",
        "password": "analytical-engine",
    }
