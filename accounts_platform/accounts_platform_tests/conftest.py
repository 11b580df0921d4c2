"""
Pytest configuration for the account service tests.

Settings are read at import time, so the test database and a cheap hash
cost are put in the environment before the app is imported.
"""
import os
import uuid

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_accounts.db")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "1000")
os.environ.setdefault("JWT_SECRET_KEY", "test-signing-key-for-the-account-service-suite")

import pytest
from fastapi.testclient import TestClient

from accounts_platform.accounts_platform.account_service.main import app
from accounts_platform.accounts_platform.account_service.db import Base, engine
from accounts_platform.accounts_platform.account_service.dependencies import get_token_service


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture
def token_service():
    return get_token_service()


@pytest.fixture
def register_user(client):
    """Register a fresh account and return its id, email, password and token."""

    def _register(first_name="Jane", last_name="Smith", password="password123", **extra):
        email = f"{first_name.lower()}_{uuid.uuid4().hex[:8]}@example.com"
        payload = {
            "firstName": first_name,
            "lastName": last_name,
            "email": email,
            "password": password,
            **extra,
        }
        response = client.post("/auth/register", json=payload)
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return {
            "id": data["user"]["userId"],
            "email": email,
            "password": password,
            "token": data["accessToken"],
        }

    return _register


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
