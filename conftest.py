"""
Shared pytest fixtures
"""
import os

# Configuration is read at import time; select the testing profile first
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
from fastapi.testclient import TestClient

from aramiyot.genai import StubGenerativeClient
from aramiyot.main import create_app
from aramiyot.storage import LocalStorage
from aramiyot.utils.config import TestingConfig


@pytest.fixture
def config():
    return TestingConfig()


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "local_storage.json"))


@pytest.fixture
def stub_client():
    return StubGenerativeClient()


@pytest.fixture
def app(config, stub_client, storage):
    return create_app(config=config, genai_client=stub_client, storage=storage)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    """Bearer header of a fresh anonymous user"""
    response = client.post("/api/auth/anonymous")
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
