"""
Fixtures for HTTP-level tests: an application around a container whose
upstream services are mocks, with the session caller overridden.
"""

import json

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config.settings import settings
from di.container import Container
from infrastructure.storage.user_directory import JsonUserDirectory
from middleware.auth_middleware import get_current_user


@pytest.fixture
def container(mock_provider, mock_carrier, tmp_path):
    container = Container()
    container.config.override(settings.model_copy(update={"BOLNA_AGENT_ID": "agent-a"}))
    container.store_backend.override("memory")
    container.bolna_service.override(mock_provider)
    container.knowlarity_service.override(mock_carrier)

    users_file = tmp_path / "users.json"
    users_file.write_text(json.dumps([{
        "id": "user-1",
        "email": "ops@example.com",
        "name": "Ops",
        "role": "client",
        "api_key": "secret-1",
        "agents": [
            {"id": "1", "name": "Sales", "bolna_agent_id": "agent-a"},
            {"id": "2", "name": "Support", "bolna_agent_id": "agent-b"},
        ],
    }]), encoding="utf-8")
    container.user_directory.override(JsonUserDirectory(str(users_file)))

    yield container
    container.unwire()


@pytest.fixture
def app(container):
    return create_app(container)


@pytest.fixture
def anonymous_client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def client(app, client_caller):
    """Client whose requests run as ``client_caller``."""
    app.dependency_overrides[get_current_user] = lambda: client_caller
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
