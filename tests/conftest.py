# tests/conftest.py
"""
Shared fixtures: callers, a fresh event bus and a mocked voice agent provider.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from core.entities.agent import AgentIdentity, CallerIdentity, CallerRole
from core.interfaces.external import IVoiceAgentProvider, ITelephonyCarrier
from infrastructure.messaging.events import InMemoryEventBus


@pytest.fixture
def client_caller():
    """Client who owns agents A and B."""
    return CallerIdentity(
        id="user-1",
        email="ops@example.com",
        name="Ops",
        role=CallerRole.CLIENT,
        agents=[
            AgentIdentity(id="1", bolna_agent_id="agent-a", name="Sales"),
            AgentIdentity(id="2", bolna_agent_id="agent-b", name="Support"),
        ]
    )


@pytest.fixture
def admin_caller():
    return CallerIdentity(
        id="admin-1",
        email="admin@example.com",
        name="Admin",
        role=CallerRole.ADMIN,
        agents=[]
    )


@pytest.fixture
def event_bus():
    return InMemoryEventBus()


@pytest.fixture
def mock_provider():
    """Voice agent provider with every call mocked and credentials present."""
    provider = MagicMock(spec=IVoiceAgentProvider)
    provider.is_configured.return_value = True
    provider.list_executions = AsyncMock(return_value={"data": []})
    provider.get_execution = AsyncMock(return_value={})
    provider.get_execution_log = AsyncMock(return_value={"data": []})
    provider.list_batches = AsyncMock(return_value=[])
    provider.create_batch = AsyncMock(return_value={"batch_id": "batch-1", "state": "created"})
    provider.schedule_batch = AsyncMock(return_value={"message": "success", "state": "scheduled"})
    provider.stop_batch = AsyncMock(return_value=None)
    provider.delete_batch = AsyncMock(return_value=None)
    provider.initiate_call = AsyncMock(return_value={"execution_id": "exec-1", "status": "queued"})
    return provider


@pytest.fixture
def mock_carrier():
    carrier = MagicMock(spec=ITelephonyCarrier)
    carrier.sr_number = "+918000000000"
    carrier.is_configured.return_value = True
    carrier.click_to_call = AsyncMock(return_value={"success": {"status": "queued"}})
    carrier.get_call_logs = AsyncMock(return_value={"objects": []})
    return carrier
