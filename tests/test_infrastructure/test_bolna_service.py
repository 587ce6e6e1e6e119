import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from core.exceptions import ConfigurationException, UpstreamServiceException
from infrastructure.external.bolna_service import BolnaService

SESSION_PATH = "infrastructure.external.bolna_service.aiohttp.ClientSession"
API_URL = "https://api.bolna.ai/v2"
BASE_URL = "https://api.bolna.ai"


def mock_session(status=200, payload=None, text=""):
    """ClientSession class mock whose ``request`` answers with one response."""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    response.text = AsyncMock(return_value=text)

    session = MagicMock()
    session.request.return_value.__aenter__.return_value = response

    session_cls = MagicMock()
    session_cls.return_value.__aenter__.return_value = session
    return session_cls, session


@pytest.fixture
def bolna():
    return BolnaService(api_key="test-key", api_url=API_URL, base_url=BASE_URL)


@pytest.mark.asyncio
async def test_list_executions_sends_filters_and_auth(bolna):
    session_cls, session = mock_session(payload={"data": [{"id": "e1"}], "total": 1})

    with patch(SESSION_PATH, session_cls):
        result = await bolna.list_executions("agent-a", page_number=1, page_size=1000, status="completed")

    method, url = session.request.call_args.args
    kwargs = session.request.call_args.kwargs
    assert (method, url) == ("GET", f"{API_URL}/agent/agent-a/executions")
    assert kwargs["headers"]["Authorization"] == "Bearer test-key"
    assert kwargs["params"] == {"page_number": "1", "page_size": "1000", "status": "completed"}
    assert result == {"data": [{"id": "e1"}], "total": 1}


@pytest.mark.asyncio
async def test_error_status_raises_upstream_exception(bolna):
    session_cls, _ = mock_session(status=404, text='{"detail":"not found"}')

    with patch(SESSION_PATH, session_cls):
        with pytest.raises(UpstreamServiceException) as exc_info:
            await bolna.get_execution("agent-a", "e1")

    exc = exc_info.value
    assert exc.upstream_status == 404
    assert exc.status_code == 404
    assert exc.body == '{"detail":"not found"}'
    assert exc.message == "Failed to fetch execution from Bolna API"


@pytest.mark.asyncio
async def test_execution_log_uses_unversioned_base(bolna):
    session_cls, session = mock_session(payload={"data": [{"type": "request"}]})

    with patch(SESSION_PATH, session_cls):
        result = await bolna.get_execution_log("e1")

    assert session.request.call_args.args == ("GET", f"{BASE_URL}/executions/e1/log")
    assert result == {"data": [{"type": "request"}]}


@pytest.mark.asyncio
async def test_list_batches_accepts_bare_array(bolna):
    session_cls, session = mock_session(payload=[{"batch_id": "b1"}])

    with patch(SESSION_PATH, session_cls):
        assert await bolna.list_batches("agent-a") == [{"batch_id": "b1"}]

    assert session.request.call_args.args == ("GET", f"{BASE_URL}/batches/agent-a/all")


@pytest.mark.asyncio
async def test_create_batch_uploads_multipart(bolna):
    session_cls, session = mock_session(payload={"batch_id": "b1"})

    with patch(SESSION_PATH, session_cls):
        result = await bolna.create_batch("agent-a", "contacts.csv", b"contact_number\n")

    kwargs = session.request.call_args.kwargs
    assert "Content-Type" not in kwargs["headers"]
    assert kwargs["data"] is not None
    assert result == {"batch_id": "b1"}


@pytest.mark.asyncio
async def test_initiate_call_posts_payload(bolna):
    payload = {"agent_id": "agent-a", "recipient_phone_number": "+919876543210", "metadata": {}}
    session_cls, session = mock_session(payload={"execution_id": "exec-1", "status": "queued"})

    with patch(SESSION_PATH, session_cls):
        result = await bolna.initiate_call(payload)

    assert session.request.call_args.args == ("POST", f"{API_URL}/call")
    assert session.request.call_args.kwargs["json"] == payload
    assert result["execution_id"] == "exec-1"


@pytest.mark.asyncio
async def test_stop_and_delete_ignore_bodies(bolna):
    session_cls, session = mock_session(status=204)

    with patch(SESSION_PATH, session_cls):
        assert await bolna.stop_batch("b1") is None
        assert await bolna.delete_batch("b1") is None

    methods = [call.args[0] for call in session.request.call_args_list]
    assert methods == ["POST", "DELETE"]


@pytest.mark.asyncio
async def test_missing_key_fails_before_any_request():
    bolna = BolnaService(api_key=None, api_url=API_URL, base_url=BASE_URL)
    session_cls, _ = mock_session()
    assert not bolna.is_configured()

    with patch(SESSION_PATH, session_cls):
        with pytest.raises(ConfigurationException):
            await bolna.list_batches("agent-a")

    session_cls.assert_not_called()
