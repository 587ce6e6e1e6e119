from datetime import datetime, timedelta, timezone

import pytest

from application.services.batch_service import BatchService
from core.exceptions import (
    AgentAccessDeniedException,
    ConfigurationException,
    InvalidRequestException
)
from utils.utils import parse_iso_datetime


@pytest.fixture
def batch_service(mock_provider):
    return BatchService(mock_provider, default_agent_id="agent-a", run_delay_minutes=3)


class TestUpload:

    @pytest.mark.asyncio
    async def test_forwards_csv_to_provider(self, batch_service, mock_provider, client_caller):
        result = await batch_service.upload(
            client_caller, "contacts.csv", b"contact_number\n+919876543210\n", "text/csv", agent_id="agent-b"
        )

        mock_provider.create_batch.assert_awaited_once_with(
            "agent-b", "contacts.csv", b"contact_number\n+919876543210\n", "text/csv"
        )
        assert result["success"] is True
        assert result["batch_id"] == "batch-1"
        assert result["agent_id"] == "agent-b"
        assert result["uploaded_by"] == "ops@example.com"

    @pytest.mark.asyncio
    async def test_uses_default_agent(self, batch_service, mock_provider, client_caller):
        await batch_service.upload(client_caller, "contacts.csv", b"x")
        assert mock_provider.create_batch.await_args.args[0] == "agent-a"

    @pytest.mark.asyncio
    async def test_file_required(self, batch_service, mock_provider, client_caller):
        with pytest.raises(InvalidRequestException, match="CSV file is required"):
            await batch_service.upload(client_caller, None, None)
        mock_provider.create_batch.assert_not_called()

    @pytest.mark.asyncio
    async def test_foreign_agent_denied(self, batch_service, mock_provider, client_caller):
        with pytest.raises(AgentAccessDeniedException):
            await batch_service.upload(client_caller, "c.csv", b"x", agent_id="agent-z")
        mock_provider.create_batch.assert_not_called()

    @pytest.mark.asyncio
    async def test_agent_required_without_default(self, mock_provider, client_caller):
        service = BatchService(mock_provider, default_agent_id=None)

        with pytest.raises(InvalidRequestException, match="Agent ID is required"):
            await service.upload(client_caller, "c.csv", b"x")

    @pytest.mark.asyncio
    async def test_provider_credentials_required(self, batch_service, mock_provider, client_caller):
        mock_provider.is_configured.return_value = False

        with pytest.raises(ConfigurationException):
            await batch_service.upload(client_caller, "c.csv", b"x")


class TestSchedule:

    @pytest.mark.asyncio
    async def test_schedules_future_time(self, batch_service, mock_provider, client_caller):
        when = (datetime.now(timezone.utc) + timedelta(days=1)).isoformat()

        result = await batch_service.schedule(client_caller, "batch-1", when)

        mock_provider.schedule_batch.assert_awaited_once_with("batch-1", when)
        assert result["scheduled_time"] == when
        assert result["scheduled_by"] == "ops@example.com"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("batch_id,scheduled_time,message", [
        (None, "2099-01-01T10:00:00+05:30", "batch_id is required"),
        ("batch-1", None, "scheduled_time is required"),
        ("batch-1", "next tuesday", "Invalid scheduled_time format"),
        ("batch-1", "2000-01-01T10:00:00+00:00", "must be in the future"),
    ])
    async def test_rejects_bad_input(
        self, batch_service, mock_provider, client_caller, batch_id, scheduled_time, message
    ):
        with pytest.raises(InvalidRequestException, match=message):
            await batch_service.schedule(client_caller, batch_id, scheduled_time)
        mock_provider.schedule_batch.assert_not_called()


class TestRunStopDelete:

    @pytest.mark.asyncio
    async def test_run_schedules_a_few_minutes_ahead(self, batch_service, mock_provider, client_caller):
        before = datetime.now(timezone.utc)

        result = await batch_service.run(client_caller, "batch-1")

        batch_id, scheduled_time = mock_provider.schedule_batch.await_args.args
        assert batch_id == "batch-1"
        assert scheduled_time.endswith("+00:00")
        delay = parse_iso_datetime(scheduled_time) - before
        assert timedelta(minutes=2) < delay <= timedelta(minutes=3, seconds=5)
        assert result["message"] == "Batch execution started"
        assert result["started_by"] == "ops@example.com"

    @pytest.mark.asyncio
    async def test_run_requires_batch_id(self, batch_service, client_caller):
        with pytest.raises(InvalidRequestException):
            await batch_service.run(client_caller, "")

    @pytest.mark.asyncio
    async def test_stop(self, batch_service, mock_provider, client_caller):
        result = await batch_service.stop(client_caller, "batch-1")

        mock_provider.stop_batch.assert_awaited_once_with("batch-1")
        assert result["stopped_by"] == "ops@example.com"

    @pytest.mark.asyncio
    async def test_delete(self, batch_service, mock_provider, client_caller):
        result = await batch_service.delete(client_caller, "batch-1")

        mock_provider.delete_batch.assert_awaited_once_with("batch-1")
        assert result["deleted_by"] == "ops@example.com"
