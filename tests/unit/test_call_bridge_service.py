"""
Tests for the Knowlarity <-> Bolna call bridges.
"""

import pytest

from application.services.call_bridge_service import CallBridgeService
from core.exceptions import (
    AgentAccessDeniedException,
    ConfigurationException,
    InvalidRequestException,
    UpstreamServiceException
)


@pytest.fixture
def bridge(mock_provider, mock_carrier):
    return CallBridgeService(mock_provider, mock_carrier, default_agent_id="agent-a")


class TestOutbound:

    @pytest.mark.asyncio
    async def test_initiates_call_with_stamped_metadata(self, bridge, mock_provider, client_caller):
        result = await bridge.initiate_outbound(
            client_caller,
            phone_number="+919876543210",
            agent_id="agent-b",
            metadata={"campaign": "renewals", "call_source": "spoofed"}
        )

        payload = mock_provider.initiate_call.await_args.args[0]
        assert payload["agent_id"] == "agent-b"
        assert payload["recipient_phone_number"] == "+919876543210"
        assert payload["metadata"]["campaign"] == "renewals"
        assert payload["metadata"]["call_source"] == "knowlarity_outbound"
        assert payload["metadata"]["knowlarity_sr_number"] == "+918000000000"
        assert payload["metadata"]["initiated_by"] == "ops@example.com"
        assert "initiated_at" in payload["metadata"]

        assert result["success"] is True
        assert result["message"] == "Outbound call initiated successfully"
        assert result["call_details"] == {
            "phone_number": "+919876543210",
            "agent_id": "agent-b",
            "knowlarity_number": "+918000000000",
            "bolna_execution_id": "exec-1",
            "initiated_by": "Ops",
        }
        assert result["bolna_response"] == {"execution_id": "exec-1", "status": "queued"}

    @pytest.mark.asyncio
    async def test_falls_back_to_default_agent(self, bridge, mock_provider, client_caller):
        await bridge.initiate_outbound(client_caller, phone_number="+919876543210")

        payload = mock_provider.initiate_call.await_args.args[0]
        assert payload["agent_id"] == "agent-a"

    @pytest.mark.asyncio
    async def test_execution_id_falls_back_to_id(self, bridge, mock_provider, client_caller):
        mock_provider.initiate_call.return_value = {"id": "exec-9"}

        result = await bridge.initiate_outbound(client_caller, phone_number="+919876543210")
        assert result["call_details"]["bolna_execution_id"] == "exec-9"

    @pytest.mark.asyncio
    async def test_phone_number_required(self, bridge, mock_provider, client_caller):
        with pytest.raises(InvalidRequestException, match="phone_number is required"):
            await bridge.initiate_outbound(client_caller, phone_number=None)
        mock_provider.initiate_call.assert_not_called()

    @pytest.mark.asyncio
    async def test_agent_required_without_default(self, mock_provider, mock_carrier, client_caller):
        bridge = CallBridgeService(mock_provider, mock_carrier, default_agent_id=None)

        with pytest.raises(InvalidRequestException):
            await bridge.initiate_outbound(client_caller, phone_number="+919876543210")

    @pytest.mark.asyncio
    async def test_foreign_agent_denied(self, bridge, mock_provider, client_caller):
        with pytest.raises(AgentAccessDeniedException):
            await bridge.initiate_outbound(client_caller, phone_number="+91987", agent_id="agent-z")
        mock_provider.initiate_call.assert_not_called()

    @pytest.mark.asyncio
    async def test_admin_may_use_any_agent(self, bridge, mock_provider, admin_caller):
        await bridge.initiate_outbound(admin_caller, phone_number="+91987", agent_id="agent-z")
        mock_provider.initiate_call.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_carrier_configuration(self, bridge, mock_carrier, client_caller):
        mock_carrier.is_configured.return_value = False

        with pytest.raises(ConfigurationException):
            await bridge.initiate_outbound(client_caller, phone_number="+91987")

    @pytest.mark.asyncio
    async def test_missing_provider_configuration(self, bridge, mock_provider, client_caller):
        mock_provider.is_configured.return_value = False

        with pytest.raises(ConfigurationException):
            await bridge.initiate_outbound(client_caller, phone_number="+91987")

    @pytest.mark.asyncio
    async def test_upstream_failure_reports_500(self, bridge, mock_provider, client_caller):
        mock_provider.initiate_call.side_effect = UpstreamServiceException(
            "bolna", "Failed to initiate Bolna call", upstream_status=422, body='{"detail":"bad number"}'
        )

        with pytest.raises(UpstreamServiceException) as exc_info:
            await bridge.initiate_outbound(client_caller, phone_number="+91987")

        assert exc_info.value.status_code == 500
        assert exc_info.value.details["body"] == '{"detail":"bad number"}'
        assert exc_info.value.upstream_status == 422


class TestInbound:

    @pytest.mark.asyncio
    async def test_routes_to_default_agent(self, bridge, mock_provider):
        result = await bridge.route_inbound({
            "caller_id": "98765 43210",
            "uuid": "kn-123",
            "sr_number": "+918000000000",
            "call_type": "incoming",
            "start_time": "2024-01-01 10:00:00",
        })

        payload = mock_provider.initiate_call.await_args.args[0]
        assert payload["agent_id"] == "agent-a"
        assert payload["recipient_phone_number"] == "+919876543210"
        assert payload["metadata"]["knowlarity_uuid"] == "kn-123"
        assert payload["metadata"]["knowlarity_sr_number"] == "+918000000000"
        assert payload["metadata"]["call_source"] == "knowlarity_inbound"
        assert payload["metadata"]["start_time"] == "2024-01-01 10:00:00"

        assert result == {
            "success": True,
            "message": "Call routed to Bolna agent",
            "knowlarity_call_id": "kn-123",
            "bolna_execution_id": "exec-1",
        }

    @pytest.mark.asyncio
    async def test_accepts_alternate_field_names(self, bridge, mock_provider):
        result = await bridge.route_inbound({"callerId": "+14155550100", "call_id": "c-1", "dispnumber": "+9180"})

        payload = mock_provider.initiate_call.await_args.args[0]
        assert payload["recipient_phone_number"] == "+14155550100"
        assert payload["metadata"]["knowlarity_sr_number"] == "+9180"
        assert result["knowlarity_call_id"] == "c-1"

    @pytest.mark.asyncio
    async def test_caller_id_required(self, bridge, mock_provider):
        with pytest.raises(InvalidRequestException, match="caller_id"):
            await bridge.route_inbound({"uuid": "kn-123"})
        mock_provider.initiate_call.assert_not_called()

    @pytest.mark.asyncio
    async def test_default_agent_required(self, mock_provider, mock_carrier):
        bridge = CallBridgeService(mock_provider, mock_carrier, default_agent_id=None)

        with pytest.raises(ConfigurationException):
            await bridge.route_inbound({"caller_id": "9876543210"})


class TestOutboundStatus:

    def test_enabled_when_everything_is_configured(self, bridge, client_caller):
        status = bridge.outbound_status(client_caller)

        assert status["outbound_calls_enabled"] is True
        assert status["knowlarity_number"] == "+918000000000"
        assert [agent["bolna_agent_id"] for agent in status["available_agents"]] == ["agent-a", "agent-b"]
        assert status["user"] == {"name": "Ops", "role": "client"}

    def test_disabled_without_carrier(self, bridge, mock_carrier, client_caller):
        mock_carrier.is_configured.return_value = False
        assert bridge.outbound_status(client_caller)["outbound_calls_enabled"] is False
