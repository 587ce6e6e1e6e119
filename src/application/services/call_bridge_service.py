# src/application/services/call_bridge_service.py
"""
Call bridges between the telephony carrier and the voice agent provider.

Both directions are a single "initiate call" request to the provider. The
bridge returns as soon as the provider accepts the call; it never waits for
the call to finish and never retries.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from core.entities.agent import CallerIdentity
from core.exceptions import (
    AgentAccessDeniedException,
    ConfigurationException,
    InvalidRequestException,
    UpstreamServiceException
)
from core.interfaces.external import IVoiceAgentProvider, ITelephonyCarrier
from core.interfaces.services import ICallBridgeService
from utils.utils import format_phone_number

logger = logging.getLogger(__name__)

OUTBOUND_SOURCE = "knowlarity_outbound"
INBOUND_SOURCE = "knowlarity_inbound"


def _execution_id(response: Any) -> Optional[str]:
    if not isinstance(response, dict):
        return None
    return response.get("execution_id") or response.get("id")


class CallBridgeService(ICallBridgeService):
    """Outbound (dashboard -> customer) and inbound (carrier -> agent) bridges."""

    def __init__(
        self,
        provider: IVoiceAgentProvider,
        carrier: ITelephonyCarrier,
        default_agent_id: Optional[str] = None
    ):
        self.provider = provider
        self.carrier = carrier
        self.default_agent_id = default_agent_id

    async def initiate_outbound(
        self,
        caller: CallerIdentity,
        phone_number: Optional[str],
        agent_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        if not phone_number:
            raise InvalidRequestException("phone_number is required")

        if not self.provider.is_configured():
            logger.error("Missing Bolna API configuration")
            raise ConfigurationException("BOLNA_API_KEY")
        if not self.carrier.is_configured():
            logger.error("Missing Knowlarity configuration")
            raise ConfigurationException("KNOWLARITY_API_KEY/KNOWLARITY_SR_NUMBER")

        effective_agent_id = agent_id or self.default_agent_id
        if not effective_agent_id:
            raise InvalidRequestException("agent_id is required")
        if not caller.can_access_agent(effective_agent_id):
            raise AgentAccessDeniedException(effective_agent_id)

        payload = {
            "agent_id": effective_agent_id,
            "recipient_phone_number": phone_number,
            "metadata": {
                **(metadata or {}),
                "call_source": OUTBOUND_SOURCE,
                "knowlarity_sr_number": self.carrier.sr_number,
                "initiated_by": caller.email,
                "initiated_at": datetime.now(timezone.utc).isoformat(),
            },
        }

        logger.info(f"Initiating outbound call to {phone_number} via agent {effective_agent_id}")
        try:
            response = await self.provider.initiate_call(payload)
        except UpstreamServiceException as e:
            # bridge failures always surface as 500, whatever the provider said
            raise e.with_status(500)

        logger.info(f"Outbound call accepted: execution {_execution_id(response)}")
        return {
            "success": True,
            "message": "Outbound call initiated successfully",
            "call_details": {
                "phone_number": phone_number,
                "agent_id": effective_agent_id,
                "knowlarity_number": self.carrier.sr_number,
                "bolna_execution_id": _execution_id(response),
                "initiated_by": caller.name,
            },
            "bolna_response": response,
        }

    async def route_inbound(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise InvalidRequestException("Webhook payload must be a JSON object")

        caller_number = payload.get("caller_id") or payload.get("callerId")
        if not caller_number:
            raise InvalidRequestException("Missing caller_id in webhook payload")

        call_id = payload.get("uuid") or payload.get("call_id")
        sr_number = payload.get("sr_number") or payload.get("dispnumber")

        if not self.provider.is_configured():
            logger.error("Missing Bolna API configuration")
            raise ConfigurationException("BOLNA_API_KEY")
        if not self.default_agent_id:
            logger.error("Missing default Bolna agent")
            raise ConfigurationException("BOLNA_AGENT_ID")

        call_payload = {
            "agent_id": self.default_agent_id,
            "recipient_phone_number": format_phone_number(str(caller_number)),
            "metadata": {
                "knowlarity_uuid": call_id,
                "knowlarity_sr_number": sr_number,
                "call_source": INBOUND_SOURCE,
                "call_type": payload.get("call_type"),
                "start_time": payload.get("start_time"),
            },
        }

        logger.info(f"Routing inbound call {call_id} to agent {self.default_agent_id}")
        try:
            response = await self.provider.initiate_call(call_payload)
        except UpstreamServiceException as e:
            raise e.with_status(500)

        return {
            "success": True,
            "message": "Call routed to Bolna agent",
            "knowlarity_call_id": call_id,
            "bolna_execution_id": _execution_id(response),
        }

    def outbound_status(self, caller: CallerIdentity) -> Dict[str, Any]:
        return {
            "outbound_calls_enabled": (
                self.carrier.is_configured()
                and self.provider.is_configured()
                and bool(self.default_agent_id)
            ),
            "knowlarity_number": self.carrier.sr_number,
            "available_agents": [agent.to_dict() for agent in caller.agents],
            "user": {
                "name": caller.name,
                "role": caller.role.value,
            },
        }
