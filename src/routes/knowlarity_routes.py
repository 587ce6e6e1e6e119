# src/routes/knowlarity_routes.py
"""
Knowlarity carrier routes.

- /outbound: dashboard user asks a Bolna agent to call a customer
- /webhook: Knowlarity notifies an inbound call, routed to the default agent
- /click2call, /call-logs: direct carrier operations
"""

from fastapi import APIRouter, Depends, Query, Request
from dependency_injector.wiring import Provide, inject
from datetime import datetime, timezone
from typing import Dict, Any, Optional
import logging

from di.container import Container
from core.application.dto.requests import OutboundCallRequest, ClickToCallRequest
from core.entities.agent import CallerIdentity
from core.exceptions import InvalidRequestException
from core.interfaces.external import ITelephonyCarrier
from core.interfaces.services import ICallBridgeService
from middleware.auth_middleware import get_current_user
from utils.utils import format_phone_number

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/outbound")
@inject
async def initiate_outbound_call(
    request: OutboundCallRequest,
    caller: CallerIdentity = Depends(get_current_user),
    call_bridge_service: ICallBridgeService = Depends(Provide[Container.call_bridge_service])
) -> Dict[str, Any]:
    return await call_bridge_service.initiate_outbound(
        caller,
        phone_number=request.phone_number,
        agent_id=request.agent_id,
        metadata=request.metadata
    )


@router.get("/outbound")
@inject
async def outbound_status(
    caller: CallerIdentity = Depends(get_current_user),
    call_bridge_service: ICallBridgeService = Depends(Provide[Container.call_bridge_service])
) -> Dict[str, Any]:
    """Whether outbound calling is configured, and which agents the user can use"""
    return call_bridge_service.outbound_status(caller)


@router.post("/webhook")
@inject
async def receive_inbound_call(
    request: Request,
    call_bridge_service: ICallBridgeService = Depends(Provide[Container.call_bridge_service])
) -> Dict[str, Any]:
    logger.info(f"Knowlarity webhook from {request.headers.get('user-agent')}")
    try:
        payload = await request.json()
    except ValueError:
        raise InvalidRequestException("Request body must be valid JSON")
    return await call_bridge_service.route_inbound(payload)


@router.get("/webhook")
async def inbound_webhook_info() -> Dict[str, Any]:
    return {
        "message": "Knowlarity webhook endpoint is active",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/click2call")
@inject
async def click_to_call(
    request: ClickToCallRequest,
    caller: CallerIdentity = Depends(get_current_user),
    knowlarity_service: ITelephonyCarrier = Depends(Provide[Container.knowlarity_service])
) -> Dict[str, Any]:
    customer_number = format_phone_number(request.customer_number)
    logger.info(f"Click-to-call to {customer_number} requested by {caller.email}")
    response = await knowlarity_service.click_to_call(
        customer_number,
        agent_number=request.agent_number,
        caller_id=request.caller_id,
        is_promotional=request.is_promotional
    )
    return {
        "success": True,
        "customer_number": customer_number,
        "requested_by": caller.email,
        "data": response,
    }


@router.get("/call-logs")
@inject
async def get_call_logs(
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    limit: int = Query(100, ge=1),
    offset: int = Query(0, ge=0),
    caller: CallerIdentity = Depends(get_current_user),
    knowlarity_service: ITelephonyCarrier = Depends(Provide[Container.knowlarity_service])
) -> Any:
    return await knowlarity_service.get_call_logs(
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset
    )
