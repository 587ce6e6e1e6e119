# src/routes/webhook_routes.py
"""
Conversation webhook routes.

The voice agent provider posts the full call-result payload here when a call
finishes. The payload replaces the current conversation and is pushed to
every open live stream.
"""

from fastapi import APIRouter, Depends, Request
from dependency_injector.wiring import Provide, inject
from typing import Dict, Any
import logging

from di.container import Container
from core.exceptions import InvalidRequestException
from core.interfaces.services import IConversationService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("")
@inject
async def receive_webhook(
    request: Request,
    conversation_service: IConversationService = Depends(Provide[Container.conversation_service])
) -> Dict[str, Any]:
    """Accept a call-result payload; ``id`` and ``transcript`` are required"""
    try:
        payload = await request.json()
    except ValueError:
        raise InvalidRequestException("Request body must be valid JSON")

    conversation_id = await conversation_service.ingest_webhook(payload)
    return {
        "success": True,
        "message": "Webhook received successfully",
        "conversationId": conversation_id,
    }


@router.get("")
async def webhook_info(request: Request) -> Dict[str, Any]:
    return {
        "message": "Webhook endpoint is active",
        "endpoint": request.url.path,
        "method": "POST",
        "instructions": "Send POST requests with conversation data to this endpoint",
    }
