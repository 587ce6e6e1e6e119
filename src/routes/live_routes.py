# src/routes/live_routes.py
"""
Live conversation routes: the current conversation and its SSE stream.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from dependency_injector.wiring import Provide, inject
from typing import Dict, Any, Optional
import logging

from di.container import Container
from core.interfaces.services import IConversationService, ILiveStreamService
from application.services.live_stream_service import SSE_HEADERS

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/latest")
@inject
async def get_latest_conversation(
    conversation_service: IConversationService = Depends(Provide[Container.conversation_service])
) -> Optional[Dict[str, Any]]:
    """Current conversation, or null when none has been received yet"""
    return await conversation_service.get_latest()


@router.get("/latest/transcript")
@inject
async def get_latest_transcript(
    conversation_service: IConversationService = Depends(Provide[Container.conversation_service])
) -> Dict[str, Any]:
    return await conversation_service.get_latest_transcript()


@router.get("/events")
@inject
async def stream_events(
    request: Request,
    live_stream_service: ILiveStreamService = Depends(Provide[Container.live_stream_service])
) -> StreamingResponse:
    """Server-Sent Events stream of new conversations plus heartbeats"""
    client = request.client.host if request.client else None
    return StreamingResponse(
        live_stream_service.open_stream(client=client),
        media_type="text/event-stream",
        headers=SSE_HEADERS
    )
