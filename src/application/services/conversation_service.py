# src/application/services/conversation_service.py
"""
Conversation service for webhook ingestion and latest-conversation reads.
"""

import logging
from typing import Dict, Any, Optional

from core.entities.conversation import ConversationRecord
from core.exceptions import InvalidRequestException
from core.interfaces.repositories import IConversationStore
from core.interfaces.services import IConversationService

logger = logging.getLogger(__name__)


class ConversationService(IConversationService):
    """Service for the single current conversation."""

    def __init__(self, conversation_store: IConversationStore):
        self.conversation_store = conversation_store

    async def ingest_webhook(self, payload: Any) -> str:
        """Store a call-result payload verbatim, replacing the previous one."""
        if not isinstance(payload, dict):
            raise InvalidRequestException("Missing required fields: id and transcript")

        record = ConversationRecord(payload)
        if not record.is_valid_webhook():
            raise InvalidRequestException("Missing required fields: id and transcript")

        await self.conversation_store.set(payload)

        logger.info(f"Received webhook for conversation {record.id}")
        logger.debug(
            f"Transcript length: {len(record.transcript)} characters, status: {record.status_text}"
        )
        return record.id

    async def get_latest(self) -> Optional[Dict[str, Any]]:
        return await self.conversation_store.get()

    async def get_latest_transcript(self) -> Dict[str, Any]:
        """Parsed transcript lines of the current conversation."""
        payload = await self.conversation_store.get()
        if payload is None:
            return {"conversation": None, "messages": []}

        record = ConversationRecord(payload)
        return {
            "conversation": record.summary(),
            "messages": [line.to_dict() for line in record.parsed_transcript()],
        }
