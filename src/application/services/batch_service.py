# src/application/services/batch_service.py
"""
Batch service: thin authorization and validation layer over the provider's
bulk-calling (batch) endpoints. Batch lifecycle is owned upstream.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from core.entities.agent import CallerIdentity
from core.exceptions import (
    AgentAccessDeniedException,
    ConfigurationException,
    InvalidRequestException
)
from core.interfaces.external import IVoiceAgentProvider
from utils.utils import format_upstream_timestamp, parse_iso_datetime

logger = logging.getLogger(__name__)


class BatchService:
    """Upload, schedule, run, stop and delete provider batches."""

    def __init__(
        self,
        provider: IVoiceAgentProvider,
        default_agent_id: Optional[str] = None,
        run_delay_minutes: int = 3
    ):
        self.provider = provider
        self.default_agent_id = default_agent_id
        self.run_delay_minutes = run_delay_minutes

    def _require_provider(self) -> None:
        if not self.provider.is_configured():
            logger.error("Missing Bolna API configuration")
            raise ConfigurationException("BOLNA_API_KEY")

    @staticmethod
    def _require_batch_id(batch_id: Optional[str]) -> str:
        if not batch_id:
            raise InvalidRequestException("batch_id is required")
        return batch_id

    async def upload(
        self,
        caller: CallerIdentity,
        filename: Optional[str],
        content: Optional[bytes],
        content_type: Optional[str] = None,
        agent_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Forward a contact CSV to the provider as a new batch."""
        if not content:
            raise InvalidRequestException("CSV file is required")
        self._require_provider()

        effective_agent_id = agent_id or self.default_agent_id
        if not effective_agent_id:
            raise InvalidRequestException("Agent ID is required")
        if not caller.can_access_agent(effective_agent_id):
            raise AgentAccessDeniedException(effective_agent_id)

        logger.info(
            f"Uploading batch CSV for agent {effective_agent_id}: "
            f"{filename} ({len(content)} bytes)"
        )
        response = await self.provider.create_batch(
            effective_agent_id,
            filename or "batch.csv",
            content,
            content_type
        )
        logger.info(f"Batch uploaded: {response.get('batch_id')}")
        return {
            "success": True,
            "message": "Batch uploaded successfully",
            "batch_id": response.get("batch_id"),
            "agent_id": effective_agent_id,
            "uploaded_by": caller.email,
            "data": response,
        }

    async def schedule(
        self,
        caller: CallerIdentity,
        batch_id: Optional[str],
        scheduled_time: Optional[str]
    ) -> Dict[str, Any]:
        batch_id = self._require_batch_id(batch_id)
        if not scheduled_time:
            raise InvalidRequestException(
                "scheduled_time is required (ISO 8601 format with timezone)"
            )

        scheduled_at = parse_iso_datetime(scheduled_time)
        if scheduled_at is None:
            raise InvalidRequestException(
                "Invalid scheduled_time format. Use ISO 8601 format "
                "(e.g., 2024-01-25T14:30:00+05:30)"
            )
        if scheduled_at < datetime.now(timezone.utc):
            raise InvalidRequestException("scheduled_time must be in the future")

        self._require_provider()
        logger.info(f"Scheduling batch {batch_id} for {scheduled_time}")
        response = await self.provider.schedule_batch(batch_id, scheduled_time)
        return {
            "success": True,
            "message": "Batch scheduled successfully",
            "batch_id": batch_id,
            "scheduled_time": scheduled_time,
            "scheduled_by": caller.email,
            "data": response,
        }

    async def run(self, caller: CallerIdentity, batch_id: Optional[str]) -> Dict[str, Any]:
        """Schedule a batch a few minutes from now; the provider rejects past times."""
        batch_id = self._require_batch_id(batch_id)
        self._require_provider()

        run_at = datetime.now(timezone.utc) + timedelta(minutes=self.run_delay_minutes)
        scheduled_time = format_upstream_timestamp(run_at)

        logger.info(f"Running batch {batch_id}, scheduled for {scheduled_time}")
        response = await self.provider.schedule_batch(batch_id, scheduled_time)
        return {
            "success": True,
            "message": "Batch execution started",
            "batch_id": batch_id,
            "scheduled_time": scheduled_time,
            "started_by": caller.email,
            "data": response,
        }

    async def stop(self, caller: CallerIdentity, batch_id: str) -> Dict[str, Any]:
        batch_id = self._require_batch_id(batch_id)
        self._require_provider()
        await self.provider.stop_batch(batch_id)
        logger.info(f"Batch {batch_id} stopped by {caller.email}")
        return {
            "success": True,
            "message": "Batch stopped successfully",
            "batch_id": batch_id,
            "stopped_by": caller.email,
        }

    async def delete(self, caller: CallerIdentity, batch_id: str) -> Dict[str, Any]:
        batch_id = self._require_batch_id(batch_id)
        self._require_provider()
        await self.provider.delete_batch(batch_id)
        logger.info(f"Batch {batch_id} deleted by {caller.email}")
        return {
            "success": True,
            "message": "Batch deleted successfully",
            "batch_id": batch_id,
            "deleted_by": caller.email,
        }
