# src/application/services/aggregation_service.py
"""
Multi-agent aggregation: fan a query out across every upstream agent a caller
owns, merge the results newest first and paginate the merged set.

An agent whose fetch fails contributes nothing; the failure is logged and the
rest of the result is still returned.
"""

import asyncio
import logging
from typing import Optional, List, Dict, Any, Awaitable, Callable

import aiohttp

from core.entities.agent import CallerIdentity
from core.entities.analytics import MergedPage, merge_sorted_by_created_at
from core.exceptions import (
    AgentAccessDeniedException,
    InvalidRequestException,
    UpstreamServiceException
)
from core.interfaces.external import IVoiceAgentProvider
from core.interfaces.services import IAggregationService

logger = logging.getLogger(__name__)


def _extract_records(response: Any, key: str) -> List[Dict[str, Any]]:
    """Upstream list endpoints answer with a bare array or ``{key: [...]}``."""
    if isinstance(response, list):
        return [record for record in response if isinstance(record, dict)]
    if isinstance(response, dict) and isinstance(response.get(key), list):
        return [record for record in response[key] if isinstance(record, dict)]
    return []


def validate_page(page_number: int, page_size: int) -> None:
    if page_number < 1:
        raise InvalidRequestException(
            "page_number must be >= 1",
            details={"page_number": page_number}
        )
    if page_size < 1:
        raise InvalidRequestException(
            "page_size must be > 0",
            details={"page_size": page_size}
        )


class AggregationService(IAggregationService):
    """Aggregates executions and batches across agents."""

    def __init__(
        self,
        provider: IVoiceAgentProvider,
        fetch_limit: int = 1000,
        default_agent_id: Optional[str] = None
    ):
        self.provider = provider
        self.fetch_limit = fetch_limit
        self.default_agent_id = default_agent_id

    def resolve_agent_ids(
        self,
        caller: CallerIdentity,
        requested_agent_id: Optional[str] = None
    ) -> List[str]:
        if requested_agent_id:
            if not caller.can_access_agent(requested_agent_id):
                logger.warning(
                    f"User {caller.email} denied access to agent {requested_agent_id}"
                )
                raise AgentAccessDeniedException(requested_agent_id)
            return [requested_agent_id]
        return caller.agent_ids

    async def _fan_out(
        self,
        agent_ids: List[str],
        fetch: Callable[[str], Awaitable[Any]],
        key: str
    ) -> List[List[Dict[str, Any]]]:
        """Run ``fetch`` for every agent concurrently; failures yield ``[]``."""

        async def fetch_one(agent_id: str) -> List[Dict[str, Any]]:
            try:
                return _extract_records(await fetch(agent_id), key)
            except (UpstreamServiceException, aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.warning(f"Skipping agent {agent_id}: {e}")
                return []

        return await asyncio.gather(*(fetch_one(agent_id) for agent_id in agent_ids))

    async def fetch_executions(
        self,
        agent_ids: List[str],
        status: Optional[str] = None,
        call_type: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        if not agent_ids:
            return []

        logger.info(f"Fetching executions for {len(agent_ids)} agent(s)")
        # one capped page per agent; the merged set is paginated locally
        result_sets = await self._fan_out(
            agent_ids,
            lambda agent_id: self.provider.list_executions(
                agent_id,
                page_number=1,
                page_size=self.fetch_limit,
                status=status,
                call_type=call_type
            ),
            key="data"
        )
        return merge_sorted_by_created_at(result_sets)

    async def list_executions(
        self,
        agent_ids: List[str],
        page_number: int = 1,
        page_size: int = 20,
        status: Optional[str] = None,
        call_type: Optional[str] = None
    ) -> MergedPage:
        validate_page(page_number, page_size)
        if not agent_ids:
            return MergedPage.empty(page_number, page_size)

        merged = await self.fetch_executions(agent_ids, status=status, call_type=call_type)
        page = MergedPage.paginate(merged, page_number, page_size)
        logger.info(
            f"Merged {page.total_count} execution(s), returning page {page_number}/{page.total_pages}"
        )
        return page

    async def list_batches(self, agent_ids: List[str]) -> List[Dict[str, Any]]:
        if not agent_ids:
            return []

        logger.info(f"Fetching batches for {len(agent_ids)} agent(s)")
        result_sets = await self._fan_out(agent_ids, self.provider.list_batches, key="batches")
        batches = merge_sorted_by_created_at(result_sets)
        logger.info(f"Found {len(batches)} batch(es)")
        return batches

    async def get_execution(
        self,
        caller: CallerIdentity,
        execution_id: str,
        agent_id: Optional[str] = None
    ) -> Dict[str, Any]:
        effective_agent_id = agent_id or self.default_agent_id
        if not effective_agent_id:
            raise InvalidRequestException("agent_id is required")
        if not caller.can_access_agent(effective_agent_id):
            raise AgentAccessDeniedException(effective_agent_id)
        return await self.provider.get_execution(effective_agent_id, execution_id)

    async def get_execution_log(self, execution_id: str) -> Any:
        return await self.provider.get_execution_log(execution_id)
