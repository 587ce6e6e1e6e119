# src/infrastructure/external/bolna_service.py
"""
Bolna service implementation for the voice agent provider REST API.

Versioned endpoints (executions, calls) live under ``api_url`` (``.../v2``);
batch and log endpoints live under the unversioned ``base_url``.
"""

import logging
from typing import Optional, List, Dict, Any, Union

import aiohttp

from core.exceptions import ConfigurationException, UpstreamServiceException
from core.interfaces.external import IVoiceAgentProvider
from utils.logger import log_timing

logger = logging.getLogger(__name__)

SERVICE_NAME = "bolna"


class BolnaService(IVoiceAgentProvider):
    """Bolna implementation of the voice agent provider."""

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = "https://api.bolna.ai/v2",
        base_url: str = "https://api.bolna.ai"
    ):
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.base_url = base_url.rstrip("/")

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _headers(self, json_body: bool = True) -> Dict[str, str]:
        if not self.api_key:
            logger.error("Missing Bolna API configuration")
            raise ConfigurationException("BOLNA_API_KEY")
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def _request(
        self,
        method: str,
        url: str,
        error_message: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[aiohttp.FormData] = None,
        expect_body: bool = True
    ) -> Any:
        headers = self._headers(json_body=data is None)
        async with aiohttp.ClientSession() as session:
            async with session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json,
                data=data
            ) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    logger.error(f"Bolna API error: {response.status} - {error_text}")
                    raise UpstreamServiceException(
                        service=SERVICE_NAME,
                        message=error_message,
                        upstream_status=response.status,
                        body=error_text
                    )
                if not expect_body:
                    return None
                return await response.json(content_type=None)

    @log_timing(logger)
    async def list_executions(
        self,
        agent_id: str,
        page_number: int = 1,
        page_size: int = 20,
        status: Optional[str] = None,
        call_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """List executions for one agent."""
        params = {"page_number": str(page_number), "page_size": str(page_size)}
        if status:
            params["status"] = status
        if call_type:
            params["call_type"] = call_type

        return await self._request(
            "GET",
            f"{self.api_url}/agent/{agent_id}/executions",
            "Failed to fetch executions from Bolna API",
            params=params
        )

    @log_timing(logger)
    async def get_execution(self, agent_id: str, execution_id: str) -> Dict[str, Any]:
        return await self._request(
            "GET",
            f"{self.api_url}/agent/{agent_id}/execution/{execution_id}",
            "Failed to fetch execution from Bolna API"
        )

    @log_timing(logger)
    async def get_execution_log(self, execution_id: str) -> Union[Dict[str, Any], List[Any]]:
        # the log endpoint is not under the versioned prefix
        return await self._request(
            "GET",
            f"{self.base_url}/executions/{execution_id}/log",
            "Failed to fetch logs from Bolna API"
        )

    @log_timing(logger)
    async def list_batches(self, agent_id: str) -> Union[Dict[str, Any], List[Any]]:
        return await self._request(
            "GET",
            f"{self.base_url}/batches/{agent_id}/all",
            "Failed to fetch batches from Bolna API"
        )

    @log_timing(logger)
    async def create_batch(
        self,
        agent_id: str,
        filename: str,
        content: bytes,
        content_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """Upload a contact CSV; the provider answers with the new ``batch_id``."""
        data = aiohttp.FormData()
        data.add_field("agent_id", agent_id)
        data.add_field(
            "file",
            content,
            filename=filename,
            content_type=content_type or "text/csv"
        )
        return await self._request(
            "POST",
            f"{self.base_url}/batches",
            "Failed to upload batch",
            data=data
        )

    @log_timing(logger)
    async def schedule_batch(self, batch_id: str, scheduled_at: str) -> Dict[str, Any]:
        data = aiohttp.FormData()
        data.add_field("scheduled_at", scheduled_at)
        return await self._request(
            "POST",
            f"{self.base_url}/batches/{batch_id}/schedule",
            "Failed to schedule batch",
            data=data
        )

    @log_timing(logger)
    async def stop_batch(self, batch_id: str) -> None:
        await self._request(
            "POST",
            f"{self.base_url}/batches/{batch_id}/stop",
            "Failed to stop batch",
            expect_body=False
        )

    @log_timing(logger)
    async def delete_batch(self, batch_id: str) -> None:
        await self._request(
            "DELETE",
            f"{self.base_url}/batches/{batch_id}",
            "Failed to delete batch",
            expect_body=False
        )

    @log_timing(logger)
    async def initiate_call(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Place one call. Returns once the provider accepts it."""
        return await self._request(
            "POST",
            f"{self.api_url}/call",
            "Failed to initiate Bolna call",
            json=payload
        )
