# src/infrastructure/external/knowlarity_service.py
"""
Knowlarity service implementation for carrier telephony operations.
"""

import logging
from typing import Optional, Dict, Any

import aiohttp

from core.exceptions import ConfigurationException, UpstreamServiceException
from core.interfaces.external import ITelephonyCarrier
from utils.logger import log_timing

logger = logging.getLogger(__name__)

SERVICE_NAME = "knowlarity"


class KnowlarityService(ITelephonyCarrier):
    """Knowlarity implementation of the telephony carrier."""

    def __init__(
        self,
        api_key: Optional[str],
        sr_number: Optional[str],
        click_to_call_url: str = "https://konnect.knowlarity.com/konnect/makecall/",
        call_log_url: str = "https://kpi.knowlarity.com/Basic/v1/account/calllog"
    ):
        self.api_key = api_key
        self._sr_number = sr_number
        self.click_to_call_url = click_to_call_url
        self.call_log_url = call_log_url

    @property
    def sr_number(self) -> Optional[str]:
        return self._sr_number

    def is_configured(self) -> bool:
        return bool(self.api_key and self._sr_number)

    def _require_config(self) -> None:
        if not self.api_key:
            raise ConfigurationException("KNOWLARITY_API_KEY")
        if not self._sr_number:
            raise ConfigurationException("KNOWLARITY_SR_NUMBER")

    @log_timing(logger)
    async def click_to_call(
        self,
        customer_number: str,
        agent_number: Optional[str] = None,
        caller_id: str = "",
        is_promotional: bool = False
    ) -> Dict[str, Any]:
        """Connect ``agent_number`` (default: the SR number) with a customer."""
        self._require_config()

        params = {
            "api_key": self.api_key,
            "k_number": self._sr_number,
            "customer": customer_number,
            "agent_number": agent_number or self._sr_number,
            "caller_id": caller_id,
            "is_promotional": str(is_promotional).lower(),
        }
        logger.info(f"Knowlarity click-to-call request: customer={customer_number}")

        async with aiohttp.ClientSession() as session:
            async with session.get(
                self.click_to_call_url,
                headers={"X-API-Key": self.api_key},
                params=params
            ) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    logger.error(f"Knowlarity click-to-call failed: {response.status} - {error_text}")
                    raise UpstreamServiceException(
                        service=SERVICE_NAME,
                        message="Knowlarity Click2Call failed",
                        upstream_status=response.status,
                        body=error_text
                    )
                return await response.json(content_type=None)

    @log_timing(logger)
    async def get_call_logs(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Dict[str, Any]:
        if not self.api_key:
            raise ConfigurationException("KNOWLARITY_API_KEY")

        params = {"limit": str(limit), "offset": str(offset)}
        if start_date:
            params["start_date"] = start_date
        if end_date:
            params["end_date"] = end_date

        async with aiohttp.ClientSession() as session:
            async with session.get(
                self.call_log_url,
                headers={
                    "X-API-Key": self.api_key,
                    "Content-Type": "application/json"
                },
                params=params
            ) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    logger.error(f"Knowlarity call log fetch failed: {response.status} - {error_text}")
                    raise UpstreamServiceException(
                        service=SERVICE_NAME,
                        message="Failed to fetch call logs",
                        upstream_status=response.status,
                        body=error_text
                    )
                return await response.json(content_type=None)
