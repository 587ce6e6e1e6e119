"""
External service interfaces for third-party integrations.

These interfaces define contracts for the voice agent provider (Bolna) and
the telephony carrier (Knowlarity). Implementations raise
``UpstreamServiceException`` on non-success responses and
``ConfigurationException`` when a credential is missing.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any, Union


class IVoiceAgentProvider(ABC):
    """Interface for the conversational-AI telephony provider."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the provider API key is present."""
        pass

    @abstractmethod
    async def list_executions(
        self,
        agent_id: str,
        page_number: int = 1,
        page_size: int = 20,
        status: Optional[str] = None,
        call_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """List executions for one agent; returns the upstream page object."""
        pass

    @abstractmethod
    async def get_execution(self, agent_id: str, execution_id: str) -> Dict[str, Any]:
        """Fetch a single execution."""
        pass

    @abstractmethod
    async def get_execution_log(self, execution_id: str) -> Union[Dict[str, Any], List[Any]]:
        """Fetch the execution log."""
        pass

    @abstractmethod
    async def list_batches(self, agent_id: str) -> Union[Dict[str, Any], List[Any]]:
        """List all batches for one agent."""
        pass

    @abstractmethod
    async def create_batch(
        self,
        agent_id: str,
        filename: str,
        content: bytes,
        content_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """Upload a contact CSV and create a batch."""
        pass

    @abstractmethod
    async def schedule_batch(self, batch_id: str, scheduled_at: str) -> Dict[str, Any]:
        """Schedule a batch to run at ``scheduled_at`` (ISO-8601 with offset)."""
        pass

    @abstractmethod
    async def stop_batch(self, batch_id: str) -> None:
        """Stop a running batch."""
        pass

    @abstractmethod
    async def delete_batch(self, batch_id: str) -> None:
        """Delete a batch."""
        pass

    @abstractmethod
    async def initiate_call(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Ask the provider to place one call; returns the acceptance body."""
        pass


class ITelephonyCarrier(ABC):
    """Interface for the telephony carrier."""

    @property
    @abstractmethod
    def sr_number(self) -> Optional[str]:
        """Carrier number calls are routed through."""
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether carrier credentials are present."""
        pass

    @abstractmethod
    async def click_to_call(
        self,
        customer_number: str,
        agent_number: Optional[str] = None,
        caller_id: str = "",
        is_promotional: bool = False
    ) -> Dict[str, Any]:
        """Connect an agent number with a customer."""
        pass

    @abstractmethod
    async def get_call_logs(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Dict[str, Any]:
        """Retrieve historical call records."""
        pass
