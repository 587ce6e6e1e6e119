"""
Service interfaces for the application layer.

These interfaces define the operations routes call; implementations live in
application.services.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any, AsyncIterator

from ..entities.agent import CallerIdentity
from ..entities.analytics import ExecutionMetrics, MergedPage


class IConversationService(ABC):
    """Webhook ingestion and reads of the latest conversation."""

    @abstractmethod
    async def ingest_webhook(self, payload: Any) -> str:
        """Validate and store a webhook payload; returns the conversation id."""
        pass

    @abstractmethod
    async def get_latest(self) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def get_latest_transcript(self) -> Dict[str, Any]:
        pass


class ILiveStreamService(ABC):
    """Server-Sent Events sessions over the conversation event bus."""

    @abstractmethod
    def open_stream(self, client: Optional[str] = None) -> AsyncIterator[str]:
        """Async iterator of encoded SSE frames for one client."""
        pass


class IAggregationService(ABC):
    """Fan-out, merge, sort and paginate across a caller's agents."""

    @abstractmethod
    def resolve_agent_ids(
        self,
        caller: CallerIdentity,
        requested_agent_id: Optional[str] = None
    ) -> List[str]:
        """Agent ids the caller may query, narrowed to ``requested_agent_id``."""
        pass

    @abstractmethod
    async def fetch_executions(
        self,
        agent_ids: List[str],
        status: Optional[str] = None,
        call_type: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Every execution across ``agent_ids``, newest first."""
        pass

    @abstractmethod
    async def list_executions(
        self,
        agent_ids: List[str],
        page_number: int = 1,
        page_size: int = 20,
        status: Optional[str] = None,
        call_type: Optional[str] = None
    ) -> MergedPage:
        """Merged page of executions across ``agent_ids``."""
        pass

    @abstractmethod
    async def list_batches(self, agent_ids: List[str]) -> List[Dict[str, Any]]:
        """All batches across ``agent_ids``, newest first."""
        pass

    @abstractmethod
    async def get_execution(
        self,
        caller: CallerIdentity,
        execution_id: str,
        agent_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """One execution of an agent the caller may access."""
        pass

    @abstractmethod
    async def get_execution_log(self, execution_id: str) -> Any:
        pass


class IAnalyticsService(ABC):
    """Summary statistics over a caller's executions."""

    @abstractmethod
    async def get_metrics(self, agent_ids: List[str]) -> ExecutionMetrics:
        pass


class ICallBridgeService(ABC):
    """Translate dashboard requests and carrier webhooks into provider calls."""

    @abstractmethod
    async def initiate_outbound(
        self,
        caller: CallerIdentity,
        phone_number: Optional[str],
        agent_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def route_inbound(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def outbound_status(self, caller: CallerIdentity) -> Dict[str, Any]:
        pass
