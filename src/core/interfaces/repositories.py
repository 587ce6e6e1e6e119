"""
Repository interfaces for state the backend keeps or looks up.

The conversation store is the only state this service owns. The user
directory is an external collaborator (credential/session store) specified
here only by its contract.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

from ..entities.agent import CallerIdentity


class IConversationStore(ABC):
    """Single-slot holder of the most recent conversation payload.

    ``set`` replaces the value unconditionally and then publishes it on the
    event bus. Concurrent writers race with last-write-wins semantics.
    """

    @abstractmethod
    async def set(self, record: Dict[str, Any]) -> None:
        """Replace the current conversation and notify subscribers."""
        pass

    @abstractmethod
    async def get(self) -> Optional[Dict[str, Any]]:
        """Current conversation, or None when nothing is stored."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Return to the empty state."""
        pass


class IUserDirectory(ABC):
    """Lookup of dashboard users and the agents they own."""

    @abstractmethod
    async def authenticate(self, email: str, api_key: str) -> Optional[CallerIdentity]:
        """Return the caller for valid credentials, else None."""
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[CallerIdentity]:
        """Fetch a caller by id."""
        pass
