"""
Event interfaces for in-process change notification.

The bus carries plain values (conversation payloads) to synchronous
subscriber callbacks. There is no event typing, persistence or replay.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable

Subscriber = Callable[[Any], None]


class ISubscription(ABC):
    """Handle returned by ``subscribe``; calling it unregisters the callback."""

    @abstractmethod
    def __call__(self) -> None:
        """Remove the callback. Calling more than once is a no-op."""
        pass

    @property
    @abstractmethod
    def active(self) -> bool:
        """Whether the callback is still registered."""
        pass


class IEventPublisher(ABC):
    """Interface for publishing values to current subscribers."""

    @abstractmethod
    def publish(self, value: Any) -> None:
        """Deliver ``value`` to every subscriber registered at call entry.

        A failing subscriber must not prevent delivery to the others.
        """
        pass


class IEventSubscriber(ABC):
    """Interface for registering subscriber callbacks."""

    @abstractmethod
    def subscribe(self, callback: Subscriber) -> ISubscription:
        """Register ``callback`` and return its unsubscribe handle."""
        pass

    @abstractmethod
    def get_subscriber_count(self) -> int:
        """Number of currently registered callbacks."""
        pass


class IEventBus(IEventPublisher, IEventSubscriber):
    """Publisher and subscriber sides of the same bus."""
    pass
