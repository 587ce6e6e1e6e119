# src/infrastructure/messaging/events.py
import logging
import threading
from typing import Any, List

from core.interfaces.events import IEventBus, ISubscription, Subscriber

logger = logging.getLogger(__name__)


class Subscription(ISubscription):
    """Unsubscribe handle bound to one registration."""

    def __init__(self, bus: "InMemoryEventBus", callback: Subscriber):
        self._bus = bus
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def __call__(self) -> None:
        if not self._active:
            return
        self._active = False
        self._bus._remove(self)

    @property
    def callback(self) -> Subscriber:
        return self._callback


class InMemoryEventBus(IEventBus):
    """In-memory event bus implementation"""

    def __init__(self):
        self._subscriptions: List[Subscription] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Subscriber) -> Subscription:
        """Register callback; returns its unsubscribe handle"""
        subscription = Subscription(self, callback)
        with self._lock:
            self._subscriptions.append(subscription)
        logger.debug(f"Subscriber added, {self.get_subscriber_count()} active")
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            try:
                self._subscriptions.remove(subscription)
            except ValueError:
                pass  # already removed
        logger.debug(f"Subscriber removed, {self.get_subscriber_count()} active")

    def publish(self, value: Any) -> None:
        """Deliver value to every subscriber registered at call entry"""
        with self._lock:
            snapshot = list(self._subscriptions)

        delivered = 0
        for subscription in snapshot:
            # unsubscribed after the snapshot was taken
            if not subscription.active:
                continue
            try:
                subscription.callback(value)
                delivered += 1
            except Exception as e:
                logger.error(f"Subscriber failed during publish: {e}", exc_info=True)

        logger.debug(f"Published value to {delivered}/{len(snapshot)} subscribers")

    def get_subscriber_count(self) -> int:
        """Get number of active subscribers"""
        with self._lock:
            return len(self._subscriptions)
