"""
Abstract contracts implemented by the infrastructure and application layers.
"""

from .events import IEventBus, IEventPublisher, IEventSubscriber, ISubscription, Subscriber
from .repositories import IConversationStore, IUserDirectory
from .external import IVoiceAgentProvider, ITelephonyCarrier
from .services import (
    IConversationService,
    ILiveStreamService,
    IAggregationService,
    IAnalyticsService,
    ICallBridgeService
)

__all__ = [
    "IEventBus",
    "IEventPublisher",
    "IEventSubscriber",
    "ISubscription",
    "Subscriber",
    "IConversationStore",
    "IUserDirectory",
    "IVoiceAgentProvider",
    "ITelephonyCarrier",
    "IConversationService",
    "ILiveStreamService",
    "IAggregationService",
    "IAnalyticsService",
    "ICallBridgeService"
]
