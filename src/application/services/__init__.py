# src/application/services/__init__.py
"""
Application services for business use cases and workflows.
"""

from .conversation_service import ConversationService
from .live_stream_service import LiveStreamService, LiveStreamSession, StreamState
from .aggregation_service import AggregationService
from .analytics_service import AnalyticsService
from .call_bridge_service import CallBridgeService
from .batch_service import BatchService

__all__ = [
    "ConversationService",
    "LiveStreamService",
    "LiveStreamSession",
    "StreamState",
    "AggregationService",
    "AnalyticsService",
    "CallBridgeService",
    "BatchService"
]
