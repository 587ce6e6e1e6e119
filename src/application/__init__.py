# src/application/__init__.py
"""
Application Services Layer

This layer contains the application services that orchestrate the dashboard
use cases: webhook ingestion, live streaming, multi-agent aggregation,
metrics and call bridging.
"""

from .services.conversation_service import ConversationService
from .services.live_stream_service import LiveStreamService
from .services.aggregation_service import AggregationService
from .services.analytics_service import AnalyticsService
from .services.call_bridge_service import CallBridgeService
from .services.batch_service import BatchService

__all__ = [
    "ConversationService",
    "LiveStreamService",
    "AggregationService",
    "AnalyticsService",
    "CallBridgeService",
    "BatchService"
]
