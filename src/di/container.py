# src/di/container.py
"""
Main dependency injection container for the application.
"""

from dependency_injector import containers, providers

from application.services.conversation_service import ConversationService
from application.services.live_stream_service import LiveStreamService
from application.services.aggregation_service import AggregationService
from application.services.analytics_service import AnalyticsService
from application.services.call_bridge_service import CallBridgeService
from application.services.batch_service import BatchService

from infrastructure.messaging.events import InMemoryEventBus
from infrastructure.storage.conversation_store import (
    InMemoryConversationStore,
    FileConversationStore
)
from infrastructure.storage.user_directory import JsonUserDirectory
from infrastructure.external.bolna_service import BolnaService
from infrastructure.external.knowlarity_service import KnowlarityService

from config.settings import settings


ROUTE_MODULES = [
    "routes.auth_routes",
    "routes.webhook_routes",
    "routes.live_routes",
    "routes.execution_routes",
    "routes.batch_routes",
    "routes.knowlarity_routes",
    "routes.healthcheck_handlers",
]


class Container(containers.DeclarativeContainer):
    """Main dependency injection container."""

    # Configuration
    config = providers.Object(settings)

    # Messaging: one bus per container, shared by the store and every stream
    event_bus = providers.Singleton(InMemoryEventBus)

    # Latest-conversation store, selected by CONVERSATION_STORE_BACKEND
    store_backend = providers.Object(settings.CONVERSATION_STORE_BACKEND)

    conversation_store = providers.Selector(
        store_backend,
        memory=providers.Singleton(
            InMemoryConversationStore,
            event_bus=event_bus
        ),
        file=providers.Singleton(
            FileConversationStore,
            event_bus=event_bus,
            file_path=config.provided.CONVERSATION_STORE_PATH
        )
    )

    user_directory = providers.Singleton(
        JsonUserDirectory,
        file_path=config.provided.USERS_FILE
    )

    # External Services
    bolna_service = providers.Singleton(
        BolnaService,
        api_key=config.provided.BOLNA_API_KEY,
        api_url=config.provided.BOLNA_API_URL,
        base_url=config.provided.BOLNA_BASE_URL
    )

    knowlarity_service = providers.Singleton(
        KnowlarityService,
        api_key=config.provided.KNOWLARITY_API_KEY,
        sr_number=config.provided.KNOWLARITY_SR_NUMBER,
        click_to_call_url=config.provided.KNOWLARITY_C2C_URL,
        call_log_url=config.provided.KNOWLARITY_CALL_LOG_URL
    )

    # Application Services
    conversation_service = providers.Factory(
        ConversationService,
        conversation_store=conversation_store
    )

    live_stream_service = providers.Factory(
        LiveStreamService,
        event_bus=event_bus,
        heartbeat_interval=config.provided.SSE_HEARTBEAT_INTERVAL
    )

    aggregation_service = providers.Factory(
        AggregationService,
        provider=bolna_service,
        fetch_limit=config.provided.EXECUTION_FETCH_LIMIT,
        default_agent_id=config.provided.BOLNA_AGENT_ID
    )

    analytics_service = providers.Factory(
        AnalyticsService,
        aggregation_service=aggregation_service
    )

    call_bridge_service = providers.Factory(
        CallBridgeService,
        provider=bolna_service,
        carrier=knowlarity_service,
        default_agent_id=config.provided.BOLNA_AGENT_ID
    )

    batch_service = providers.Factory(
        BatchService,
        provider=bolna_service,
        default_agent_id=config.provided.BOLNA_AGENT_ID,
        run_delay_minutes=config.provided.BATCH_RUN_DELAY_MINUTES
    )
