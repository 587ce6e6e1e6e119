from fastapi import APIRouter, Depends
from dependency_injector.wiring import Provide, inject
from typing import Dict
from datetime import datetime, timezone
import logging

from di.container import Container
from config.settings import CONVERSATION_STORE_BACKEND
from core.interfaces.events import IEventSubscriber
from core.interfaces.external import IVoiceAgentProvider, ITelephonyCarrier

logger = logging.getLogger(__name__)
healthcheck_router = APIRouter()


@healthcheck_router.get("")
@inject
async def health_check(
    event_bus: IEventSubscriber = Depends(Provide[Container.event_bus]),
    bolna_service: IVoiceAgentProvider = Depends(Provide[Container.bolna_service]),
    knowlarity_service: ITelephonyCarrier = Depends(Provide[Container.knowlarity_service])
) -> Dict:
    status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "store_backend": CONVERSATION_STORE_BACKEND,
        "live_subscribers": event_bus.get_subscriber_count(),
        "bolna": "configured",
        "knowlarity": "configured",
    }

    # Missing credentials only fail the requests that need them
    if not bolna_service.is_configured():
        logger.warning("Healthcheck: Bolna API key not configured")
        status["bolna"] = "not_configured"
        status["status"] = "degraded"

    if not knowlarity_service.is_configured():
        status["knowlarity"] = "not_configured"

    return status
