# src/routes/execution_routes.py
"""
Execution routes: merged listing and metrics across the caller's agents,
plus single-execution and log lookups.
"""

from fastapi import APIRouter, Depends, Query
from dependency_injector.wiring import Provide, inject
from typing import Dict, Any, Optional
import logging

from di.container import Container
from config.settings import DEFAULT_PAGE_SIZE
from core.entities.agent import CallerIdentity
from core.interfaces.services import IAggregationService, IAnalyticsService
from middleware.auth_middleware import get_current_user

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
@inject
async def list_executions(
    page_number: int = Query(1, description="1-based page of the merged result"),
    page_size: int = Query(DEFAULT_PAGE_SIZE, description="Records per page"),
    status: Optional[str] = Query(None),
    call_type: Optional[str] = Query(None),
    agent_id: Optional[str] = Query(None, description="Restrict to one owned agent"),
    caller: CallerIdentity = Depends(get_current_user),
    aggregation_service: IAggregationService = Depends(Provide[Container.aggregation_service])
) -> Dict[str, Any]:
    """Executions of every agent the caller may access, newest first"""
    agent_ids = aggregation_service.resolve_agent_ids(caller, agent_id)
    page = await aggregation_service.list_executions(
        agent_ids,
        page_number=page_number,
        page_size=page_size,
        status=status,
        call_type=call_type
    )
    return page.to_dict()


@router.get("/metrics")
@inject
async def get_execution_metrics(
    agent_id: Optional[str] = Query(None),
    caller: CallerIdentity = Depends(get_current_user),
    aggregation_service: IAggregationService = Depends(Provide[Container.aggregation_service]),
    analytics_service: IAnalyticsService = Depends(Provide[Container.analytics_service])
) -> Dict[str, Any]:
    agent_ids = aggregation_service.resolve_agent_ids(caller, agent_id)
    metrics = await analytics_service.get_metrics(agent_ids)
    return metrics.to_dict()


@router.get("/{execution_id}")
@inject
async def get_execution(
    execution_id: str,
    agent_id: Optional[str] = Query(None),
    caller: CallerIdentity = Depends(get_current_user),
    aggregation_service: IAggregationService = Depends(Provide[Container.aggregation_service])
) -> Dict[str, Any]:
    return await aggregation_service.get_execution(caller, execution_id, agent_id)


@router.get("/{execution_id}/log")
@inject
async def get_execution_log(
    execution_id: str,
    caller: CallerIdentity = Depends(get_current_user),
    aggregation_service: IAggregationService = Depends(Provide[Container.aggregation_service])
) -> Any:
    logger.debug(f"Execution log {execution_id} requested by {caller.email}")
    return await aggregation_service.get_execution_log(execution_id)
