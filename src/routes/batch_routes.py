# src/routes/batch_routes.py
"""
Batch (bulk calling) routes.

Listing merges the batches of every agent the caller may access. The other
endpoints forward to the provider and stamp the acting user on the response.
"""

from fastapi import APIRouter, Depends, Query, UploadFile, File, Form
from dependency_injector.wiring import Provide, inject
from typing import Dict, Any, Optional
import logging

from di.container import Container
from core.application.dto.requests import BatchScheduleRequest, BatchRunRequest
from core.entities.agent import CallerIdentity
from core.entities.batch import annotate_batch
from core.interfaces.services import IAggregationService
from application.services.batch_service import BatchService
from middleware.auth_middleware import get_current_user

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/list")
@inject
async def list_batches(
    agent_id: Optional[str] = Query(None),
    caller: CallerIdentity = Depends(get_current_user),
    aggregation_service: IAggregationService = Depends(Provide[Container.aggregation_service])
) -> Dict[str, Any]:
    """All batches for the caller's agents, newest first"""
    agent_ids = aggregation_service.resolve_agent_ids(caller, agent_id)
    batches = await aggregation_service.list_batches(agent_ids)
    return {
        "batches": [annotate_batch(batch) for batch in batches],
        "total": len(batches),
    }


@router.post("/upload")
@inject
async def upload_batch(
    file: Optional[UploadFile] = File(None),
    agent_id: Optional[str] = Form(None),
    caller: CallerIdentity = Depends(get_current_user),
    batch_service: BatchService = Depends(Provide[Container.batch_service])
) -> Dict[str, Any]:
    """Upload a contact CSV as a new batch; the file is forwarded untouched"""
    content = await file.read() if file is not None else None
    return await batch_service.upload(
        caller,
        filename=file.filename if file is not None else None,
        content=content,
        content_type=file.content_type if file is not None else None,
        agent_id=agent_id
    )


@router.post("/schedule")
@inject
async def schedule_batch(
    request: BatchScheduleRequest,
    caller: CallerIdentity = Depends(get_current_user),
    batch_service: BatchService = Depends(Provide[Container.batch_service])
) -> Dict[str, Any]:
    return await batch_service.schedule(caller, request.batch_id, request.scheduled_time)


@router.post("/run")
@inject
async def run_batch(
    request: BatchRunRequest,
    caller: CallerIdentity = Depends(get_current_user),
    batch_service: BatchService = Depends(Provide[Container.batch_service])
) -> Dict[str, Any]:
    return await batch_service.run(caller, request.batch_id)


@router.post("/{batch_id}/stop")
@inject
async def stop_batch(
    batch_id: str,
    caller: CallerIdentity = Depends(get_current_user),
    batch_service: BatchService = Depends(Provide[Container.batch_service])
) -> Dict[str, Any]:
    return await batch_service.stop(caller, batch_id)


@router.delete("/{batch_id}")
@inject
async def delete_batch(
    batch_id: str,
    caller: CallerIdentity = Depends(get_current_user),
    batch_service: BatchService = Depends(Provide[Container.batch_service])
) -> Dict[str, Any]:
    return await batch_service.delete(caller, batch_id)
