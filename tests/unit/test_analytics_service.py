"""
Tests for the analytics (metrics) service.
"""

import pytest

from application.services.aggregation_service import AggregationService
from application.services.analytics_service import AnalyticsService
from core.exceptions import UpstreamServiceException


@pytest.mark.asyncio
async def test_metrics_across_agents(mock_provider):
    async def list_executions(agent_id, **kwargs):
        if agent_id == "agent-a":
            return {"data": [{"total_cost": 250, "status": "completed", "conversation_duration": 10}]}
        return {"data": [{"total_cost": 150, "status": "busy", "conversation_duration": 5}]}

    mock_provider.list_executions.side_effect = list_executions
    service = AnalyticsService(AggregationService(mock_provider))

    metrics = await service.get_metrics(["agent-a", "agent-b"])

    assert metrics.to_dict() == {
        "totalExecutions": 2,
        "totalCost": pytest.approx(4.0),
        "totalDuration": 15,
        "avgCost": pytest.approx(2.0),
        "avgDuration": pytest.approx(7.5),
        "statusCounts": {"busy": 1, "completed": 1},
    }


@pytest.mark.asyncio
async def test_metrics_with_failing_agent(mock_provider):
    async def list_executions(agent_id, **kwargs):
        if agent_id == "agent-a":
            raise UpstreamServiceException("bolna", "boom", upstream_status=500)
        return {"data": [{"total_cost": 100, "status": "completed", "conversation_duration": 4}]}

    mock_provider.list_executions.side_effect = list_executions
    service = AnalyticsService(AggregationService(mock_provider))

    metrics = await service.get_metrics(["agent-a", "agent-b"])

    assert metrics.total_executions == 1
    assert metrics.status_counts["completed"] == 1


@pytest.mark.asyncio
async def test_metrics_without_agents(mock_provider):
    service = AnalyticsService(AggregationService(mock_provider))

    metrics = await service.get_metrics([])

    assert metrics.total_executions == 0
    assert metrics.avg_cost == 0
    assert metrics.avg_duration == 0
    mock_provider.list_executions.assert_not_called()
