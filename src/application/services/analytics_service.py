# src/application/services/analytics_service.py
"""
Analytics service for execution metrics across a caller's agents.
"""

import logging
from typing import List

from core.entities.analytics import ExecutionMetrics
from core.interfaces.services import IAggregationService, IAnalyticsService

logger = logging.getLogger(__name__)


class AnalyticsService(IAnalyticsService):
    """Service for execution metrics reporting."""

    def __init__(self, aggregation_service: IAggregationService):
        self.aggregation_service = aggregation_service

    async def get_metrics(self, agent_ids: List[str]) -> ExecutionMetrics:
        """Reduce every execution of ``agent_ids`` to summary statistics."""
        executions = await self.aggregation_service.fetch_executions(agent_ids)
        metrics = ExecutionMetrics.from_executions(executions)
        logger.debug(
            f"Computed metrics over {metrics.total_executions} execution(s) "
            f"for {len(agent_ids)} agent(s)"
        )
        return metrics
