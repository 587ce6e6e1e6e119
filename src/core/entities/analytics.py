"""
Analytics entities: execution summaries and merged pagination.

These are pure reductions over execution records fetched from the voice
agent provider. Unknown fields on a record are ignored.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Any, List, Iterable, Sequence

from utils.utils import timestamp_sort_key
from .conversation import normalize_status

# Only these buckets are counted; every execution still counts in totals.
TRACKED_STATUSES = ("busy", "completed")


def _number(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class ExecutionMetrics:
    """Summary statistics over a set of executions."""
    total_executions: int = 0
    total_cost: float = 0.0
    total_duration: float = 0.0
    status_counts: Dict[str, int] = field(
        default_factory=lambda: {status: 0 for status in TRACKED_STATUSES}
    )

    @property
    def avg_cost(self) -> float:
        if self.total_executions == 0:
            return 0.0
        return self.total_cost / self.total_executions

    @property
    def avg_duration(self) -> float:
        if self.total_executions == 0:
            return 0.0
        return self.total_duration / self.total_executions

    @classmethod
    def from_executions(cls, executions: Iterable[Dict[str, Any]]) -> "ExecutionMetrics":
        count = 0
        total_cost = 0.0
        total_duration = 0.0
        status_counts = {status: 0 for status in TRACKED_STATUSES}

        for execution in executions:
            count += 1
            # upstream cost is in hundredths of the display unit
            total_cost += _number(execution.get("total_cost")) / 100
            total_duration += _number(execution.get("conversation_duration"))
            status = normalize_status(execution.get("status"))
            if status in status_counts:
                status_counts[status] += 1

        return cls(
            total_executions=count,
            total_cost=total_cost,
            total_duration=total_duration,
            status_counts=status_counts,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalExecutions": self.total_executions,
            "totalCost": self.total_cost,
            "totalDuration": self.total_duration,
            "avgCost": self.avg_cost,
            "avgDuration": self.avg_duration,
            "statusCounts": dict(self.status_counts),
        }


def merge_sorted_by_created_at(
    result_sets: Iterable[Sequence[Dict[str, Any]]],
    timestamp_field: str = "created_at",
) -> List[Dict[str, Any]]:
    """Concatenate per-agent results and order newest first.

    The sort is stable, so ties keep their fetch order.
    """
    merged: List[Dict[str, Any]] = []
    for result in result_sets:
        merged.extend(result)
    return sorted(
        merged,
        key=lambda record: timestamp_sort_key(record.get(timestamp_field)),
        reverse=True,
    )


@dataclass(frozen=True)
class MergedPage:
    """One page over a merged result set."""
    data: List[Dict[str, Any]]
    page_number: int
    page_size: int
    total_count: int

    def __post_init__(self):
        if self.page_number < 1:
            raise ValueError("page_number must be >= 1")
        if self.page_size < 1:
            raise ValueError("page_size must be > 0")

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_more(self) -> bool:
        return self.page_number < self.total_pages

    @classmethod
    def empty(cls, page_number: int, page_size: int) -> "MergedPage":
        return cls(data=[], page_number=page_number, page_size=page_size, total_count=0)

    @classmethod
    def paginate(
        cls,
        records: Sequence[Dict[str, Any]],
        page_number: int,
        page_size: int,
    ) -> "MergedPage":
        start = (page_number - 1) * page_size
        return cls(
            data=list(records[start:start + page_size]),
            page_number=page_number,
            page_size=page_size,
            total_count=len(records),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": self.data,
            "page_number": self.page_number,
            "page_size": self.page_size,
            "total_count": self.total_count,
            "total_pages": self.total_pages,
            "has_more": self.has_more,
        }


def summarize_executions(executions: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Dashboard metrics payload for a set of executions."""
    return ExecutionMetrics.from_executions(executions).to_dict()
