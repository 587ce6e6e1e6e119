"""
Core business entities for the call dashboard.

- ConversationRecord: read-only view over a webhook call-result payload
- StatusValue: tagged variant normalizing duck-typed upstream status fields
- AgentIdentity / CallerIdentity: tenant-scoped agent ownership
- ExecutionMetrics / MergedPage: reductions and pagination over executions
- batch helpers: schedule extraction from upstream batch status text
"""

from .conversation import (
    ConversationRecord,
    StatusKind,
    StatusValue,
    TranscriptLine,
    decode_unicode_escapes,
    normalize_status,
    parse_transcript
)
from .agent import (
    AgentIdentity,
    CallerIdentity,
    CallerRole
)
from .analytics import (
    ExecutionMetrics,
    MergedPage,
    TRACKED_STATUSES,
    merge_sorted_by_created_at,
    summarize_executions
)
from .batch import (
    annotate_batch,
    clean_batch_status,
    extract_scheduled_time
)

__all__ = [
    "ConversationRecord",
    "StatusKind",
    "StatusValue",
    "TranscriptLine",
    "decode_unicode_escapes",
    "normalize_status",
    "parse_transcript",
    "AgentIdentity",
    "CallerIdentity",
    "CallerRole",
    "ExecutionMetrics",
    "MergedPage",
    "TRACKED_STATUSES",
    "merge_sorted_by_created_at",
    "summarize_executions",
    "annotate_batch",
    "clean_batch_status",
    "extract_scheduled_time"
]
