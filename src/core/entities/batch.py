"""
Batch (bulk-calling campaign) helpers.

Batches live only upstream. The provider reports a scheduled batch by
embedding the schedule in its status text, e.g.
``"scheduled to run 2024-01-25T14:30:00+00:00"``.
"""

import re
from datetime import datetime
from typing import Optional, Dict, Any

from utils.utils import parse_iso_datetime
from .conversation import StatusValue

SCHEDULED_PREFIX = "scheduled to run"
_SCHEDULE_RE = re.compile(
    r"scheduled to run (\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})([+-]\d{2}:\d{2})"
)


def clean_batch_status(status: Optional[str]) -> str:
    """Collapse ``scheduled to run ...`` to ``scheduled``; other statuses pass through."""
    if not status:
        return "unknown"
    status = str(status)
    if status.startswith(SCHEDULED_PREFIX):
        return "scheduled"
    return status


def extract_scheduled_time(batch: Dict[str, Any]) -> Optional[datetime]:
    """Schedule embedded in the status text, else the ``scheduled_at`` field."""
    status = batch.get("status")
    if isinstance(status, str):
        match = _SCHEDULE_RE.search(status)
        if match:
            return parse_iso_datetime(match.group(1) + match.group(2))
    return parse_iso_datetime(batch.get("scheduled_at"))


def annotate_batch(batch: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of ``batch`` with ``display_status`` and ``scheduled_for`` added."""
    annotated = dict(batch)
    annotated["display_status"] = clean_batch_status(StatusValue.from_raw(batch.get("status")).display())
    scheduled = extract_scheduled_time(batch)
    annotated["scheduled_for"] = scheduled.isoformat() if scheduled else None
    return annotated
