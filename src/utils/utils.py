"""
General helpers shared across the dashboard backend.

Date-Time Utilities:
    parse_iso_datetime: tolerant ISO-8601 parsing of upstream timestamps
    (naive values are UTC, a trailing ``Z`` is accepted, date-only strings work).
    timestamp_sort_key: numeric key for "newest first" ordering.
    format_upstream_timestamp: ``YYYY-MM-DDTHH:MM:SS+00:00`` as Bolna expects it.
    epoch_millis: current time in milliseconds.

Phone Utilities:
    format_phone_number: normalize an Indian number to ``+91XXXXXXXXXX``.
"""

import logging
import re
import time
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_PHONE_NOISE_RE = re.compile(r"[\s\-\(\)]")


# ================================= Date-Time Utilities =================================
def parse_iso_datetime(iso_string: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-formatted datetime string into an aware datetime.
    Args:
        iso_string (Optional[str]): ISO datetime string to parse.
    Returns:
        Optional[datetime]: Parsed UTC-aware datetime or None if parsing fails.
    """
    if not iso_string or not isinstance(iso_string, str):
        return None
    value = iso_string.strip()
    if value.endswith("Z") or value.endswith("z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        logger.debug(f"Failed to parse ISO datetime string: {iso_string}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def timestamp_sort_key(value: Optional[str]) -> float:
    """Seconds since epoch for ``value``; missing or unparseable sorts as epoch."""
    parsed = parse_iso_datetime(value)
    if parsed is None:
        return 0.0
    return (parsed - _EPOCH).total_seconds()


def format_upstream_timestamp(dt: datetime) -> str:
    """Format ``dt`` in UTC without fractions and with an explicit offset."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S+00:00")


def epoch_millis() -> int:
    return int(time.time() * 1000)


# ================================= Phone Utilities =================================
def format_phone_number(phone_number: str) -> str:
    """
    Normalize a phone number for the carrier API.
    Args:
        phone_number (str): Raw number, possibly with spaces, dashes or brackets.
    Returns:
        str: Number with a leading ``+``; ``+91`` is assumed when no country code.
    """
    cleaned = _PHONE_NOISE_RE.sub("", str(phone_number))
    if not cleaned.startswith("+"):
        if cleaned.startswith("91"):
            cleaned = "+" + cleaned
        else:
            cleaned = "+91" + cleaned
    return cleaned
