"""
Conversation domain entities for the call dashboard.

A conversation record is the full call-result payload delivered by the voice
agent provider's webhook. The store keeps it verbatim as a JSON object; the
entities here are read-only views used where the backend has to interpret a
few fields (cost, status, transcript).
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List


_UNICODE_ESCAPE_RE = re.compile(r"\\u([0-9a-fA-F]{4})")
_TRANSCRIPT_LINE_RE = re.compile(r"^(assistant|user):\s*(.+)$")


class StatusKind(Enum):
    """Shapes an upstream status field arrives in."""
    UNKNOWN = "unknown"
    TEXT = "text"
    STRUCTURED = "structured"


@dataclass(frozen=True)
class StatusValue:
    """
    Tagged variant for duck-typed status fields.

    Upstream fields such as ``status`` or ``execution_status`` arrive as a
    string, an object or null. They are normalized here once so the rest of
    the code only compares plain strings.
    """
    kind: StatusKind
    text: Optional[str] = None
    structured: Optional[Dict[str, Any]] = None

    @classmethod
    def from_raw(cls, raw: Any) -> "StatusValue":
        if raw is None:
            return cls(kind=StatusKind.UNKNOWN)
        if isinstance(raw, dict):
            return cls(kind=StatusKind.STRUCTURED, structured=raw)
        if isinstance(raw, str):
            return cls(kind=StatusKind.TEXT, text=raw)
        return cls(kind=StatusKind.TEXT, text=str(raw))

    def display(self) -> str:
        if self.kind is StatusKind.TEXT:
            return self.text or "unknown"
        if self.kind is StatusKind.STRUCTURED:
            for key in ("status", "value", "name"):
                value = self.structured.get(key)
                if isinstance(value, str) and value:
                    return value
        return "unknown"


def normalize_status(raw: Any) -> str:
    """Normalized, lower-cased display form of a raw status value."""
    return StatusValue.from_raw(raw).display().strip().lower()


def decode_unicode_escapes(text: str) -> str:
    """Replace literal ``\\uXXXX`` sequences with the characters they encode."""
    return _UNICODE_ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), text)


@dataclass(frozen=True)
class TranscriptLine:
    speaker: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"speaker": self.speaker, "message": self.message}


def parse_transcript(transcript: Optional[str]) -> List[TranscriptLine]:
    """Split a raw ``speaker: message`` transcript into lines.

    Lines that do not start with a known speaker are dropped.
    """
    if not transcript:
        return []
    lines = []
    for raw_line in decode_unicode_escapes(transcript).split("\n"):
        if not raw_line.strip():
            continue
        match = _TRANSCRIPT_LINE_RE.match(raw_line)
        if match:
            lines.append(TranscriptLine(speaker=match.group(1), message=match.group(2).strip()))
    return lines


@dataclass(frozen=True)
class ConversationRecord:
    """
    Read-only view over a webhook payload.

    ``payload`` is the untouched JSON object; nothing here mutates it.
    """
    payload: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.payload, dict):
            raise ValueError("conversation payload must be a JSON object")

    @property
    def id(self) -> Optional[str]:
        return self.payload.get("id")

    @property
    def transcript(self) -> str:
        return self.payload.get("transcript") or ""

    @property
    def status(self) -> StatusValue:
        return StatusValue.from_raw(self.payload.get("status"))

    @property
    def status_text(self) -> str:
        return self.status.display()

    @property
    def duration_seconds(self) -> float:
        return float(self.payload.get("conversation_duration") or 0)

    @property
    def display_cost(self) -> float:
        """Total cost in display units (upstream reports hundredths)."""
        return (self.payload.get("total_cost") or 0) / 100

    @property
    def telephony(self) -> Dict[str, Any]:
        return self.payload.get("telephony_data") or {}

    def is_valid_webhook(self) -> bool:
        """Webhook payloads need a non-empty ``id`` and ``transcript``."""
        return bool(self.id) and bool(self.payload.get("transcript"))

    def parsed_transcript(self) -> List[TranscriptLine]:
        return parse_transcript(self.transcript)

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status_text,
            "duration": self.duration_seconds,
            "cost": self.display_cost,
            "recording_url": self.telephony.get("recording_url"),
            "hangup_reason": self.telephony.get("hangup_reason"),
        }
