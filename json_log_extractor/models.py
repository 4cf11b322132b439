from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class MoliLogType(Enum):
    REQUEST = "request"
    RESPONSE = "response"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class MoliMetadata:
    log_type: MoliLogType = MoliLogType.UNKNOWN
    service: Optional[str] = None
    controller: Optional[str] = None
    timestamp: Optional[str] = None
    trace_id: Optional[str] = None
    is_incomplete: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "logType": self.log_type.value,
            "service": self.service,
            "controller": self.controller,
            "timestamp": self.timestamp,
            "traceId": self.trace_id,
            "isIncomplete": self.is_incomplete,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of the repair & validate engine for one fragment.

    `data` is None whenever `is_valid` is False.
    """

    data: Any
    is_valid: bool
    warnings: Tuple[str, ...]
    recovered_text: str


@dataclass(frozen=True)
class ExtractedFragment:
    """One JSON object located in the source text.

    `start_index`/`end_index` delimit `original_text` in the source
    (end exclusive). `warnings` is empty only when the fragment parsed
    without any repair.
    """

    id: str
    original_text: str
    recovered_text: str
    parsed_data: Any
    is_valid: bool
    warnings: Tuple[str, ...]
    start_index: int
    end_index: int
    moli_metadata: Optional[MoliMetadata] = None


@dataclass(frozen=True)
class TabularRow:
    path: str
    value: str
    type: str
    size: Optional[int] = None
