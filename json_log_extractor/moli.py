"""Helpers for MOLI HTTP-tracing logs.

MOLI log lines are JSON objects carrying `message` ("Request"/"Response"),
`service`, `timestamp`, `xray_trace_id` and a `globalContext` block with the
calling `controller`. Upstream log buffering often cuts them off mid-object.
"""
from __future__ import annotations

from typing import Any, Optional

from .models import MoliLogType, MoliMetadata
from .repair import trim_after_last_brace

ELLIPSIS_MARKER = "..."


def clean_moli_text(text: str) -> str:
    """Strip and cut a fragment at its last closing brace."""
    return trim_after_last_brace(text.strip())


def _text_field(container: Any, key: str) -> Optional[str]:
    if not isinstance(container, dict):
        return None
    value = container.get(key)
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def detect_log_type(data: Any) -> MoliLogType:
    message = data.get("message") if isinstance(data, dict) else None
    if isinstance(message, str):
        lowered = message.lower()
        if lowered == "request":
            return MoliLogType.REQUEST
        if lowered == "response":
            return MoliLogType.RESPONSE
    return MoliLogType.UNKNOWN


def looks_incomplete(original_text: str) -> bool:
    """True when the raw text shows signs of having been cut short."""
    return ELLIPSIS_MARKER in original_text or original_text.rstrip().endswith('{')


def generate_moli_metadata(data: Any, original_text: str, truncated: bool = False) -> MoliMetadata:
    """Derive MOLI metadata from parsed data and the fragment's raw text.

    `truncated` marks fragments the scanner had to close at end of input.
    """
    controller = None
    if isinstance(data, dict):
        controller = _text_field(data.get("globalContext"), "controller")

    return MoliMetadata(
        log_type=detect_log_type(data),
        service=_text_field(data, "service"),
        controller=controller,
        timestamp=_text_field(data, "timestamp"),
        trace_id=_text_field(data, "xray_trace_id"),
        is_incomplete=data is None or truncated or looks_incomplete(original_text),
    )
