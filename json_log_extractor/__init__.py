"""Core logic for JSON Log Extractor and Formatter.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- locate JSON objects embedded in free text (including MOLI logs)
- repair malformed objects and report what was changed
- flatten parsed data into path/value rows
- export results as JSON or CSV
"""
from __future__ import annotations

from .extractor import extract, extract_json_objects, extract_moli
from .models import ExtractedFragment, MoliLogType, MoliMetadata, TabularRow, ValidationResult
from .moli import generate_moli_metadata
from .repair import repair_json, validate_and_recover

__all__ = [
    "ExtractedFragment",
    "MoliLogType",
    "MoliMetadata",
    "TabularRow",
    "ValidationResult",
    "extract",
    "extract_json_objects",
    "extract_moli",
    "generate_moli_metadata",
    "repair_json",
    "validate_and_recover",
]
