from __future__ import annotations

import logging
from typing import List
from uuid import uuid4

from .models import ExtractedFragment
from .moli import clean_moli_text, generate_moli_metadata
from .repair import validate_and_recover
from .scanner import iter_fragment_spans

logger = logging.getLogger(__name__)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:12]}"


def extract(text: str) -> List[ExtractedFragment]:
    """Extract every complete top-level JSON object found in free text.

    Objects left open at the end of the input are not reported.
    """
    fragments: List[ExtractedFragment] = []
    for start, end, _ in iter_fragment_spans(text):
        raw = text[start:end]
        result = validate_and_recover(raw)
        fragments.append(
            ExtractedFragment(
                id=_new_id("json"),
                original_text=raw,
                recovered_text=result.recovered_text,
                parsed_data=result.data,
                is_valid=result.is_valid,
                warnings=result.warnings,
                start_index=start,
                end_index=end,
            )
        )

    logger.debug("Extracted %d JSON fragment(s) from %d chars", len(fragments), len(text))
    return fragments


def extract_moli(text: str) -> List[ExtractedFragment]:
    """Extract MOLI log objects, including one cut off at the end of the text."""
    fragments: List[ExtractedFragment] = []
    for start, end, truncated in iter_fragment_spans(text, include_trailing=True):
        raw = text[start:end]
        result = validate_and_recover(clean_moli_text(raw))
        fragments.append(
            ExtractedFragment(
                id=_new_id("moli"),
                original_text=raw,
                recovered_text=result.recovered_text,
                parsed_data=result.data,
                is_valid=result.is_valid,
                warnings=result.warnings,
                start_index=start,
                end_index=end,
                moli_metadata=generate_moli_metadata(result.data, raw, truncated=truncated),
            )
        )

    logger.debug("Extracted %d MOLI fragment(s) from %d chars", len(fragments), len(text))
    return fragments


def extract_json_objects(text: str, moli_mode: bool = False) -> List[ExtractedFragment]:
    if moli_mode:
        return extract_moli(text)
    return extract(text)
