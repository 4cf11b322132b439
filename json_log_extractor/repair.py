"""Repair & validate engine for candidate JSON fragments.

A fragment is first parsed as-is. If that fails, a fixed sequence of
textual repairs is applied and the result is parsed again. Every repair
that changes the text leaves a warning behind so callers can show what
was done to the input.
"""
from __future__ import annotations

import json
import logging
import re
from collections import Counter
from typing import Any, Iterator, List, Tuple

from .models import ValidationResult

logger = logging.getLogger(__name__)

TRAILING_LINE_WS_RE = re.compile(r"[^\S\r\n]+(?=\r?$)", re.MULTILINE)
TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")
UNQUOTED_KEY_RE = re.compile(r"([{,]\s*)([A-Za-z0-9_]+)(\s*):")
# A quote preceded by an even number of backslashes (including none).
UNESCAPED_QUOTE_RE = re.compile(r'(?<!\\)(?:\\\\)*"')

TRIMMED_WHITESPACE = "Trimmed trailing whitespace"
REMOVED_TRAILING_COMMAS = "Removed trailing commas"
FIXED_UNQUOTED_KEYS = "Fixed unquoted keys"
CLOSED_UNMATCHED_QUOTES = "Closed unmatched quotes"
ADDED_CLOSING_BRACES = "Added missing closing braces"
REMOVED_EXCESS_BRACES = "Removed excessive closing braces"
ADDED_CLOSING_BRACKETS = "Added missing closing brackets"
INSERTED_MISSING_COMMAS = "Inserted missing commas"
TRIMMED_TRAILING_CONTENT = "Trimmed trailing non-JSON content"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_strict(text: str) -> Any:
    """Parse JSON text, rejecting the NaN/Infinity extensions of `json`."""
    return json.loads(text, parse_constant=_reject_constant)


def _iter_outside_strings(text: str) -> Iterator[Tuple[int, str]]:
    """Yield `(index, char)` for characters outside string literals, quotes excluded."""
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if ch == '"' and not escaped:
            in_string = not in_string
        elif not in_string:
            yield i, ch
        escaped = ch == '\\' and not escaped


def _quote_unquoted_keys(text: str) -> str:
    key_starts = {i for i, ch in _iter_outside_strings(text) if ch in '{,'}

    def quote(m: re.Match) -> str:
        if m.start() not in key_starts:
            return m.group(0)
        return f'{m.group(1)}"{m.group(2)}"{m.group(3)}:'

    return UNQUOTED_KEY_RE.sub(quote, text)


def _insert_missing_commas(text: str) -> str:
    """Put a comma after a string that is directly followed by another string."""
    out: List[str] = []
    in_string = False
    escaped = False
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        out.append(ch)
        i += 1
        if escaped:
            escaped = False
            continue
        if ch == '\\':
            escaped = True
            continue
        if ch != '"':
            continue
        if not in_string:
            in_string = True
            continue

        in_string = False
        j = i
        while j < n and text[j].isspace():
            j += 1
        if j < n and text[j] == '"':
            out.append(',')
    return ''.join(out)


def trim_after_last_brace(text: str) -> str:
    last_brace = text.rfind('}')
    if last_brace != -1 and last_brace != len(text) - 1:
        return text[:last_brace + 1]
    return text


def repair_json(bad: str) -> Tuple[str, List[str]]:
    """Apply the heuristic repairs in order and return `(text, warnings)`."""
    warnings: List[str] = []

    text = TRAILING_LINE_WS_RE.sub("", bad.strip())
    if text != bad:
        warnings.append(TRIMMED_WHITESPACE)

    fixed = TRAILING_COMMA_RE.sub(r"\1", text)
    if fixed != text:
        text = fixed
        warnings.append(REMOVED_TRAILING_COMMAS)

    fixed = _quote_unquoted_keys(text)
    if fixed != text:
        text = fixed
        warnings.append(FIXED_UNQUOTED_KEYS)

    if len(UNESCAPED_QUOTE_RE.findall(text)) % 2 != 0:
        text += '"'
        warnings.append(CLOSED_UNMATCHED_QUOTES)

    counts = Counter(ch for _, ch in _iter_outside_strings(text))
    opens = counts['{']
    closes = counts['}']
    if opens > closes:
        text += '}' * (opens - closes)
        warnings.append(ADDED_CLOSING_BRACES)
    elif closes > opens and text.endswith('}'):
        text = text[:-1]
        warnings.append(REMOVED_EXCESS_BRACES)

    counts = Counter(ch for _, ch in _iter_outside_strings(text))
    arr_opens = counts['[']
    arr_closes = counts[']']
    if arr_opens > arr_closes:
        text += ']' * (arr_opens - arr_closes)
        warnings.append(ADDED_CLOSING_BRACKETS)

    fixed = _insert_missing_commas(text)
    if fixed != text:
        text = fixed
        warnings.append(INSERTED_MISSING_COMMAS)

    fixed = trim_after_last_brace(text)
    if fixed != text:
        text = fixed
        warnings.append(TRIMMED_TRAILING_CONTENT)

    return text, warnings


def validate_and_recover(fragment_text: str) -> ValidationResult:
    """Parse a fragment, repairing it when the direct parse fails.

    Never raises for malformed input: an unrecoverable fragment comes back
    with `is_valid=False` and a final "Failed to parse JSON" warning.
    """
    try:
        return ValidationResult(
            data=parse_strict(fragment_text),
            is_valid=True,
            warnings=(),
            recovered_text=fragment_text,
        )
    except (ValueError, RecursionError):
        pass

    repaired, warnings = repair_json(fragment_text)
    logger.debug("Repaired fragment with %d fix(es): %s", len(warnings), warnings)

    try:
        data = parse_strict(repaired)
    except (ValueError, RecursionError) as e:
        logger.debug("Fragment still invalid after repair: %s", e)
        warnings.append(f"Failed to parse JSON: {e}")
        return ValidationResult(
            data=None,
            is_valid=False,
            warnings=tuple(warnings),
            recovered_text=repaired,
        )

    return ValidationResult(
        data=data,
        is_valid=True,
        warnings=tuple(warnings),
        recovered_text=repaired,
    )
