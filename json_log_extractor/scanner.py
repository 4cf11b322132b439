from __future__ import annotations

from typing import Iterator, Tuple


def iter_fragment_spans(text: str, include_trailing: bool = False) -> Iterator[Tuple[int, int, bool]]:
    """Yield `(start, end, truncated)` for every top-level `{...}` group in text.

    Braces inside string literals are ignored. A quote preceded by an
    escaping backslash does not open or close a string. Closing braces with
    no open group are ignored.

    With `include_trailing`, an object still open at end of input is yielded
    as `(start, len(text), True)`; otherwise it is dropped.
    """
    depth = 0
    in_string = False
    escaped = False
    start = -1

    for i, ch in enumerate(text):
        if ch == '"' and not escaped:
            in_string = not in_string
        elif not in_string:
            if ch == '{':
                if depth == 0:
                    start = i
                depth += 1
            elif ch == '}' and depth > 0:
                depth -= 1
                if depth == 0:
                    yield start, i + 1, False
                    start = -1
        # `\\` escapes itself, so only an odd run of backslashes escapes a quote.
        escaped = ch == '\\' and not escaped

    if include_trailing and depth > 0:
        yield start, len(text), True
