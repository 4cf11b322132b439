from __future__ import annotations

import json
from typing import Any, List

from .models import TabularRow


def value_type(value: Any) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    return 'object'


def display_value(value: Any) -> str:
    """Render a scalar the way it reads in JSON, but leave strings unquoted."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def generate_tabular_data(data: Any, base_path: str = '') -> List[TabularRow]:
    """Flatten parsed JSON into path/value/type rows, depth first.

    Containers get a summary row before their children. Object keys are
    appended as `.key` and array indices as `[i]`.
    """
    rows: List[TabularRow] = []

    def process_value(value: Any, path: str) -> None:
        if isinstance(value, list):
            rows.append(TabularRow(path, f"[Array({len(value)})]", 'array', len(value)))
            for index, item in enumerate(value):
                process_value(item, f"{path}[{index}]")
        elif isinstance(value, dict):
            rows.append(TabularRow(path, "[Object]", 'object', len(value)))
            for key, child in value.items():
                child_path = f"{path}.{key}" if path else str(key)
                process_value(child, child_path)
        else:
            rows.append(TabularRow(path, display_value(value), value_type(value)))

    process_value(data, base_path)
    return rows


def search_tabular_data(rows: List[TabularRow], search_term: str) -> List[TabularRow]:
    if not search_term or not search_term.strip():
        return rows

    needle = search_term.strip().lower()
    return [
        row for row in rows
        if needle in row.path.lower() or needle in row.value.lower() or needle in row.type.lower()
    ]
