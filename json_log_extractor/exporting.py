from __future__ import annotations

import csv
import io
import json
import logging
import os
import tempfile
from typing import Any, Iterable, Optional

from .flattening import generate_tabular_data
from .models import ExtractedFragment, TabularRow

logger = logging.getLogger(__name__)


def beautify_json(data: Any, indent: int = 2) -> str:
    try:
        return json.dumps(data, indent=indent, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        return f"Error beautifying JSON: {str(e)}"


def _size_cell(size: Optional[int]):
    return '' if size is None else size


def export_to_csv(rows: Iterable[TabularRow], include_size: bool = False) -> str:
    """Render tabular rows as CSV with a Path,Value,Type[,Size] header."""
    headers = ["Path", "Value", "Type"]
    if include_size:
        headers.append("Size")

    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=headers, lineterminator='\n')
    writer.writeheader()
    for row in rows:
        record = {"Path": row.path, "Value": row.value, "Type": row.type}
        if include_size:
            record["Size"] = _size_cell(row.size)
        writer.writerow(record)
    return buf.getvalue()


def export_all_as_json(fragments: Iterable[ExtractedFragment], indent: int = 2) -> str:
    """Pretty JSON array of the parsed data of every valid fragment."""
    data = [fragment.parsed_data for fragment in fragments if fragment.is_valid]
    return beautify_json(data, indent)


def export_all_as_csv(fragments: Iterable[ExtractedFragment]) -> str:
    """One CSV for all fragments, numbering fragments from 1 in the first column."""
    headers = ["JSON Object", "Path", "Value", "Type", "Size"]
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=headers, lineterminator='\n')
    writer.writeheader()
    for number, fragment in enumerate(fragments, start=1):
        for row in generate_tabular_data(fragment.parsed_data):
            writer.writerow({
                "JSON Object": number,
                "Path": row.path,
                "Value": row.value,
                "Type": row.type,
                "Size": _size_cell(row.size),
            })
    return buf.getvalue()


def write_export_file(content: str, file_name: Optional[str], extension: str, export_dir: Optional[str] = None) -> str:
    """Write export content to `export_dir` (temp dir by default) and return the path."""
    if not file_name or not file_name.strip():
        file_name = "extracted"
    file_name = file_name.strip()

    ext = f".{extension.lower()}"
    if not file_name.lower().endswith(ext):
        file_name += ext

    target_dir = export_dir or tempfile.gettempdir()
    os.makedirs(target_dir, exist_ok=True)
    path = os.path.join(target_dir, file_name)
    with open(path, 'w', newline='', encoding='utf-8') as f:
        f.write(content)

    logger.info("Wrote %d chars to %s", len(content), path)
    return path

