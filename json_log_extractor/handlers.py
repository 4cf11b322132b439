from __future__ import annotations

import logging
from typing import Any, List, Optional

import gradio as gr

from .exporting import beautify_json, export_all_as_csv, export_all_as_json, export_to_csv, write_export_file
from .extractor import extract_json_objects
from .flattening import generate_tabular_data, search_tabular_data
from .io_utils import read_text_content
from .models import ExtractedFragment

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please enter some text to process"
NO_OBJECTS_MESSAGE = "No JSON objects found in the input text"
TABLE_HEADERS = ["Path", "Value", "Type", "Size"]
SUMMARY_HEADERS = ["#", "Status", "Start", "End", "Warnings", "Log Type", "Service"]


def fragment_label(number: int, fragment: ExtractedFragment) -> str:
    status = "valid" if fragment.is_valid else "invalid"
    label = f"#{number} ({status}, chars {fragment.start_index}-{fragment.end_index})"
    meta = fragment.moli_metadata
    if meta is not None:
        label += f" {meta.log_type.value}"
        if meta.service:
            label += f" {meta.service}"
        if meta.is_incomplete:
            label += " [incomplete]"
    return label


def summarize_fragments(fragments: List[ExtractedFragment]) -> List[List[Any]]:
    rows: List[List[Any]] = []
    for number, fragment in enumerate(fragments, start=1):
        meta = fragment.moli_metadata
        rows.append([
            number,
            "valid" if fragment.is_valid else "invalid",
            fragment.start_index,
            fragment.end_index,
            len(fragment.warnings),
            meta.log_type.value if meta else "",
            (meta.service or "") if meta else "",
        ])
    return rows


def status_text(fragments: List[ExtractedFragment]) -> str:
    valid = sum(1 for f in fragments if f.is_valid)
    repaired = sum(1 for f in fragments if f.is_valid and f.warnings)
    return (
        f"Found {len(fragments)} JSON object(s): {valid} valid "
        f"({repaired} repaired), {len(fragments) - valid} invalid."
    )


def process_text_handler(text: str, moli_mode: bool):
    """Run extraction for the UI. Returns state, selector, status and summary."""
    if not text or not text.strip():
        return [], gr.update(choices=[], value=None), EMPTY_INPUT_MESSAGE, []

    try:
        fragments = extract_json_objects(text, moli_mode=bool(moli_mode))
    except Exception as e:
        logger.exception("Extraction failed")
        return [], gr.update(choices=[], value=None), f"Error processing text: {str(e)}", []

    if not fragments:
        return [], gr.update(choices=[], value=None), NO_OBJECTS_MESSAGE, []

    choices = [(fragment_label(i, f), i - 1) for i, f in enumerate(fragments, start=1)]
    return fragments, gr.update(choices=choices, value=0), status_text(fragments), summarize_fragments(fragments)


def _get_fragment(fragments, index) -> Optional[ExtractedFragment]:
    if not fragments or index is None:
        return None
    try:
        return fragments[int(index)]
    except (ValueError, TypeError, IndexError):
        return None


def table_rows(fragment: Optional[ExtractedFragment], search_term: str = '', limit: Optional[int] = None) -> List[List[Any]]:
    if fragment is None or not fragment.is_valid:
        return []
    rows = search_tabular_data(generate_tabular_data(fragment.parsed_data), search_term)
    if limit:
        rows = rows[:max(1, int(limit))]
    return [[r.path, r.value, r.type, '' if r.size is None else r.size] for r in rows]


def select_fragment_handler(fragments, index, indent: int = 2, limit: Optional[int] = None):
    """Detail view for one fragment: data, repaired text, warnings, metadata, table."""
    fragment = _get_fragment(fragments, index)
    if fragment is None:
        return None, "", "", None, []

    recovered = fragment.recovered_text
    if fragment.is_valid:
        recovered = beautify_json(fragment.parsed_data, indent)
    warnings = "\n".join(fragment.warnings) if fragment.warnings else "No repairs needed."
    metadata = fragment.moli_metadata.to_dict() if fragment.moli_metadata else None
    return fragment.parsed_data, recovered, warnings, metadata, table_rows(fragment, '', limit)


def search_table_handler(fragments, index, search_term: str, limit: Optional[int] = None):
    return table_rows(_get_fragment(fragments, index), search_term or '', limit)


def export_json_handler(fragments, file_name: str, indent: int = 2, export_dir: Optional[str] = None):
    if not fragments:
        return None, "No JSON objects to export."
    if not any(f.is_valid for f in fragments):
        return None, "No valid JSON objects to export."

    try:
        path = write_export_file(export_all_as_json(fragments, indent), file_name, "json", export_dir)
    except OSError as e:
        return None, f"Error during export: {str(e)}"
    return path, f"Export successful! Saved to {path}"


def export_csv_handler(fragments, file_name: str, export_dir: Optional[str] = None):
    if not fragments:
        return None, "No JSON objects to export."

    try:
        path = write_export_file(export_all_as_csv(fragments), file_name, "csv", export_dir)
    except OSError as e:
        return None, f"Error during export: {str(e)}"
    return path, f"Export successful! Saved to {path}"


def export_table_csv_handler(fragments, index, search_term: str, file_name: str, export_dir: Optional[str] = None):
    """Export the selected fragment's (filtered) table as CSV."""
    fragment = _get_fragment(fragments, index)
    if fragment is None or not fragment.is_valid:
        return None, "No valid JSON object selected."

    rows = search_tabular_data(generate_tabular_data(fragment.parsed_data), search_term or '')
    try:
        path = write_export_file(export_to_csv(rows, include_size=True), file_name, "csv", export_dir)
    except OSError as e:
        return None, f"Error during export: {str(e)}"
    return path, f"Export successful! Saved to {path}"


def load_text_file_handler(file_obj):
    if file_obj is None:
        return gr.update(), "No file uploaded."
    try:
        text = read_text_content(file_obj)
    except (OSError, ValueError) as e:
        return gr.update(), f"Error reading file: {str(e)}"
    return text, f"Loaded {len(text)} characters."
