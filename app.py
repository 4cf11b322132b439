import logging
import sys
from functools import partial

import gradio as gr

from json_log_extractor.config import load_config
from json_log_extractor.handlers import (
    SUMMARY_HEADERS,
    TABLE_HEADERS,
    export_csv_handler,
    export_json_handler,
    export_table_csv_handler,
    load_text_file_handler,
    process_text_handler,
    search_table_handler,
    select_fragment_handler,
)

config = load_config()

logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s [EXTRACTOR] %(levelname)s %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# --- UI Definition ---
with gr.Blocks(title="JSON Log Extractor") as demo:
    gr.Markdown("# JSON Log Extractor and Formatter")
    gr.Markdown("Paste log output or any text containing JSON. Objects are located, repaired where possible and listed below.")

    # State
    fragments_state = gr.State(value=[])

    with gr.Row():
        # Left Panel: Input
        with gr.Column(scale=1):
            gr.Markdown("### 1. Input")
            input_text = gr.Textbox(label="Text", lines=16, placeholder="Paste logs here...")
            file_input = gr.File(label="Or upload a log file", file_types=[".log", ".txt", ".json"])
            moli_mode = gr.Checkbox(label="MOLI log mode", value=config.moli_mode)
            with gr.Row():
                extract_btn = gr.Button("Extract JSON", variant="primary")
                clear_btn = gr.Button("Clear")
            status_msg = gr.Textbox(label="Status", interactive=False)
            summary_table = gr.Dataframe(
                headers=SUMMARY_HEADERS,
                interactive=False,
                label="Extracted Objects",
            )

        # Right Panel: Output
        with gr.Column(scale=1):
            gr.Markdown("### 2. Inspect")
            fragment_selector = gr.Dropdown(label="JSON Object", choices=[], interactive=True)
            warnings_box = gr.Textbox(label="Repairs", lines=3, interactive=False)
            metadata_view = gr.JSON(label="MOLI Metadata")

            with gr.Tab("Tree"):
                tree_view = gr.JSON(label="Parsed Data")
            with gr.Tab("Formatted"):
                formatted_view = gr.Code(label="Formatted / Recovered Text", language="json")
            with gr.Tab("Table"):
                search_box = gr.Textbox(label="Search paths, values, or types")
                data_table = gr.Dataframe(headers=TABLE_HEADERS, interactive=False, label="Flattened")
                table_export_btn = gr.Button("Download Table CSV")

            gr.Markdown("### 3. Export")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="extracted")
            with gr.Row():
                export_json_btn = gr.Button("Export All as JSON")
                export_csv_btn = gr.Button("Export All as CSV")
            download_output = gr.File(label="Download Result")
            export_status = gr.Textbox(label="Export Status", interactive=False)

    file_input.upload(
        fn=load_text_file_handler,
        inputs=[file_input],
        outputs=[input_text, status_msg],
    )

    extract_btn.click(
        fn=process_text_handler,
        inputs=[input_text, moli_mode],
        outputs=[fragments_state, fragment_selector, status_msg, summary_table],
    )

    clear_btn.click(
        fn=lambda: ("", [], gr.update(choices=[], value=None), "", []),
        inputs=[],
        outputs=[input_text, fragments_state, fragment_selector, status_msg, summary_table],
    )

    fragment_selector.change(
        fn=partial(select_fragment_handler, indent=config.indent, limit=config.preview_rows),
        inputs=[fragments_state, fragment_selector],
        outputs=[tree_view, formatted_view, warnings_box, metadata_view, data_table],
    )

    search_box.change(
        fn=partial(search_table_handler, limit=config.preview_rows),
        inputs=[fragments_state, fragment_selector, search_box],
        outputs=[data_table],
    )

    table_export_btn.click(
        fn=partial(export_table_csv_handler, export_dir=config.export_dir),
        inputs=[fragments_state, fragment_selector, search_box, output_filename],
        outputs=[download_output, export_status],
    )

    export_json_btn.click(
        fn=partial(export_json_handler, indent=config.indent, export_dir=config.export_dir),
        inputs=[fragments_state, output_filename],
        outputs=[download_output, export_status],
    )

    export_csv_btn.click(
        fn=partial(export_csv_handler, export_dir=config.export_dir),
        inputs=[fragments_state, output_filename],
        outputs=[download_output, export_status],
    )

if __name__ == "__main__":
    logger.info("Starting JSON Log Extractor on %s:%d", config.server_name, config.server_port)
    demo.launch(server_name=config.server_name, server_port=config.server_port)
