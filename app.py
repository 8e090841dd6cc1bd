import logging
import os

import gradio as gr

from json_node_editor.handlers_node import (
    begin_edit_handler,
    cancel_edit_handler,
    load_document_file,
    load_document_text,
    save_edit_handler,
    select_node_handler,
)

logging.basicConfig(
    level=os.environ.get("JSON_NODE_EDITOR_LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# --- UI Definition ---
with gr.Blocks(title="JSON Node Editor") as demo:
    gr.Markdown("# JSON Node Editor")
    gr.Markdown("Load a JSON document, pick a node by path, and edit its scalar fields.")

    # State
    document_state = gr.State()
    session_state = gr.State()

    with gr.Row():
        # Left Panel: Document & node selection
        with gr.Column(scale=1):
            gr.Markdown("### 1. Load")
            file_input = gr.File(label="Upload JSON File", file_types=[".json"])
            text_input = gr.Code(label="Or paste JSON", language="json", interactive=True)
            load_text_btn = gr.Button("Load Text")
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### 2. Select Node")
            node_selector = gr.Dropdown(
                label="Node",
                choices=[],
                value=None,
                interactive=True,
            )

        # Right Panel: Node view / editor
        with gr.Column(scale=1):
            gr.Markdown("### 3. Content")
            with gr.Column(visible=True) as view_col:
                content_box = gr.Code(label="Content", language="json", interactive=False)
                edit_btn = gr.Button("Edit")
            with gr.Column(visible=False) as edit_col:
                fields_table = gr.Dataframe(
                    headers=["Field", "Value"],
                    datatype=["str", "str"],
                    col_count=(2, "fixed"),
                    type="array",
                    interactive=True,
                    label="Fields",
                )
                with gr.Row():
                    save_btn = gr.Button("Save", variant="primary")
                    cancel_btn = gr.Button("Cancel", variant="stop")

            gr.Markdown("### 4. JSON Path")
            json_path_box = gr.Textbox(label="JSON Path", interactive=False, show_copy_button=True)

            gr.Markdown("### 5. Export")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="edited")
            download_output = gr.File(label="Download Result")

    node_outputs = [session_state, content_box, json_path_box, fields_table, view_col, edit_col, status_msg]

    file_input.upload(
        fn=load_document_file,
        inputs=[file_input],
        outputs=[document_state, node_selector, status_msg],
    )

    load_text_btn.click(
        fn=load_document_text,
        inputs=[text_input],
        outputs=[document_state, node_selector, status_msg],
    )

    node_selector.change(
        fn=select_node_handler,
        inputs=[document_state, node_selector],
        outputs=node_outputs,
    )

    edit_btn.click(
        fn=begin_edit_handler,
        inputs=[session_state],
        outputs=node_outputs,
    )

    cancel_btn.click(
        fn=cancel_edit_handler,
        inputs=[session_state],
        outputs=node_outputs,
    )

    save_btn.click(
        fn=save_edit_handler,
        inputs=[document_state, session_state, fields_table, output_filename],
        outputs=[document_state, download_output] + node_outputs,
    )

if __name__ == "__main__":
    demo.launch()
