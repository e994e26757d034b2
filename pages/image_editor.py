# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Side-by-side image editor page."""

import uuid

import mesop as me

from common.analytics import log_ui_click
from common.utils import get_image_resolution
from components.image_pane.image_pane import image_pane, image_placeholder, resolution_pill
from config.default import Default as cfg
from config.gemini_image_models import get_gemini_image_model_config
from models.gemini import GeminiImageEditClient
from services.editor_controller import EditorController
from state.editor import RequestStatus
from state.image_editor_state import MesopEditorStore, PageState, to_editor_state
from state.state import AppState

PAGE_NAME = "image_editor"
PROMPT_PLACEHOLDER = "e.g., 'Change the red shirt to blue' or 'Add a retro film grain effect'"

_edit_client: GeminiImageEditClient | None = None


def _controller() -> EditorController:
    global _edit_client  # pylint: disable=global-statement
    if _edit_client is None:
        _edit_client = GeminiImageEditClient()
    return EditorController(client=_edit_client, store=MesopEditorStore())


def _accepted_file_types() -> list[str]:
    model_config = get_gemini_image_model_config(cfg().GEMINI_IMAGE_GEN_MODEL)
    return model_config.accepted_mime_types if model_config else ["image/*"]


def _log_click(element_id: str):
    app_state = me.state(AppState)
    log_ui_click(element_id=element_id, page_name=PAGE_NAME, session_id=app_state.session_id)


def image_editor_content():
    """Renders the original and edited panes with the controls underneath."""
    state = me.state(PageState)
    editor_state = to_editor_state(state)
    busy = editor_state.is_in_flight

    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="column",
            min_height="100vh",
            background=me.theme_var("background"),
        )
    ):
        with me.box(
            style=me.Style(
                padding=me.Padding.all(16),
                text_align="center",
                border=me.Border(bottom=me.BorderSide(width=1, style="solid", color=me.theme_var("outline-variant"))),
            )
        ):
            me.text(cfg().APP_NAME, type="headline-5", style=me.Style(font_weight="bold"))
            me.text("Edit images with text prompts powered by Gemini", style=me.Style(font_size=14))

        with me.box(
            style=me.Style(
                flex_grow=1,
                display="flex",
                flex_direction="row",
                flex_wrap="wrap",
                gap=24,
                padding=me.Padding.all(24),
            )
        ):
            with image_pane(title="Original"):  # pylint: disable=not-context-manager
                if editor_state.source_image:
                    me.image(
                        src=editor_state.source_image.data_uri,
                        alt="Original",
                        style=me.Style(max_width="100%", max_height="100%", object_fit="contain", border_radius=8),
                    )
                    resolution_pill(get_image_resolution(editor_state.source_image.raw_bytes))
                else:
                    image_placeholder(
                        icon="upload",
                        title="Upload an Image",
                        description="Select an image file to edit.",
                    )

            with image_pane(title="Edited with AI"):  # pylint: disable=not-context-manager
                if busy:
                    me.progress_spinner()
                elif editor_state.edit_result:
                    me.image(
                        src=editor_state.result_data_uri,
                        alt="Edited",
                        style=me.Style(max_width="100%", max_height="100%", object_fit="contain", border_radius=8),
                    )
                    resolution_pill(get_image_resolution(editor_state.edit_result))
                else:
                    image_placeholder(
                        icon="image",
                        title="Your Edited Image",
                        description="The result of your prompt will appear here.",
                    )

        with me.box(
            style=me.Style(
                position="sticky",
                bottom=0,
                padding=me.Padding.all(16),
                background=me.theme_var("surface-container"),
            )
        ):
            with me.box(style=me.Style(max_width=960, margin=me.Margin.symmetric(horizontal="auto"))):
                if editor_state.display_error:
                    me.text(
                        editor_state.display_error,
                        style=me.Style(
                            color=me.theme_var("error"),
                            font_size=14,
                            text_align="center",
                            margin=me.Margin(bottom=8),
                        ),
                    )

                with me.box(
                    style=me.Style(display="flex", flex_direction="row", align_items="center", gap=12, flex_wrap="wrap")
                ):
                    me.uploader(
                        label="Upload Image",
                        key=f"uploader-{state.uploader_key}",
                        on_upload=on_upload,
                        accepted_file_types=_accepted_file_types(),
                        type="flat",
                    )
                    me.textarea(
                        label="Prompt",
                        placeholder=PROMPT_PLACEHOLDER,
                        value=state.prompt,
                        on_input=on_prompt_input,
                        rows=2,
                        disabled=busy,
                        style=me.Style(flex_grow=1, min_width=280),
                    )
                    me.button("Reset", on_click=on_reset_click, type="stroked")
                    if busy:
                        with me.content_button(type="raised", disabled=True):
                            with me.box(style=me.Style(display="flex", flex_direction="row", align_items="center", gap=8)):
                                me.progress_spinner(diameter=20, stroke_width=3)
                                me.text("Generating...")
                    else:
                        with me.content_button(
                            on_click=on_generate_click,
                            type="raised",
                            disabled=not editor_state.can_generate,
                        ):
                            with me.box(style=me.Style(display="flex", flex_direction="row", align_items="center", gap=8)):
                                me.icon("auto_awesome")
                                me.text("Generate")

                if editor_state.status is RequestStatus.SUCCEEDED and state.generation_time > 0:
                    me.text(
                        f"{state.generation_time:.2f} seconds",
                        style=me.Style(font_size=12, margin=me.Margin(top=8), text_align="center"),
                    )


def on_upload(e: me.UploadEvent):
    """Replaces the source image with the uploaded file."""
    _log_click("upload_image")
    _controller().select_image(e.file)
    yield


def on_prompt_input(e: me.InputEvent):
    _controller().update_prompt(e.value)


async def on_generate_click(e: me.ClickEvent):
    """Runs the edit, re-rendering once it starts and once it settles."""
    _log_click("generate_button")
    async for _ in _controller().generate():
        yield


def on_reset_click(e: me.ClickEvent):
    """Clears the image, prompt, result and error."""
    _log_click("reset_button")
    _controller().reset()
    me.state(PageState).uploader_key += 1
    yield


def on_load(e: me.LoadEvent):
    app_state = me.state(AppState)
    if not app_state.session_id:
        app_state.session_id = str(uuid.uuid4())
    app_state.current_page = PAGE_NAME
    yield


@me.page(
    path="/",
    title="AI Image Editor",
    on_load=on_load,
)
def page():
    """Define the Mesop page route for the image editor."""
    image_editor_content()
