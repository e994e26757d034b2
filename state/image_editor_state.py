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

import base64

import mesop as me

from state.editor import EditorState, ErrorKind, RequestStatus, SourceImage


@me.stateclass
class PageState:
    """Image Editor Page State"""

    # Binary payloads are kept base64 encoded so the state stays serializable.
    source_data_uri: str = ""
    result_base64: str = ""
    prompt: str = ""
    status: str = RequestStatus.IDLE.value
    error_message: str = ""
    error_kind: str = ErrorKind.NONE.value
    request_token: int = 0
    generation_time: float = 0.0

    # Bumped on reset so the uploader forgets the previous file.
    uploader_key: int = 0


def to_editor_state(page_state: PageState) -> EditorState:
    source_image = None
    if page_state.source_data_uri:
        source_image = SourceImage.from_data_uri(page_state.source_data_uri)
    return EditorState(
        source_image=source_image,
        edit_result=base64.b64decode(page_state.result_base64) if page_state.result_base64 else None,
        prompt=page_state.prompt,
        status=RequestStatus(page_state.status),
        error_message=page_state.error_message,
        error_kind=ErrorKind(page_state.error_kind),
        request_token=page_state.request_token,
        generation_time=page_state.generation_time,
    )


def apply_editor_state(page_state: PageState, state: EditorState) -> None:
    page_state.source_data_uri = state.source_image.data_uri if state.source_image else ""
    page_state.result_base64 = state.result_base64
    page_state.prompt = state.prompt
    page_state.status = state.status.value
    page_state.error_message = state.error_message
    page_state.error_kind = state.error_kind.value
    page_state.request_token = state.request_token
    page_state.generation_time = state.generation_time


class MesopEditorStore:
    """Reads and writes the editor state through the current session's PageState."""

    def load(self) -> EditorState:
        return to_editor_state(me.state(PageState))

    def save(self, state: EditorState) -> None:
        apply_editor_state(me.state(PageState), state)
