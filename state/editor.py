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
"""Editor state record and its transitions.

Every function here is pure: it takes an ``EditorState`` and returns a new
one. Completions of a remote call carry the ``request_token`` the call was
started with and are ignored unless that token is still current, so a late
response never resurrects state that ``reset`` or ``select_image`` cleared.
"""

import base64
import enum
from dataclasses import dataclass, replace

from common.error_handling import VALIDATION_MESSAGE
from common.utils import guess_image_mime_type, split_data_uri, to_data_uri


class RequestStatus(str, enum.Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ErrorKind(str, enum.Enum):
    NONE = ""
    VALIDATION = "validation"
    GENERATION = "generation"


@dataclass(frozen=True)
class SourceImage:
    """The user-supplied image to be edited."""

    raw_bytes: bytes
    mime_type: str
    data_uri: str

    @classmethod
    def from_bytes(cls, raw_bytes: bytes, mime_type: str) -> "SourceImage":
        return cls(raw_bytes=raw_bytes, mime_type=mime_type, data_uri=to_data_uri(raw_bytes, mime_type))

    @classmethod
    def from_data_uri(cls, data_uri: str) -> "SourceImage":
        mime_type, raw_bytes = split_data_uri(data_uri)
        return cls(raw_bytes=raw_bytes, mime_type=mime_type, data_uri=data_uri)


@dataclass(frozen=True)
class EditorState:
    source_image: SourceImage | None = None
    edit_result: bytes | None = None
    prompt: str = ""
    status: RequestStatus = RequestStatus.IDLE
    error_message: str = ""
    error_kind: ErrorKind = ErrorKind.NONE
    request_token: int = 0
    generation_time: float = 0.0

    @property
    def is_in_flight(self) -> bool:
        return self.status is RequestStatus.IN_FLIGHT

    @property
    def can_generate(self) -> bool:
        """Whether the Generate action should be enabled."""
        return not self.is_in_flight and validation_problem(self) is None

    @property
    def display_error(self) -> str:
        """The error line shown under the controls."""
        if self.error_kind is ErrorKind.GENERATION:
            return f"Generation failed: {self.error_message}"
        return self.error_message

    @property
    def result_base64(self) -> str:
        if not self.edit_result:
            return ""
        return base64.b64encode(self.edit_result).decode("ascii")

    @property
    def result_data_uri(self) -> str:
        if not self.edit_result:
            return ""
        return to_data_uri(self.edit_result, guess_image_mime_type(self.edit_result))


def select_image(state: EditorState, image: SourceImage | None) -> EditorState:
    """Replaces the source image and clears the previous result and error.

    A request in flight is superseded: the token moves on and the status goes
    back to idle so a fresh generate is allowed.
    """
    if image is None:
        return state
    status = state.status
    if status in (RequestStatus.IN_FLIGHT, RequestStatus.FAILED):
        status = RequestStatus.IDLE
    return replace(
        state,
        source_image=image,
        edit_result=None,
        error_message="",
        error_kind=ErrorKind.NONE,
        status=status,
        request_token=state.request_token + 1,
        generation_time=0.0,
    )


def update_prompt(state: EditorState, text: str) -> EditorState:
    return replace(state, prompt=text)


def validation_problem(state: EditorState) -> str | None:
    """Returns the validation message if generate cannot run, else None."""
    if state.source_image is None or not state.prompt.strip():
        return VALIDATION_MESSAGE
    return None


def reject(state: EditorState, message: str) -> EditorState:
    """Surfaces a validation message without touching the request status."""
    return replace(state, error_message=message, error_kind=ErrorKind.VALIDATION)


def begin_generation(state: EditorState) -> EditorState:
    """Marks a new request in flight under a fresh token."""
    return replace(
        state,
        status=RequestStatus.IN_FLIGHT,
        edit_result=None,
        error_message="",
        error_kind=ErrorKind.NONE,
        request_token=state.request_token + 1,
        generation_time=0.0,
    )


def is_current(state: EditorState, token: int) -> bool:
    """True when a completion stamped with ``token`` may still be applied."""
    return state.is_in_flight and state.request_token == token


def complete_generation(
    state: EditorState, token: int, edited_image: bytes, generation_time: float = 0.0
) -> EditorState:
    if not is_current(state, token):
        return state
    return replace(
        state,
        status=RequestStatus.SUCCEEDED,
        edit_result=edited_image,
        error_message="",
        error_kind=ErrorKind.NONE,
        generation_time=generation_time,
    )


def fail_generation(state: EditorState, token: int, message: str) -> EditorState:
    if not is_current(state, token):
        return state
    return replace(
        state,
        status=RequestStatus.FAILED,
        edit_result=None,
        error_message=message,
        error_kind=ErrorKind.GENERATION,
    )


def reset(state: EditorState) -> EditorState:
    """Back to the empty state; the token still advances past any request."""
    return EditorState(request_token=state.request_token + 1)
