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

import time
from typing import AsyncIterator, Protocol

from common.analytics import get_logger, log_event
from common.error_handling import ImageEditError, UnknownError
from state import editor
from state.editor import EditorState, SourceImage

logger = get_logger(__name__)

CANCELLED_MESSAGE = "Generation was cancelled."


class RemoteEditClient(Protocol):
    async def edit_image(self, image_bytes: bytes, mime_type: str, prompt: str) -> bytes: ...


class UploadedFile(Protocol):
    """What the host's file picker hands over (e.g. ``me.UploadedFile``)."""

    mime_type: str

    def getvalue(self) -> bytes: ...


class EditorStore(Protocol):
    def load(self) -> EditorState: ...

    def save(self, state: EditorState) -> None: ...


class InMemoryEditorStore:
    def __init__(self, state: EditorState | None = None):
        self._state = state or EditorState()

    def load(self) -> EditorState:
        return self._state

    def save(self, state: EditorState) -> None:
        self._state = state


class EditorController:
    """Applies user actions and remote outcomes to the editor state.

    The state lives in ``store``; after the remote call the controller reloads
    it, so actions taken while the call was pending are seen and a superseded
    response is dropped.
    """

    def __init__(self, client: RemoteEditClient, store: EditorStore | None = None):
        self._client = client
        self._store = store or InMemoryEditorStore()

    @property
    def state(self) -> EditorState:
        return self._store.load()

    def select_image(self, file: UploadedFile | None) -> EditorState:
        if file is None:
            return self.state
        image = SourceImage.from_bytes(file.getvalue(), file.mime_type)
        if self.state.is_in_flight:
            logger.info("New image selected while a request is in flight; its result will be discarded.")
        return self._save(editor.select_image(self.state, image))

    def update_prompt(self, text: str) -> EditorState:
        return self._save(editor.update_prompt(self.state, text))

    def reset(self) -> EditorState:
        return self._save(editor.reset(self.state))

    async def generate(self) -> AsyncIterator[EditorState]:
        """Runs one edit request, yielding the state after each transition."""
        state = self.state
        if state.is_in_flight:
            logger.warning("Generate ignored: a request is already in flight.")
            return

        problem = editor.validation_problem(state)
        if problem:
            yield self._save(editor.reject(state, problem))
            return

        state = self._save(editor.begin_generation(state))
        token = state.request_token
        source = state.source_image

        edited_image = None
        error_message = CANCELLED_MESSAGE
        start_time = time.time()
        # Closing the generator at the first yield still settles the request below.
        try:
            yield state
            start_time = time.time()
            edited_image = await self._client.edit_image(source.raw_bytes, source.mime_type, state.prompt)
        except ImageEditError as e:
            error_message = e.message
            logger.warning(f"Image edit failed: {e.message}")
        except Exception:  # pylint: disable=broad-except
            error_message = UnknownError.default_message
            logger.exception("Unexpected error while editing image")
        finally:
            current = self.state
            if not editor.is_current(current, token):
                log_event("request_discarded", f"Discarding stale result for request {token}.", request_token=token)
            elif edited_image is not None:
                current = editor.complete_generation(
                    current, token, edited_image, generation_time=time.time() - start_time
                )
            else:
                current = editor.fail_generation(current, token, error_message)
            self._save(current)

        yield self.state

    def _save(self, state: EditorState) -> EditorState:
        self._store.save(state)
        return state
