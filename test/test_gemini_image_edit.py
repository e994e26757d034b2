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

import asyncio
from types import SimpleNamespace

import httpx
import pytest
from google.genai import errors, types

from common.error_handling import NO_IMAGE_MESSAGE, NoImageReturnedError, RemoteError, ValidationError
from models.gemini import GeminiImageEditClient, extract_image_bytes

MODEL = "gemini-2.5-flash-image"


def _response(*parts: types.Part, prompt_feedback=None) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=list(parts)))],
        prompt_feedback=prompt_feedback,
    )


def _image_part(data: bytes) -> types.Part:
    return types.Part(inline_data=types.Blob(data=data, mime_type="image/png"))


class FakeModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    async def generate_content(self, *, model, contents, config):
        self.requests.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return self.response


def _client(models: FakeModels) -> GeminiImageEditClient:
    fake_genai = SimpleNamespace(aio=SimpleNamespace(models=models))
    return GeminiImageEditClient(client=fake_genai, model_name=MODEL)


def test_returns_first_inline_image(png_a, png_b):
    models = FakeModels(response=_response(types.Part(text="Here you go"), _image_part(png_b)))

    edited = asyncio.run(_client(models).edit_image(png_a, "image/png", "make it blue"))

    assert edited == png_b
    request = models.requests[0]
    assert request["model"] == MODEL
    image_part, prompt = request["contents"]
    assert image_part.inline_data.data == png_a
    assert image_part.inline_data.mime_type == "image/png"
    assert prompt == "make it blue"
    assert request["config"].response_modalities == ["IMAGE", "TEXT"]


def test_text_only_reply_is_no_image_returned(png_a):
    models = FakeModels(response=_response(types.Part(text="I can't help with that.")))

    with pytest.raises(NoImageReturnedError) as excinfo:
        asyncio.run(_client(models).edit_image(png_a, "image/png", "x"))

    assert excinfo.value.message == NO_IMAGE_MESSAGE
    assert excinfo.value.model_text == "I can't help with that."


def test_empty_response_is_no_image_returned():
    with pytest.raises(NoImageReturnedError):
        extract_image_bytes(types.GenerateContentResponse(candidates=[]))


def test_blocked_prompt_is_remote_error():
    feedback = types.GenerateContentResponsePromptFeedback(
        block_reason=types.BlockedReason.SAFETY,
        block_reason_message="unsafe content",
    )
    with pytest.raises(RemoteError) as excinfo:
        extract_image_bytes(_response(prompt_feedback=feedback))

    assert not isinstance(excinfo.value, NoImageReturnedError)
    assert excinfo.value.message == "unsafe content"


def test_api_error_carries_service_message(png_a):
    error = errors.ClientError(
        400, {"error": {"code": 400, "message": "unsafe content", "status": "INVALID_ARGUMENT"}}
    )
    models = FakeModels(error=error)

    with pytest.raises(RemoteError) as excinfo:
        asyncio.run(_client(models).edit_image(png_a, "image/png", "x"))

    assert excinfo.value.message == "unsafe content"


def test_transport_failure_is_remote_error(png_a):
    models = FakeModels(error=httpx.ConnectError("connection refused"))

    with pytest.raises(RemoteError) as excinfo:
        asyncio.run(_client(models).edit_image(png_a, "image/png", "x"))

    assert "connection refused" in excinfo.value.message


@pytest.mark.parametrize(
    "image_bytes, mime_type, prompt",
    [
        (b"", "image/png", "x"),
        (b"data", "text/plain", "x"),
        (b"data", "image/png", "   "),
        (b"data", "image/gif", "x"),
    ],
)
def test_invalid_inputs_never_reach_the_service(image_bytes, mime_type, prompt):
    models = FakeModels(response=_response(_image_part(b"unused")))

    with pytest.raises(ValidationError):
        asyncio.run(_client(models).edit_image(image_bytes, mime_type, prompt))

    assert models.requests == []
