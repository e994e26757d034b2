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
"""Gemini image editing: one image plus one instruction in, one image out."""

import httpx
import pydantic
from google import genai
from google.genai import errors, types

from common.analytics import get_logger, track_model_call
from common.error_handling import NoImageReturnedError, RemoteError, ValidationError
from config.default import Default
from config.gemini_image_models import get_gemini_image_model_config
from models.requests import ImageEditRequest

logger = get_logger(__name__)


def init_client(config: Default | None = None) -> genai.Client:
    """Initializes the GenAI client from configuration."""
    config = config or Default()
    if config.USE_VERTEX:
        return genai.Client(vertexai=True, project=config.PROJECT_ID, location=config.LOCATION)
    return genai.Client(api_key=config.GEMINI_API_KEY)


def extract_image_bytes(response: types.GenerateContentResponse) -> bytes:
    """Returns the first inline image in a response.

    Raises:
        RemoteError: if the prompt was blocked before generation.
        NoImageReturnedError: if no candidate part carries image data.
    """
    feedback = getattr(response, "prompt_feedback", None)
    block_reason = getattr(feedback, "block_reason", None) if feedback else None
    if block_reason:
        message = getattr(feedback, "block_reason_message", None)
        reason = getattr(block_reason, "name", str(block_reason))
        raise RemoteError(message or f"The request was blocked ({reason}).")

    texts = []
    for candidate in response.candidates or []:
        content = candidate.content
        if not content or not content.parts:
            continue
        for part in content.parts:
            if part.inline_data is not None and part.inline_data.data:
                return part.inline_data.data
            if part.text:
                texts.append(part.text)

    model_text = " ".join(texts).strip()
    if model_text:
        logger.info(f"Model replied with text only: {model_text[:200]}")
    raise NoImageReturnedError(model_text=model_text)


class GeminiImageEditClient:
    """Stateless wrapper around a single ``generate_content`` image edit call."""

    def __init__(self, client: genai.Client | None = None, model_name: str | None = None):
        self._client = client
        self.model_name = model_name or Default().GEMINI_IMAGE_GEN_MODEL

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = init_client()
        return self._client

    def _build_request(self, image_bytes: bytes, mime_type: str, prompt: str) -> ImageEditRequest:
        try:
            request = ImageEditRequest(image_bytes=image_bytes, mime_type=mime_type, prompt=prompt)
        except pydantic.ValidationError as e:
            raise ValidationError(e.errors()[0]["msg"]) from e

        model_config = get_gemini_image_model_config(self.model_name)
        if model_config:
            if not model_config.accepts(request.mime_type):
                raise ValidationError(
                    f"{model_config.display_name} does not accept {request.mime_type} images."
                )
            if len(request.image_bytes) > model_config.max_input_bytes:
                raise ValidationError(
                    f"Image is larger than {model_config.max_input_bytes // (1024 * 1024)} MB."
                )
        return request

    async def edit_image(self, image_bytes: bytes, mime_type: str, prompt: str) -> bytes:
        """Sends the image and instruction to Gemini and returns the edited image bytes.

        Raises:
            ValidationError: if the inputs cannot be sent to the configured model.
            RemoteError: if the service rejects the request or cannot be reached.
            NoImageReturnedError: if the response carries no image.
        """
        request = self._build_request(image_bytes, mime_type, prompt)
        contents = [
            types.Part.from_bytes(data=request.image_bytes, mime_type=request.mime_type),
            request.prompt,
        ]
        config = types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"])

        logger.info(f"Editing {request.mime_type} image ({len(request.image_bytes)} bytes) with {self.model_name}")
        with track_model_call(
            model_name=self.model_name,
            prompt_length=len(request.prompt),
            input_mime_type=request.mime_type,
        ):
            try:
                response = await self.client.aio.models.generate_content(
                    model=self.model_name, contents=contents, config=config
                )
            except errors.APIError as e:
                raise RemoteError(e.message) from e
            except httpx.HTTPError as e:
                raise RemoteError(f"Could not reach the image service: {e}") from e
            return extract_image_bytes(response)
