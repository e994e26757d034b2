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
import binascii

from pydantic import BaseModel, Field, field_validator


def _check_image_mime_type(value: str) -> str:
    if not value.startswith("image/"):
        raise ValueError(f"Unsupported MIME type: {value}")
    return value


class ImageEditRequest(BaseModel):
    """
    Defines the contract for a single image edit call.
    Built by the edit client from its arguments before anything is sent.
    """

    image_bytes: bytes = Field(..., min_length=1)
    mime_type: str
    prompt: str

    @field_validator("mime_type")
    @classmethod
    def _mime_type_is_image(cls, value: str) -> str:
        return _check_image_mime_type(value)

    @field_validator("prompt")
    @classmethod
    def _prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Prompt must not be blank.")
        return value


class ImageEditApiRequest(BaseModel):
    """JSON body of ``POST /api/image_edit``."""

    image_base64: str = Field(..., min_length=1)
    mime_type: str
    prompt: str = Field(..., min_length=1)

    @field_validator("mime_type")
    @classmethod
    def _mime_type_is_image(cls, value: str) -> str:
        return _check_image_mime_type(value)

    @field_validator("image_base64")
    @classmethod
    def _is_base64(cls, value: str) -> str:
        try:
            base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise ValueError("image_base64 is not valid base64.") from e
        return value

    def image_bytes(self) -> bytes:
        return base64.b64decode(self.image_base64)


class ImageEditApiResponse(BaseModel):
    image_base64: str
    mime_type: str
    resolution: str = "Unknown"
    generation_time: float = 0.0
