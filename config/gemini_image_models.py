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

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class GeminiImageModelConfig:
    """Configuration for a Gemini model that can edit an input image."""

    version_id: str  # Short ID (e.g., "2.5-flash")
    model_name: str  # Full API Model ID (e.g., "gemini-2.5-flash-image")
    display_name: str

    accepted_mime_types: List[str] = field(
        default_factory=lambda: ["image/jpeg", "image/png", "image/webp"]
    )
    # Inline request payloads are capped by the API.
    max_input_bytes: int = 7 * 1024 * 1024

    def accepts(self, mime_type: str) -> bool:
        return mime_type in self.accepted_mime_types


GEMINI_IMAGE_MODELS: List[GeminiImageModelConfig] = [
    GeminiImageModelConfig(
        version_id="2.5-flash",
        model_name="gemini-2.5-flash-image",
        display_name="Gemini 2.5 Flash Image",
    ),
    GeminiImageModelConfig(
        version_id="2.5-flash-preview",
        model_name="gemini-2.5-flash-image-preview",
        display_name="Gemini 2.5 Flash Image Preview",
    ),
    GeminiImageModelConfig(
        version_id="3.0-pro-preview",
        model_name="gemini-3-pro-image-preview",
        display_name="Gemini 3.0 Pro Image Preview",
        accepted_mime_types=["image/jpeg", "image/png", "image/webp", "image/heic", "image/heif"],
    ),
]


def get_gemini_image_model_config(
    model_name_or_version: str,
) -> Optional[GeminiImageModelConfig]:
    """Finds config by either full model name or short version ID."""
    for model in GEMINI_IMAGE_MODELS:
        if model_name_or_version in (model.model_name, model.version_id):
            return model
    return None
