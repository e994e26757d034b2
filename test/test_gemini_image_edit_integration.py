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
import os

import pytest

from conftest import make_image_bytes

from common.utils import get_image_resolution
from models.gemini import GeminiImageEditClient

if not (os.environ.get("PROJECT_ID") or os.environ.get("GEMINI_API_KEY")):
    pytest.skip("PROJECT_ID or GEMINI_API_KEY not set", allow_module_level=True)


@pytest.mark.integration
def test_live_image_edit():
    """Edits a small generated image with the configured Gemini model."""
    source = make_image_bytes("white", size=(256, 256))

    edited = asyncio.run(
        GeminiImageEditClient().edit_image(source, "image/png", "Paint a red circle in the center.")
    )

    print(f"Edited image resolution: {get_image_resolution(edited)}")
    assert edited
    assert get_image_resolution(edited) != "Unknown"
