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

import pytest

from conftest import make_image_bytes

from common.utils import get_image_resolution, guess_image_mime_type, split_data_uri, to_data_uri
from config.gemini_image_models import get_gemini_image_model_config


def test_split_data_uri_decodes_payload():
    mime_type, payload = split_data_uri(to_data_uri(b"hello", "image/webp"))
    assert mime_type == "image/webp"
    assert payload == b"hello"


@pytest.mark.parametrize(
    "value",
    ["", "https://example.com/a.png", "data:image/png,rawtext", "data:image/png;base64,@@@"],
)
def test_split_data_uri_rejects_non_base64(value):
    with pytest.raises(ValueError):
        split_data_uri(value)


def test_guess_image_mime_type():
    assert guess_image_mime_type(make_image_bytes(fmt="JPEG")) == "image/jpeg"
    assert guess_image_mime_type(b"not an image") == "image/png"


def test_get_image_resolution():
    assert get_image_resolution(make_image_bytes(size=(10, 20))) == "10x20"
    assert get_image_resolution(b"") == "Unknown"
    assert get_image_resolution(b"garbage") == "Unknown"


def test_model_config_lookup_by_name_or_version():
    by_name = get_gemini_image_model_config("gemini-2.5-flash-image")
    assert by_name is get_gemini_image_model_config("2.5-flash")
    assert by_name.accepts("image/png")
    assert not by_name.accepts("image/gif")
    assert get_gemini_image_model_config("unknown-model") is None
