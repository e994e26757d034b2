# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import base64
import binascii
import io

from absl import logging
from PIL import Image, UnidentifiedImageError

DEFAULT_IMAGE_MIME_TYPE = "image/png"

_FORMAT_TO_MIME = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
    "GIF": "image/gif",
    "BMP": "image/bmp",
    "TIFF": "image/tiff",
}


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Encodes raw bytes as a base64 data URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def split_data_uri(data_uri: str) -> tuple[str, bytes]:
    """Splits a base64 data URI into its MIME type and decoded payload.

    Raises:
        ValueError: if the string is not a base64 data URI.
    """
    if not data_uri or not data_uri.startswith("data:"):
        raise ValueError("Not a data URI.")
    header, sep, payload = data_uri.partition(",")
    if not sep or not header.endswith(";base64"):
        raise ValueError("Data URI is not base64 encoded.")
    mime_type = header[len("data:") : -len(";base64")] or DEFAULT_IMAGE_MIME_TYPE
    try:
        return mime_type, base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


def guess_image_mime_type(image_bytes: bytes, default: str = DEFAULT_IMAGE_MIME_TYPE) -> str:
    """Detects the MIME type of encoded image bytes, falling back to ``default``."""
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            return _FORMAT_TO_MIME.get(img.format or "", default)
    except (UnidentifiedImageError, OSError) as e:
        logging.info(f"App: Could not identify image format: {e}")
        return default


def get_image_resolution(image_bytes: bytes) -> str:
    """Returns the image resolution as ``WIDTHxHEIGHT`` or ``Unknown``."""
    if not image_bytes:
        return "Unknown"
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            return f"{img.width}x{img.height}"
    except (UnidentifiedImageError, OSError) as e:
        logging.info(f"App: Error getting resolution: {e}")
        return "Unknown"
