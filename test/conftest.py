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
import io
import os
import sys

import pytest
from PIL import Image

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from common.error_handling import RemoteError  # noqa: E402


def make_image_bytes(color: str = "red", size: tuple[int, int] = (4, 3), fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


class FakeUpload:
    """Stands in for ``me.UploadedFile``."""

    def __init__(self, data: bytes, mime_type: str = "image/png", name: str = "image.png"):
        self._data = data
        self.mime_type = mime_type
        self.name = name

    def getvalue(self) -> bytes:
        return self._data


class FakeEditClient:
    """Records calls and returns a canned image or raises a canned error.

    When ``gate`` is set the call waits on it, which lets a test act while the
    request is still in flight.
    """

    def __init__(self, result: bytes = b"", error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls = []
        self.gate: asyncio.Event | None = None
        self.started: asyncio.Event | None = None

    async def edit_image(self, image_bytes: bytes, mime_type: str, prompt: str) -> bytes:
        self.calls.append((image_bytes, mime_type, prompt))
        if self.started is not None:
            self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result


async def drain(generator) -> list:
    return [state async for state in generator]


@pytest.fixture
def png_a() -> bytes:
    return make_image_bytes("red")


@pytest.fixture
def png_b() -> bytes:
    return make_image_bytes("blue", size=(8, 6))


@pytest.fixture
def rejecting_client() -> FakeEditClient:
    return FakeEditClient(error=RemoteError("unsafe content"))


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: calls live Google Cloud services")
