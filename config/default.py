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

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv(override=True)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes")


@dataclass
class Default:
    """Defaults class"""

    # pylint: disable=invalid-name

    APP_NAME: str = os.environ.get("APP_NAME", "AI Image Editor")

    # Gemini
    PROJECT_ID: str | None = os.environ.get("PROJECT_ID")
    LOCATION: str = os.environ.get("LOCATION", "us-central1")
    GEMINI_API_KEY: str | None = os.environ.get("GEMINI_API_KEY")
    USE_VERTEX: bool = field(
        default_factory=lambda: _env_flag(
            "USE_VERTEX", "false" if os.environ.get("GEMINI_API_KEY") else "true"
        )
    )
    GEMINI_IMAGE_GEN_MODEL: str = os.environ.get(
        "GEMINI_IMAGE_GEN_MODEL", "gemini-2.5-flash-image"
    )
