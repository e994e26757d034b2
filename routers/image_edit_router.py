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
import time

from fastapi import APIRouter, Depends, HTTPException

from common.analytics import get_logger
from common.error_handling import RemoteError, UnknownError, ValidationError
from common.utils import get_image_resolution, guess_image_mime_type
from models.gemini import GeminiImageEditClient
from models.requests import ImageEditApiRequest, ImageEditApiResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["image_edit"])

_edit_client: GeminiImageEditClient | None = None


def get_edit_client() -> GeminiImageEditClient:
    global _edit_client  # pylint: disable=global-statement
    if _edit_client is None:
        _edit_client = GeminiImageEditClient()
    return _edit_client


@router.post("/image_edit", response_model=ImageEditApiResponse)
async def edit_image(
    request: ImageEditApiRequest,
    client: GeminiImageEditClient = Depends(get_edit_client),
):
    """
    Edits a base64 encoded image with a text instruction.
    Returns the edited image, also base64 encoded.
    """
    start_time = time.time()
    try:
        edited = await client.edit_image(request.image_bytes(), request.mime_type, request.prompt)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message) from e
    except RemoteError as e:
        logger.warning(f"Image edit via API failed: {e.message}")
        raise HTTPException(status_code=502, detail=e.message) from e
    except Exception as e:
        logger.exception("Unexpected error while editing image via API")
        raise HTTPException(status_code=500, detail=UnknownError.default_message) from e

    return ImageEditApiResponse(
        image_base64=base64.b64encode(edited).decode("ascii"),
        mime_type=guess_image_mime_type(edited),
        resolution=get_image_resolution(edited),
        generation_time=time.time() - start_time,
    )
