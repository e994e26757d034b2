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
"""FastAPI host serving the Mesop editor and the image edit API."""

import os

import mesop as me
from fastapi import FastAPI
from fastapi.middleware.wsgi import WSGIMiddleware

from common.analytics import get_logger
from routers.image_edit_router import router as image_edit_router

logger = get_logger(__name__)

app = FastAPI()
app.include_router(image_edit_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}


def _mount_mesop(fastapi_app: FastAPI) -> None:
    # Importing the page module registers its routes with Mesop.
    import pages.image_editor  # pylint: disable=import-outside-toplevel,unused-import

    fastapi_app.mount(
        "/",
        WSGIMiddleware(
            me.create_wsgi_app(debug_mode=os.environ.get("DEBUG_MODE", "") == "true")
        ),
    )


if os.environ.get("MESOP_DISABLE_UI", "") != "true":
    _mount_mesop(app)


if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", 8080))
    logger.info(f"Starting server on port {port}")
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=False)
