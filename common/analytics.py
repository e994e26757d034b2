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


import logging
import json
import os
import time
from contextlib import contextmanager

import mesop as me
from google.cloud import logging as cloud_logging

from state.state import AppState


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON."""

    def format(self, record):
        log_object = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        if hasattr(record, "extra_data"):
            log_object.update(record.extra_data)
        if record.exc_info:
            log_object["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_object, default=str)


def get_logger(name: str):
    """Creates and configures a logger."""
    logger = logging.getLogger(name)
    # Prevent duplicate handlers on repeated calls
    if not logger.handlers:
        logger.setLevel(logging.INFO)

        # Cloud Run sets K_SERVICE; its logging agent parses the JSON payload.
        if os.environ.get("K_SERVICE"):
            client = cloud_logging.Client()
            handler = client.get_default_handler()
        else:
            handler = logging.StreamHandler()
            handler.setFormatter(JsonFormatter())

        logger.addHandler(handler)
    return logger


analytics_logger = get_logger("image_editor.analytics")


def _session_context() -> dict:
    try:
        state = me.state(AppState)
        return {"page_name": state.current_page or "unknown", "session_id": state.session_id or "unknown"}
    except Exception:  # pylint: disable=broad-except
        # me.state is unavailable outside a Mesop request (API routes, tests).
        return {"page_name": "unknown", "session_id": "unknown"}


def log_event(event_type: str, message: str, **fields):
    """Logs a structured analytics event tagged with the current session."""
    extra_data = {"event_type": event_type, **_session_context(), **fields}
    analytics_logger.info(message, extra={"extra_data": extra_data})


def log_ui_click(element_id: str, page_name: str, session_id: str = None):
    """Logs a click on an editor control."""
    log_event(
        "ui_click",
        f"UI Click: {element_id} on {page_name}",
        element_id=element_id,
        page_name=page_name,
        session_id=session_id,
    )


@contextmanager
def track_model_call(model_name: str, **details):
    """Context manager to log the duration and status of a model call."""
    start_time = time.time()
    status = "failure"
    try:
        yield
        status = "success"
    except Exception as e:
        details["error"] = str(e)
        raise
    finally:
        log_event(
            "model_call",
            f"Model Call: {model_name} ({status})",
            model_name=model_name,
            status=status,
            duration_ms=round((time.time() - start_time) * 1000, 2),
            details=details,
        )
