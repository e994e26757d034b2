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

VALIDATION_MESSAGE = "Please upload an image and enter an editing prompt."
REMOTE_FALLBACK_MESSAGE = "The image service request failed."
NO_IMAGE_MESSAGE = "No image returned by the model."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


class ImageEditError(Exception):
    """Base class for errors surfaced to the user while editing an image."""

    default_message = UNKNOWN_ERROR_MESSAGE

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ImageEditError):
    """Missing image or blank prompt at generate time."""

    default_message = VALIDATION_MESSAGE


class RemoteError(ImageEditError):
    """The image service rejected the request or could not be reached."""

    default_message = REMOTE_FALLBACK_MESSAGE


class NoImageReturnedError(RemoteError):
    """The call succeeded but the response carried no image payload.

    Text-only replies (refusals, clarifying questions) land here too; the
    text is kept on ``model_text`` for diagnostics.
    """

    default_message = NO_IMAGE_MESSAGE

    def __init__(self, message: str | None = None, model_text: str = ""):
        self.model_text = model_text
        super().__init__(message)


class UnknownError(ImageEditError):
    """Any failure that is not a validation or remote error."""
