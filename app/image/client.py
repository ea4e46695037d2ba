"""Hugging Face text-to-image HTTP client.

Processing flow:
    1. Build the model endpoint URL from `app.image.provider_config`.
    2. Submit the prompt (and optional parameters) with a bearer token.
    3. Return the raw response body together with its declared content type.

Response discrimination:
    The upstream answers either with binary image bytes or with a JSON error
    object (`error`, optionally `estimated_time`). The two are told apart by
    the HTTP `Content-Type` header; see `ImageBlob.is_json`.

Base64:
    This module does not encode image content; see `app.image.service`.

Error handling strategy:
    - JSON bodies are returned regardless of HTTP status so callers can
      classify them.
    - Non-2xx responses without a JSON body raise `UpstreamRequestError`.
    - Transport failures propagate as `requests` exceptions.

Retry behavior:
    No retry loop is implemented. Each call is attempted once.

Security considerations:
    The token is only placed in the `Authorization` header, never in errors.
"""

from dataclasses import dataclass

import requests

from app.image.provider_config import HF_TIMEOUT_SECONDS, build_model_url

JSON_CONTENT_TYPE = "application/json"


class UpstreamRequestError(RuntimeError):
    """Raised when the upstream returns an unusable non-JSON response."""

    def __init__(self, status_code: int, content_type: str = ""):
        self.status_code = status_code
        self.content_type = content_type
        detail = f" ({content_type})" if content_type else ""
        super().__init__(f"Upstream request failed with status {status_code}{detail}")


@dataclass
class ImageBlob:
    """Raw upstream response body.

    Attributes:
        content: Response bytes (image data or a JSON error document).
        content_type: Declared `Content-Type` header, lowercased.
        status_code: HTTP status of the upstream response.
    """

    content: bytes
    content_type: str = ""
    status_code: int = 200

    @property
    def is_json(self) -> bool:
        return self.content_type.lower().startswith(JSON_CONTENT_TYPE)

    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class HuggingFaceInferenceClient:
    """Minimal text-to-image client for the Hugging Face Inference API."""

    def __init__(self, token: str, timeout: float = HF_TIMEOUT_SECONDS):
        self.token = token
        self.timeout = timeout

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    def text_to_image(self, model: str, inputs: str, parameters: dict | None = None) -> ImageBlob:
        """Request one image for `inputs` from `model`.

        Args:
            model: Upstream model identifier (for example `org/name`).
            inputs: Prompt text.
            parameters: Optional generation parameters; omitted when empty.

        Returns:
            `ImageBlob` holding either image bytes or a JSON error document.

        Failure handling:
            - Non-2xx non-JSON response -> `UpstreamRequestError`
            - Network failures -> propagated `requests.RequestException`
        """
        payload = {"inputs": inputs}
        if parameters:
            payload["parameters"] = dict(parameters)

        response = requests.post(
            build_model_url(model),
            json=payload,
            headers=self._headers(),
            timeout=self.timeout,
        )

        content_type = (response.headers.get("Content-Type") or "").lower()
        blob = ImageBlob(
            content=response.content,
            content_type=content_type,
            status_code=response.status_code,
        )

        if not blob.is_json and not 200 <= response.status_code < 300:
            raise UpstreamRequestError(response.status_code, content_type)

        return blob
