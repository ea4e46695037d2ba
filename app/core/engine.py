"""Image-generation orchestration for the proxy.

Architectural role:
    Sits between the API/CLI entrypoints and the upstream client. Receives an
    already-validated `GenerationRequest` and a credential, performs the single
    upstream call and converts whatever happens into a `GenerationResult`.

Control flow (`generate_image`):
    1. Build the upstream client from the token via the active factory.
    2. Call `text_to_image` in a worker thread (`asyncio.to_thread`).
    3. JSON body -> classified error (503 when the model is loading, else 500).
    4. Binary body -> base64 success payload.
    5. Any exception -> 500 `Failed to generate image: ...`.

Retry behavior:
    None. Every failure is terminal for the current call.

Determinism:
    Classification and encoding are deterministic for a given upstream
    response. Upstream output itself is not.

Side effects:
    One upstream HTTP call and log lines. The token is never logged.
"""

import asyncio
import logging
from typing import Callable, Protocol

from app.core.generation_types import GenerationRequest, GenerationResult
from app.image.client import HuggingFaceInferenceClient, ImageBlob
from app.image.provider_config import DEFAULT_PARAMETERS
from app.image.service import (
    describe_upstream_error,
    encode_image,
    status_for_upstream_error,
)


logger = logging.getLogger(__name__)

PROMPT_LOG_CHARS = 50
FAILURE_PREFIX = "Failed to generate image: "
UNKNOWN_ERROR = "Unknown error"


class ImageClientProtocol(Protocol):
    """Minimal interface required from an upstream text-to-image client."""

    def text_to_image(self, model: str, inputs: str, parameters: dict | None = None) -> ImageBlob:
        ...


ClientFactory = Callable[[str], ImageClientProtocol]

_CLIENT_FACTORY: ClientFactory = HuggingFaceInferenceClient


def set_client_factory(factory: ClientFactory | None) -> None:
    """Override the upstream client factory, or restore the default with `None`.

    Args:
        factory: Callable receiving the API token and returning a client.
    """
    global _CLIENT_FACTORY
    _CLIENT_FACTORY = factory or HuggingFaceInferenceClient


def _preview(prompt: str) -> str:
    if len(prompt) <= PROMPT_LOG_CHARS:
        return prompt
    return prompt[:PROMPT_LOG_CHARS] + "..."


async def generate_image(request: GenerationRequest, token: str) -> GenerationResult:
    """Run one upstream generation and classify its outcome.

    Args:
        request: Validated prompt and optional model id.
        token: Upstream API credential.

    Returns:
        Exactly one `GenerationResult`; this coroutine never raises for
        upstream, parsing or encoding failures.
    """
    model = request.effective_model
    logger.info("Received request for model: %s, prompt: %r", model, _preview(request.prompt))

    try:
        client = _CLIENT_FACTORY(token)
        blob = await asyncio.to_thread(
            client.text_to_image,
            model=model,
            inputs=request.prompt,
            parameters=dict(DEFAULT_PARAMETERS),
        )
        logger.info("Image response received from upstream")

        if blob.is_json:
            error_text = blob.text()
            logger.error("Upstream returned an error: %s", error_text)
            message = describe_upstream_error(error_text)
            return GenerationResult.failure(
                message,
                request.prompt,
                status_for_upstream_error(message),
            )

        image_data = encode_image(blob.content)
    except Exception as exc:
        logger.exception("Error processing generation request")
        detail = str(exc) or UNKNOWN_ERROR
        return GenerationResult.failure(FAILURE_PREFIX + detail, request.prompt, 500)

    logger.info("Sending base64 image data back to client")
    return GenerationResult.success(image_data)
