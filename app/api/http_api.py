"""
HTTP API adapter for the image generation proxy.

Architectural role:
- Expose a single browser-facing endpoint that forwards prompts upstream.
- Enforce adapter-level CORS policy, method gating and input validation.
- Delegate the upstream call and outcome classification to `app.core.engine`.

Endpoint responsibilities:
- `OPTIONS /api/generate-image`: answer browser preflight checks.
- `POST /api/generate-image`: validate input, check the credential, invoke
  core, and emit the classified JSON result.

API request lifecycle:
1. Attach CORS headers (single trusted origin) to every response.
2. `OPTIONS` -> HTTP 200 with an empty body.
3. Any other non-POST method -> HTTP 405.
4. Missing upstream credential -> HTTP 500 with a fixed message.
5. Parse the JSON body; missing/empty `prompt` -> HTTP 400.
6. Forward `prompt` and the effective model to `app.core.engine.generate_image`.

Error handling strategy:
- Validation failures return structured JSON errors.
- Upstream/runtime failures are converted by the engine; nothing escapes.

Side effects:
- Loads environment variables at import time via `load_dotenv()`.
- Emits log lines; the credential is never logged.
"""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ValidationError, field_validator
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core import engine
from app.core.generation_types import GenerationRequest
from app.image.provider_config import (
    ALLOWED_HEADERS,
    ALLOWED_METHODS,
    ALLOWED_ORIGIN,
    get_hf_token,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Image Generation Proxy")

GENERATE_IMAGE_PATH = "/api/generate-image"
ROUTE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

METHOD_NOT_ALLOWED = "Method Not Allowed"
TOKEN_MISSING = "Server configuration error. API token missing."
PROMPT_REQUIRED = "Prompt is required"


# ============================================================
# Request Schema
# ============================================================

class GenerateImagePayload(BaseModel):
    """
    Inbound JSON body.

    Notes:
    - `prompt` must be a non-empty string; checked by the endpoint.
    - `modelId` values that are not non-empty strings fall back to the default;
      other values are forwarded as sent.
    """
    prompt: str | None = None
    modelId: str | None = None

    @field_validator("modelId", mode="before")
    @classmethod
    def _normalize_model_id(cls, value):
        if isinstance(value, str) and value:
            return value
        return None


# ============================================================
# CORS
# ============================================================

def cors_headers() -> dict:
    """Return the CORS headers attached to every response."""
    return {
        "Access-Control-Allow-Origin": ALLOWED_ORIGIN,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }


def json_response(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=cors_headers())


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """
    Keep the endpoint's 405 contract for methods the router itself rejects
    (for example TRACE); other HTTP errors use FastAPI's default handling.
    """
    if exc.status_code == 405 and request.url.path == GENERATE_IMAGE_PATH:
        logger.info("Method Not Allowed: %s", request.method)
        return json_response(405, {"error": METHOD_NOT_ALLOWED})
    return await http_exception_handler(request, exc)


async def _read_payload(request: Request) -> GenerateImagePayload | None:
    """Parse and validate the request body, or return `None` when unusable."""
    try:
        body = await request.json()
    except (ValueError, UnicodeDecodeError):
        return None

    if not isinstance(body, dict):
        return None

    try:
        return GenerateImagePayload.model_validate(body)
    except ValidationError:
        return None


# ============================================================
# Image Generation Endpoint
# ============================================================

@app.api_route(GENERATE_IMAGE_PATH, methods=ROUTE_METHODS)
async def generate_image(request: Request):
    """
    Proxy one text-to-image request to the upstream provider.

    Input validation behavior:
    - HTTP 405 for methods other than POST/OPTIONS.
    - HTTP 500 when the upstream credential is not configured.
    - HTTP 400 for a missing, empty or non-string `prompt`, including bodies
      that are not JSON objects.

    Response formatting:
    - 200 `{"imageData": <base64>}` on success.
    - `{"error": ..., "promptUsed": ...}` with 500/503 on upstream failures.
    """
    method = request.method.upper()

    if method == "OPTIONS":
        logger.info("Responding to OPTIONS request")
        return Response(status_code=200, headers=cors_headers())

    if method != "POST":
        logger.info("Method Not Allowed: %s", method)
        return json_response(405, {"error": METHOD_NOT_ALLOWED})

    token = get_hf_token()
    if not token:
        logger.error("Upstream API token is not configured")
        return json_response(500, {"error": TOKEN_MISSING})

    payload = await _read_payload(request)
    if payload is None or not payload.prompt:
        logger.info("Bad Request: prompt is missing")
        return json_response(400, {"error": PROMPT_REQUIRED})

    generation_request = GenerationRequest(prompt=payload.prompt, model_id=payload.modelId)
    result = await engine.generate_image(generation_request, token)

    return json_response(result.status_code, result.to_body())
