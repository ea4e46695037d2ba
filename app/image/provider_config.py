"""Provider/runtime configuration for the image proxy.

Architectural role:
    Centralizes upstream endpoint selection, default model choice, CORS policy
    constants and credential lookup for `app.image.client`, `app.core.engine`
    and the API adapters.

Determinism:
    Module constants are resolved at import time from the process environment
    (after `load_dotenv()`), i.e. they are fixed per deployment. The API token
    is the exception: `get_hf_token` reads it at call time.

Security considerations:
    - The token value is never logged or echoed by callers.
    - Missing credentials are represented as `None`.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Environment variable holding the Hugging Face access token.
HF_TOKEN_ENV = "HF_TOKEN"

# Model used when the caller does not send `modelId`.
DEFAULT_MODEL = os.getenv("DEFAULT_MODEL", "runwayml/stable-diffusion-v1-5")

# Single trusted browser origin (never a wildcard).
ALLOWED_ORIGIN = os.getenv("ALLOWED_ORIGIN", "https://deprived999x.github.io")
ALLOWED_METHODS = "POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type"

HF_INFERENCE_URL_TEMPLATE = os.getenv(
    "HF_INFERENCE_URL_TEMPLATE",
    "https://router.huggingface.co/hf-inference/models/{model}",
)

# Transport timeout of the upstream client; the handler itself adds none.
HF_TIMEOUT_SECONDS = float(os.getenv("HF_TIMEOUT_SECONDS", "120"))

NEGATIVE_PROMPT = os.getenv(
    "NEGATIVE_PROMPT",
    "blurry, ugly, deformed, low quality, text, words, letters, watermark, signature",
)

# Optional generation parameters forwarded with every request.
DEFAULT_PARAMETERS = {"negative_prompt": NEGATIVE_PROMPT} if NEGATIVE_PROMPT else {}

GENERIC_UPSTREAM_ERROR = "Hugging Face API error."

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def get_hf_token():
    """Return the upstream API token from the process environment.

    Returns:
        Token string, or `None` when unset or blank.

    Edge cases:
        - Surrounding whitespace is stripped.
    """
    value = os.getenv(HF_TOKEN_ENV)
    if not value or not value.strip():
        return None
    return value.strip()


def build_model_url(model: str) -> str:
    """Build the inference endpoint URL for `model`."""
    return HF_INFERENCE_URL_TEMPLATE.format(model=model)
