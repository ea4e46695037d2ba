"""
Command-line entrypoint for one-off image generation.

Architectural role:
- Provides a terminal interface over the same core engine used by the HTTP API.
- Writes the decoded image to disk instead of returning base64 JSON.

Request lifecycle:
1. Parse `prompt`, optional `--model` and `--output` arguments.
2. Check the upstream credential and the prompt.
3. Run `app.core.engine.generate_image`.
4. Decode the base64 payload and write it to the output path.

Exit codes:
- 0 on success.
- 1 when the upstream generation fails.
- 2 for a missing credential or empty prompt.
"""

import argparse
import asyncio
import base64
import logging
import sys

from app.core.engine import generate_image
from app.core.generation_types import GenerationRequest
from app.image.provider_config import DEFAULT_MODEL, HF_TOKEN_ENV, LOG_LEVEL, get_hf_token

DEFAULT_OUTPUT = "generated.png"


def build_parser():
    parser = argparse.ArgumentParser(description="Generate one image from a text prompt.")
    parser.add_argument("prompt", help="Text description of the image.")
    parser.add_argument("--model", default=None, help=f"Upstream model id (default: {DEFAULT_MODEL}).")
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help="Destination file for the image.")
    return parser


def main(argv=None):
    """
    Run one generation and return a process exit code.

    Error handling strategy:
    - Configuration and input problems print a message and return 2.
    - Upstream failures print the classified error and return 1.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL)

    token = get_hf_token()
    if not token:
        print(f"Server configuration error. {HF_TOKEN_ENV} is not set.", file=sys.stderr)
        return 2

    if not args.prompt:
        print("Prompt is required", file=sys.stderr)
        return 2

    request = GenerationRequest(prompt=args.prompt, model_id=args.model)
    result = asyncio.run(generate_image(request, token))

    if not result.ok:
        print(f"[{result.status_code}] {result.error}", file=sys.stderr)
        return 1

    with open(args.output, "wb") as f:
        f.write(base64.b64decode(result.image_data))

    print(f"Image written to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
