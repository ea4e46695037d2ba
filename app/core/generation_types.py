"""Per-request data contracts for `app.core.engine`.

Architectural role:
    Defines the inbound generation request and the single outcome produced for
    it. Both live for exactly one request/response cycle.

Invariant:
    A `GenerationResult` is either a success (`image_data`) or a failure
    (`error` + `prompt_used`), never both.
"""

from dataclasses import dataclass

from app.image.provider_config import DEFAULT_MODEL


@dataclass(frozen=True)
class GenerationRequest:
    """Validated prompt plus optional caller-selected model."""

    prompt: str
    model_id: str | None = None

    @property
    def effective_model(self) -> str:
        return self.model_id or DEFAULT_MODEL


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation call.

    Attributes:
        status_code: HTTP status to emit (200 on success).
        image_data: Base64 image content for the success variant.
        error: Human-readable message for the failure variant.
        prompt_used: Echo of the original prompt for failures.
    """

    status_code: int
    image_data: str | None = None
    error: str | None = None
    prompt_used: str | None = None

    @classmethod
    def success(cls, image_data: str) -> "GenerationResult":
        return cls(status_code=200, image_data=image_data)

    @classmethod
    def failure(cls, error: str, prompt_used: str, status_code: int = 500) -> "GenerationResult":
        return cls(status_code=status_code, error=error, prompt_used=prompt_used)

    @property
    def ok(self) -> bool:
        return self.image_data is not None

    def to_body(self) -> dict:
        if self.ok:
            return {"imageData": self.image_data}
        return {"error": self.error, "promptUsed": self.prompt_used}
