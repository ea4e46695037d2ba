import asyncio
import base64

from app.core import engine
from app.core.generation_types import GenerationRequest, GenerationResult
from app.image import client as client_module
from app.image.client import HuggingFaceInferenceClient
from app.image.provider_config import DEFAULT_MODEL
from tests.conftest import PNG_BYTES


def run(request, token="hf_test_token"):
    return asyncio.run(engine.generate_image(request, token))


def test_success_result_body(upstream):
    result = run(GenerationRequest(prompt="a red fox"))

    assert result.ok
    assert result.status_code == 200
    assert result.to_body() == {"imageData": base64.b64encode(PNG_BYTES).decode("ascii")}
    assert upstream.calls[0]["token"] == "hf_test_token"


def test_effective_model():
    assert GenerationRequest(prompt="p").effective_model == DEFAULT_MODEL
    assert GenerationRequest(prompt="p", model_id="").effective_model == DEFAULT_MODEL
    assert GenerationRequest(prompt="p", model_id="org/m").effective_model == "org/m"


def test_failure_result_body(upstream):
    upstream.returns_json('{"error": "Model too busy"}')

    result = run(GenerationRequest(prompt="a red fox"))

    assert not result.ok
    assert result.status_code == 500
    assert result.image_data is None
    assert result.to_body() == {"error": "Model too busy", "promptUsed": "a red fox"}


def test_client_construction_failure_is_caught():
    def broken_factory(token):
        raise ValueError("bad client")

    engine.set_client_factory(broken_factory)
    try:
        result = run(GenerationRequest(prompt="p"))
    finally:
        engine.set_client_factory(None)

    assert result.status_code == 500
    assert result.error == "Failed to generate image: bad client"
    assert result.prompt_used == "p"


def test_reset_restores_default_factory():
    engine.set_client_factory(lambda token: None)
    engine.set_client_factory(None)

    assert engine._CLIENT_FACTORY is HuggingFaceInferenceClient


def test_result_variants_are_exclusive():
    success = GenerationResult.success("aGk=")
    failure = GenerationResult.failure("boom", "p", 503)

    assert success.error is None and success.prompt_used is None
    assert failure.image_data is None
    assert failure.status_code == 503


class HtmlGatewayResponse:
    status_code = 502
    content = b"<html>Bad Gateway</html>"
    headers = {"Content-Type": "text/html"}


def test_non_json_upstream_failure_becomes_500(monkeypatch):
    monkeypatch.setattr(client_module.requests, "post", lambda *args, **kwargs: HtmlGatewayResponse())

    result = run(GenerationRequest(prompt="a red fox"))

    assert result.status_code == 500
    assert result.error == "Failed to generate image: Upstream request failed with status 502 (text/html)"
    assert result.prompt_used == "a red fox"
