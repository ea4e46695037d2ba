import pytest
from fastapi.testclient import TestClient

from app.api.http_api import app
from app.core import engine
from app.image.client import ImageBlob


PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01fake-image-bytes\xff\x00"


class StubImageClient:
    """Upstream client double recording every call it receives."""

    def __init__(self, token, outcome, calls):
        self.token = token
        self.outcome = outcome
        self.calls = calls

    def text_to_image(self, model, inputs, parameters=None):
        self.calls.append(
            {"token": self.token, "model": model, "inputs": inputs, "parameters": parameters}
        )
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class StubUpstream:
    def __init__(self):
        self.calls = []
        self.outcome = ImageBlob(content=PNG_BYTES, content_type="image/png")

    def returns_image(self, content=PNG_BYTES, content_type="image/jpeg"):
        self.outcome = ImageBlob(content=content, content_type=content_type)

    def returns_json(self, text, status_code=503):
        self.outcome = ImageBlob(
            content=text.encode("utf-8"),
            content_type="application/json; charset=utf-8",
            status_code=status_code,
        )

    def raises(self, exc):
        self.outcome = exc

    def factory(self, token):
        return StubImageClient(token, self.outcome, self.calls)


@pytest.fixture
def upstream():
    stub = StubUpstream()
    engine.set_client_factory(stub.factory)
    yield stub
    engine.set_client_factory(None)


@pytest.fixture
def hf_token(monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "hf_test_token")
    return "hf_test_token"


@pytest.fixture
def client():
    return TestClient(app)
