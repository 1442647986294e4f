import io
import sys
import pathlib
from types import SimpleNamespace

# Make project root importable
sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))

import pytest

from ask_xai import config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # Keep a developer's real .env and XAI_* variables out of the tests
    monkeypatch.setattr(config, "load_dotenv", lambda *a, **kw: False)
    for name in ("XAI_API_KEY", "XAI_API_BASE", "XAI_MODEL", "XAI_TIMEOUT", "ASK_XAI_RENDERER"):
        monkeypatch.delenv(name, raising=False)


class FakeTTY(io.StringIO):
    def isatty(self):
        return True


class Piped(io.StringIO):
    def isatty(self):
        return False


def fake_response(body, status_code=200):
    if isinstance(body, str):
        body = body.encode("utf-8")

    def raise_for_status():
        if status_code >= 400:
            import requests
            raise requests.HTTPError(f"{status_code} Error")

    return SimpleNamespace(status_code=status_code, content=body, raise_for_status=raise_for_status)


@pytest.fixture
def tty():
    return FakeTTY()


@pytest.fixture
def piped():
    return Piped


@pytest.fixture
def make_response():
    return fake_response


class PipedBytes(io.TextIOWrapper):
    """A piped stdin whose underlying bytes need not be valid UTF-8."""

    def __init__(self, data: bytes):
        super().__init__(io.BytesIO(data), encoding="utf-8")

    def isatty(self):
        return False


@pytest.fixture
def piped_bytes():
    return PipedBytes
