import json
import os
import sys
import tempfile
from typing import List, Optional

import requests
from pydantic import ValidationError

from ask_xai.config import Diagnostics, Settings, warn
from ask_xai.errors import (
    EmptyResponseError,
    InvalidResponseError,
    MissingCredentialError,
    NoContentError,
    TransportError,
)
from ask_xai.request import ChatRequest, ChatResponse, serialize_request

TEMP_PREFIX = "ask-xai-grok-"


def decode_body(raw: bytes) -> str:
    """Decode raw response bytes, tolerating anything that is not UTF-8."""
    return raw.decode("utf-8", errors="replace")


def model_ids(payload) -> List[str]:
    """Pull model ids out of a /models response: .data[].id, else .models[].id."""
    if not isinstance(payload, dict):
        return []
    for key in ("data", "models"):
        entries = payload.get(key) or []
        if not isinstance(entries, list):
            continue
        ids = [e["id"] for e in entries if isinstance(e, dict) and isinstance(e.get("id"), str) and e["id"]]
        if ids:
            return sorted(set(ids))
    return []


def extract_content(response: ChatResponse) -> str:
    content = response.content()
    if content is None:
        raise NoContentError("Response has no message content (missing or null)")
    if content == "":
        raise EmptyResponseError("Response content is empty")
    return content


class XaiClient:
    """Thin wrapper around the xAI REST endpoints."""

    def __init__(self, settings: Settings, diagnostics: Optional[Diagnostics] = None):
        self.settings = settings
        self.diagnostics = diagnostics or Diagnostics()

    def _headers(self) -> dict:
        if not self.settings.api_key:
            raise MissingCredentialError("XAI_API_KEY environment variable not set.")
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }

    def fetch_models(self) -> List[str]:
        url = f"{self.settings.base_url}/models"
        self.diagnostics("models", f"GET {url}")
        try:
            resp = requests.get(url, headers=self._headers(), timeout=self.settings.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"Failed to retrieve models: {e}") from None

        raw = decode_body(resp.content)
        try:
            payload = json.loads(raw)
        except ValueError:
            raise InvalidResponseError(f"Models response is not JSON: {raw}", raw) from None

        ids = model_ids(payload)
        if not ids:
            raise InvalidResponseError(f"No model ids in response: {raw}", raw)
        return ids

    def list_models(self, out=None) -> bool:
        """
        Print available model ids, one per line.

        Never raises: on any failure the fallback model is printed with a
        warning and False is returned.
        """
        out = out or sys.stdout
        try:
            ids = self.fetch_models()
        except Exception as e:
            warn(f"{e} (showing the default model only)")
            print(self.settings.fallback_model, file=out)
            return False

        for model_id in ids:
            print(model_id, file=out)
        return True

    def chat(self, request: ChatRequest) -> str:
        """POST ``request`` to /chat/completions and return the reply text."""
        body = serialize_request(request)
        headers = self._headers()
        url = f"{self.settings.base_url}/chat/completions"

        if self.diagnostics.verbose:
            with tempfile.NamedTemporaryFile(prefix=f"{TEMP_PREFIX}request-", suffix=".json") as staged:
                staged.write(body)
                staged.flush()
                self.diagnostics("request", f"Request body staged at {staged.name}")
                self.diagnostics("request", decode_body(body))
                raw = self._post(url, headers, body)
        else:
            raw = self._post(url, headers, body)

        return self._handle_response(raw)

    def _post(self, url: str, headers: dict, body: bytes):
        self.diagnostics("request", f"POST {url}")
        try:
            resp = requests.post(url, headers=headers, data=body, timeout=self.settings.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from None
        self.diagnostics("response", f"HTTP {resp.status_code}")
        return resp

    def _handle_response(self, resp) -> str:
        raw = decode_body(resp.content)

        if self.diagnostics.verbose:
            fd, path = tempfile.mkstemp(prefix=f"{TEMP_PREFIX}response-", suffix=".json")
            with os.fdopen(fd, "wb") as f:
                f.write(resp.content)
            self.diagnostics("response", f"Raw response saved to {path}")
            self.diagnostics("response", raw)

        try:
            payload = json.loads(raw)
        except ValueError:
            raise InvalidResponseError(f"Invalid JSON response from API:\n{raw}", raw) from None

        if not 200 <= resp.status_code < 300:
            detail = payload.get("error", raw) if isinstance(payload, dict) else raw
            if isinstance(detail, dict):
                detail = detail.get("message", detail)
            raise TransportError(f"API returned HTTP {resp.status_code}: {detail}")

        try:
            response = ChatResponse.model_validate(payload)
        except ValidationError:
            raise NoContentError(f"Response has no usable message content:\n{raw}") from None
        return extract_content(response)
