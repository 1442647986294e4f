import os
import sys
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from ask_xai.errors import InvalidArgumentError

DEFAULT_API_BASE = "https://api.x.ai/v1"
DEFAULT_MODEL = "grok-3"
FALLBACK_MODEL = "grok-3"
DEFAULT_RENDERER = "glow -"


class Settings(BaseModel):
    """Process-wide configuration, built once at startup and passed around."""

    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    base_url: str = DEFAULT_API_BASE
    default_model: str = DEFAULT_MODEL
    fallback_model: str = FALLBACK_MODEL
    timeout: Optional[float] = None
    renderer: str = DEFAULT_RENDERER


def load_settings(strict: bool = True) -> Settings:
    """
    Load .env (if any) and read the XAI_* variables into Settings.

    With ``strict=False`` a bad XAI_TIMEOUT only warns and no timeout is used.
    """
    load_dotenv()

    timeout = None
    raw_timeout = os.getenv("XAI_TIMEOUT")
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            message = f"XAI_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            if strict:
                raise InvalidArgumentError(message) from None
            warn(f"{message}; ignoring it.")

    return Settings(
        api_key=os.getenv("XAI_API_KEY") or None,
        base_url=os.getenv("XAI_API_BASE", DEFAULT_API_BASE).rstrip("/"),
        default_model=os.getenv("XAI_MODEL") or DEFAULT_MODEL,
        timeout=timeout,
        renderer=os.getenv("ASK_XAI_RENDERER") or DEFAULT_RENDERER,
    )


class Diagnostics:
    """Verbose-only progress output. Always goes to stderr, never stdout."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def __call__(self, tag: str, message: str):
        if not self.verbose:
            return
        print(f"[{tag}] {message}", file=sys.stderr)


def warn(message: str):
    print(f"⚠️  Warning: {message}", file=sys.stderr)
