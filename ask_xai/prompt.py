import os
import sys
from typing import Optional, TextIO

from ask_xai.errors import EmptyPromptError, MissingFileError
from ask_xai.request import InvocationParameters


def read_prompt_file(path: str) -> str:
    """Read a prompt file given with -p. Trailing newlines are dropped."""
    if not os.path.isfile(path):
        raise MissingFileError(f"Prompt file not found: {path}")
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read().rstrip("\n")


def join_prompt(file_prompt: Optional[str], words) -> str:
    """File-sourced prompt first, then the positional words on the next line."""
    text = " ".join(words)
    if file_prompt and text:
        return f"{file_prompt}\n{text}"
    return file_prompt or text


def read_piped_input(stream: Optional[TextIO] = None) -> str:
    """Return piped stdin text, or "" when stdin is a terminal or empty."""
    stream = stream if stream is not None else sys.stdin
    if stream is None or stream.isatty():
        return ""
    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        text = buffer.read().decode("utf-8", errors="replace")
    else:
        text = stream.read()
    return text.rstrip("\n")


def assemble_prompt(prompt: str, piped: str) -> str:
    if prompt and piped:
        return f"{prompt}\n{piped}"
    prompt = prompt or piped
    if not prompt:
        raise EmptyPromptError("No prompt given. Pass words, -p FILE, or pipe text on stdin.")
    return prompt


def read_attachment(params: InvocationParameters) -> Optional[str]:
    """Load the -f file, if one was given."""
    if params.attached_file_path is None:
        return None
    if not os.path.isfile(params.attached_file_path):
        raise MissingFileError(f"Attached file not found: {params.attached_file_path}")
    with open(params.attached_file_path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()
