"""
Typed chat-completion request/response bodies and the request builder.

JSON escaping is left entirely to pydantic's serializer; the only manual
step is stripping control characters that have no business in a prompt.
"""
import json
import re
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_core import PydanticSerializationError

from ask_xai.errors import InvalidRequestError

ATTACHMENT_LABEL = "Attached file content:"

# ASCII controls and DEL, keeping tab, LF and CR
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

# lone surrogates, as produced by surrogateescape decoding of argv/stdin
_SURROGATES = re.compile("[\ud800-\udfff]")


class InvocationParameters(BaseModel):
    """Everything one run needs, as parsed from the command line."""

    model_config = ConfigDict(frozen=True)

    model: str
    use_renderer: bool = False
    attached_file_path: Optional[str] = None
    reasoning_effort: Optional[str] = None
    verbose: bool = False
    prompt: str = ""


class ChatMessage(BaseModel):
    role: Literal["user"] = "user"
    content: str


class ChatRequest(BaseModel):
    model: str
    reasoning_effort: Optional[str] = None
    messages: List[ChatMessage]


class ResponseMessage(BaseModel):
    content: Optional[str] = None


class ResponseChoice(BaseModel):
    message: Optional[ResponseMessage] = None


class ChatResponse(BaseModel):
    """Only choices[0].message.content is used; everything else is ignored."""

    choices: List[ResponseChoice] = []

    def content(self) -> Optional[str]:
        if not self.choices or self.choices[0].message is None:
            return None
        return self.choices[0].message.content


def replace_surrogates(text: str) -> str:
    """
    Turn undecodable bytes that Python smuggled in as lone surrogates
    (argv, stdin) into U+FFFD so the text can be serialized.
    """
    return _SURROGATES.sub("\ufffd", text)


def sanitize_text(text: str) -> str:
    return _CONTROL_CHARS.sub("", replace_surrogates(text))


def message_content(prompt: str, attachment: Optional[str] = None) -> str:
    """Combine the prompt and an optional attached file's text into one message."""
    content = sanitize_text(prompt)
    if attachment is not None:
        content = f"{content}\n\n{ATTACHMENT_LABEL}\n\n{sanitize_text(attachment)}"
    return content


def build_chat_request(params: InvocationParameters, attachment: Optional[str] = None) -> ChatRequest:
    try:
        return ChatRequest(
            model=params.model,
            reasoning_effort=params.reasoning_effort,
            messages=[ChatMessage(content=message_content(params.prompt, attachment))],
        )
    except ValidationError as e:
        raise InvalidRequestError(f"Could not build request: {e}") from None


def serialize_request(request: ChatRequest) -> bytes:
    """
    Serialize ``request`` to JSON bytes and check the result parses back.

    Raises InvalidRequestError on any failure, before anything is sent.
    """
    try:
        body = request.model_dump_json(exclude_none=True).encode("utf-8")
    except (PydanticSerializationError, UnicodeEncodeError) as e:
        raise InvalidRequestError(f"Request body could not be serialized: {e}") from None

    try:
        ChatRequest.model_validate(json.loads(body))
    except (ValueError, ValidationError) as e:
        raise InvalidRequestError(f"Request body is not valid JSON: {e}") from None
    return body
