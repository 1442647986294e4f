class AskError(Exception):
    """Base exception for ask-xai-grok errors"""


class MissingCredentialError(AskError):
    """Raised when XAI_API_KEY is not available"""


class MissingFileError(AskError):
    """Raised when a prompt or attached file does not exist"""


class InvalidArgumentError(AskError):
    """Raised for unknown options or bad option values"""


class EmptyPromptError(AskError):
    """Raised when no prompt text was given by any source"""


class InvalidRequestError(AskError):
    """Raised when the request body is not valid JSON"""


class TransportError(AskError):
    """Raised when the HTTP call itself fails"""


class InvalidResponseError(AskError):
    """Raised when the API returns something that is not JSON"""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


class NoContentError(AskError):
    """Raised when the response has no (or a null) message content"""


class EmptyResponseError(AskError):
    """Raised when the response content is an empty string"""
