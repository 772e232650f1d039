"""Errors raised by the chat completion client."""

from homerepair.exceptions import ExternalServiceError


class OpenAIError(ExternalServiceError):
    """A call to the completion backend (OpenAI or Azure OpenAI) failed."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message, service="openai", original_error=original_error)


class OpenAIAuthenticationError(OpenAIError):
    """The SDK client could not be built, e.g. a missing or malformed key."""


class OpenAIContentGenerationError(OpenAIError):
    """``chat.completions.create`` failed or timed out."""
