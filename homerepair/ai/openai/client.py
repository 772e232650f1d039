"""Chat completion client for OpenAI or Azure OpenAI."""

import httpx
import openai
from openai import AsyncAzureOpenAI, AsyncOpenAI

from homerepair.ai.openai.config import OpenAISettings, get_openai_settings
from homerepair.ai.openai.exceptions import (
    OpenAIAuthenticationError,
    OpenAIContentGenerationError,
)
from homerepair.utils.logger import logger


class OpenAIChatClient:
    """Thin wrapper over ``chat.completions.create``.

    One client per process; the underlying HTTP pool is shared by every
    request. Calls are never retried.
    """

    def __init__(self, settings: OpenAISettings | None = None):
        self._settings = settings
        self._client: AsyncOpenAI | None = None

    @property
    def settings(self) -> OpenAISettings:
        # Resolved on first use; missing credentials only fail chat calls
        if self._settings is None:
            self._settings = get_openai_settings()
        return self._settings

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the SDK client."""
        if self._client is None:
            timeout = httpx.Timeout(timeout=self.settings.request_timeout, connect=10.0)
            try:
                if self.settings.azure_endpoint:
                    self._client = AsyncAzureOpenAI(
                        api_key=self.settings.api_key,
                        azure_endpoint=self.settings.azure_endpoint.rstrip("/"),
                        api_version=self.settings.api_version,
                        timeout=timeout,
                        max_retries=0,
                    )
                else:
                    self._client = AsyncOpenAI(
                        api_key=self.settings.api_key,
                        timeout=timeout,
                        max_retries=0,
                    )
            except openai.OpenAIError as e:
                logger.error("[OPENAI] Failed to initialize client", error=str(e))
                raise OpenAIAuthenticationError(
                    f"Failed to initialize OpenAI client: {e}", e
                ) from e
            logger.info(
                "[OPENAI] Client initialized",
                azure=bool(self.settings.azure_endpoint),
                model=self.settings.model_name,
                timeout_seconds=self.settings.request_timeout,
            )
        return self._client

    async def complete(self, messages: list[dict[str, str]]) -> str:
        """
        Run one chat completion.

        Args:
            messages: ``{"role", "content"}`` dicts, system prompt first

        Returns:
            str: The assistant reply ('' if the model returned no content)

        Raises:
            OpenAIContentGenerationError: If the API call fails
        """
        client = self._get_client()
        try:
            completion = await client.chat.completions.create(
                model=self.settings.model_name,
                messages=messages,
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                top_p=1.0,
                presence_penalty=0.0,
                frequency_penalty=0.1,
            )
        except openai.OpenAIError as e:
            logger.error(
                "[OPENAI] Chat completion failed",
                model=self.settings.model_name,
                error=str(e),
            )
            raise OpenAIContentGenerationError(f"Chat completion failed: {e}", e) from e

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""
