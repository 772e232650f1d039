"""Async client for the Image Analysis 4.0 REST API."""

from typing import Any

import httpx

from homerepair.ai.vision.config import VisionSettings, get_vision_settings
from homerepair.exceptions import ExternalServiceError
from homerepair.utils.logger import logger

ANALYZE_PATH = "/computervision/imageanalysis:analyze"


class VisionError(ExternalServiceError):
    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message, service="vision", original_error=original_error)


class VisionClient:
    """Async client for image analysis by URL.

    A failed analysis is reported once; there is no retry with other features.
    """

    def __init__(
        self,
        settings: VisionSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def settings(self) -> VisionSettings:
        if self._settings is None:
            self._settings = get_vision_settings()
        return self._settings

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.endpoint.rstrip("/"),
                headers={
                    "Ocp-Apim-Subscription-Key": self.settings.api_key,
                    "Content-Type": "application/json",
                },
                timeout=self.settings.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def analyze(self, image_url: str, features: list[str]) -> dict[str, Any]:
        """
        Analyze an image reachable at ``image_url``.

        Args:
            image_url: Public or presigned URL of the image
            features: Visual features, e.g. ["Tags", "Objects"]

        Returns:
            dict: The raw analysis result

        Raises:
            VisionError: If the request fails or the service rejects it
        """
        client = await self._ensure_client()
        params = {
            "api-version": self.settings.api_version,
            "features": ",".join(features),
            "language": "en",
            "model-version": "latest",
            "gender-neutral-caption": "true",
        }
        try:
            response = await client.post(ANALYZE_PATH, params=params, json={"url": image_url})
        except httpx.RequestError as e:
            logger.error("Image analysis request failed", error=str(e))
            raise VisionError(f"Request error: {e}", e) from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error:
            error = body.get("error", {}) if isinstance(body, dict) else {}
            code = error.get("code") or "AnalyzeFailed"
            message = error.get("message") or f"HTTP {response.status_code}"
            logger.error(
                "Image analysis rejected",
                status_code=response.status_code,
                error_code=code,
                error=message,
                features=features,
            )
            raise VisionError(f"{code}: {message}")

        if not isinstance(body, dict):
            raise VisionError("Invalid response format")
        return body
