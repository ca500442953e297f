# app/clients/ai_client.py

from base64 import b64encode
from logging import getLogger
from typing import Any

from google.genai import Client
from google.genai.client import AsyncClient
from google.genai.errors import APIError
from google.genai.types import (
    GenerateContentConfig,
    GenerateContentResponse,
    GoogleMaps,
    GoogleSearch,
    HttpOptions,
    Schema,
    Tool,
)
from httpx import RemoteProtocolError, TimeoutException
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from app.configs.settings import settings
from app.errors import (
    AiAuthenticationError,
    AiEmptyResponseError,
    AiError,
    AiNetworkError,
    AiQuotaExceededError,
    AiUnavailableError,
)
from app.services.normalizer import parse_json
from app.services.quota import is_quota_exceeded
from app.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))

# Network-related exceptions that should be caught and converted
NETWORK_EXCEPTIONS = (
    RemoteProtocolError,
    TimeoutException,
    ConnectionError,
    TimeoutError,
    OSError,
)

GROUNDING_TOOLS = [Tool(google_maps=GoogleMaps()), Tool(google_search=GoogleSearch())]
DEFAULT_IMAGE_MIME = "image/png"


class AiClient:
    """
    Async adapter over Google's Gemini API.

    Every provider failure leaves this class as one of the typed
    ``AiError`` subclasses, so callers never inspect SDK exception shapes.

    Attributes:
        client: The Google GenAI AsyncClient instance, or ``None`` when no
            API key is configured.
    """

    def __init__(
        self,
        api_key: str | None = None,
        text_model: str | None = None,
        image_model: str | None = None,
    ) -> None:
        """Initialize the AI client with API credentials."""
        self._api_key = api_key or settings.GEMINI_API_KEY
        self._text_model = text_model or settings.GEMINI_TEXT_MODEL
        self._image_model = image_model or settings.GEMINI_IMAGE_MODEL
        self._client: AsyncClient | None = None

        if not self._api_key:
            logger.warning("GEMINI_API_KEY is not set, AI generation is disabled")
            return

        try:
            self._client = Client(
                api_key=self._api_key,
                http_options=HttpOptions(timeout=settings.AI_REQUEST_TIMEOUT * 1000),
            ).aio
        except Exception:
            logger.exception(
                "Failed to initialize Gemini client, missing or invalid API key?",
            )
            self._client = None
        else:
            logger.info(f"AIClient initialized with model: {self._text_model}")

    @property
    def client(self) -> AsyncClient | None:
        """Get the AI client instance."""
        return self._client

    @client.setter
    def client(self, value: AsyncClient | None) -> None:
        self._client = value

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def _generate(
        self,
        model: str,
        contents: str,
        config: GenerateContentConfig | None = None,
    ) -> GenerateContentResponse:
        if self._client is None:
            raise AiUnavailableError

        try:
            return await self._client.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )
        except AiError:
            raise
        except NETWORK_EXCEPTIONS as e:
            logger.exception(f"AI network error: {e}")
            detail = f"AI service temporarily unavailable: {e}"
            raise AiNetworkError(detail=detail) from e
        except Exception as e:
            raise self._translate(e) from e

    async def generate_text(self, prompt: str, *, grounded: bool = False) -> str:
        """
        Generate free text, optionally grounded with Google Maps and Search.

        Raises:
            AiEmptyResponseError: If the model returned no text.
            AiError: For any provider failure (typed subclass).
        """
        config = GenerateContentConfig(tools=GROUNDING_TOOLS) if grounded else None
        response = await self._generate(self._text_model, prompt, config)

        if not response or not response.text:
            raise AiEmptyResponseError
        return response.text

    async def generate_json(self, prompt: str, schema: Schema | dict[str, Any]) -> Any:
        """
        Generate schema-constrained JSON and decode it.

        Raises:
            AiEmptyResponseError: If the model returned no text.
            AiParseError: If the returned text is not valid JSON.
        """
        config = GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=schema,
        )
        response = await self._generate(self._text_model, prompt, config)

        if not response or not response.text:
            raise AiEmptyResponseError(detail="No structured data returned")
        return parse_json(response.text)

    async def generate_image(self, prompt: str) -> str | None:
        """
        Generate one image and return it as a data URI.

        Returns:
            The image as ``data:<mime>;base64,...``, or ``None`` when the
            response carries no inline image part.
        """
        response = await self._generate(self._image_model, prompt)

        candidates = getattr(response, "candidates", None) or []
        if not candidates or not candidates[0].content:
            return None

        for part in candidates[0].content.parts or []:
            inline = getattr(part, "inline_data", None)
            if inline is None or not inline.data:
                continue
            data = inline.data
            encoded = data if isinstance(data, str) else b64encode(data).decode("ascii")
            return f"data:{inline.mime_type or DEFAULT_IMAGE_MIME};base64,{encoded}"
        return None

    def _translate(self, e: Exception) -> AiError:
        """Map a provider exception onto the typed AI error hierarchy."""
        error_msg = str(e)

        if is_quota_exceeded(e):
            logger.warning(f"AI quota exceeded: {error_msg}")
            return AiQuotaExceededError(detail=f"Quota exceeded: {error_msg}")

        code = e.code if isinstance(e, APIError) else None
        if code in (HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN) or (
            "unauthenticated" in error_msg.lower() or "api key not valid" in error_msg.lower()
        ):
            logger.error(f"AI authentication failed: {error_msg}")
            return AiAuthenticationError(detail=f"Authentication failed: {error_msg}")

        if "connection" in error_msg.lower():
            return AiNetworkError(detail=f"Network error: {error_msg}")

        logger.error(f"AI Error: {error_msg}")
        return AiError(detail=f"An unexpected error occurred: {error_msg}")

    async def close(self) -> None:
        if self._client is None:
            return
        try:
            logger.info("Closing AI client")
            await self._client.aclose()
        except Exception:
            logger.exception("Failed to close AI client")
        else:
            logger.info("AI client closed successfully")
