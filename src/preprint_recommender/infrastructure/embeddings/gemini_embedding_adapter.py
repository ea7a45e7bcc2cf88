"""
Gemini embedding adapter implementation.

This module provides the concrete implementation of EmbeddingServicePort
on top of the Google GenAI SDK. It makes exactly one backend call per
``embed_text`` and classifies failures; retrying is left to the caller.
"""

from google import genai
from google.genai import errors, types
from pydantic import BaseModel, ConfigDict

from preprint_recommender.application.ports.embedding_service_port import (
    EmbeddingServicePort,
)
from preprint_recommender.shared.config.settings import EmbeddingSettings
from preprint_recommender.shared.exceptions import (
    ConfigurationError,
    EmbeddingServiceError,
    RateLimitedError,
)
from preprint_recommender.shared.utils.logger import get_logger

logger = get_logger(__name__)

RATE_LIMIT_STATUS = "RESOURCE_EXHAUSTED"
RATE_LIMIT_MARKERS = ("quota", "rate limit", "rate-limit", "too many requests")


class GeminiEmbeddingConfig(BaseModel):
    """Configuration for the Gemini embedding service."""

    model_config = ConfigDict(extra="forbid")

    api_key: str
    model_name: str
    embedding_dimension: int
    task_type: str

    @classmethod
    def from_settings(cls, settings: EmbeddingSettings) -> "GeminiEmbeddingConfig":
        """Create config from settings object."""
        return cls(
            api_key=settings.genai_api_key.get_secret_value(),
            model_name=settings.embedding_model_name,
            embedding_dimension=settings.embedding_dimension,
            task_type=settings.embedding_task_type,
        )


def is_rate_limit_error(error: errors.APIError) -> bool:
    """Tell whether an API error signals throttling or quota exhaustion."""
    if error.code == 429 or error.status == RATE_LIMIT_STATUS:
        return True
    message = (error.message or str(error)).lower()
    return any(marker in message for marker in RATE_LIMIT_MARKERS)


class GeminiEmbeddingAdapter(EmbeddingServicePort):
    """Adapter for Gemini embedding models.

    This adapter implements the EmbeddingServicePort interface using the
    asynchronous client of the google-genai SDK.
    """

    def __init__(
        self, config: GeminiEmbeddingConfig, client: genai.Client | None = None
    ) -> None:
        """Initialize the Gemini embedding adapter.

        Args:
            config: Configuration for the adapter
            client: Optional pre-built GenAI client

        Raises:
            ConfigurationError: If no API key is configured
        """
        if not config.api_key.strip():
            raise ConfigurationError(
                "GENAI_API_KEY is not set; an API key is required for embeddings"
            )
        self.config = config
        self._client = client or genai.Client(api_key=config.api_key)

    async def embed_text(self, text: str) -> list[float]:
        """Generate the embedding for a single text.

        Raises:
            RateLimitedError: If the backend throttled the request
            EmbeddingServiceError: On any other failure or a wrong dimension
        """
        try:
            response = await self._client.aio.models.embed_content(
                model=self.config.model_name,
                contents=[text],
                config=types.EmbedContentConfig(
                    output_dimensionality=self.config.embedding_dimension,
                    task_type=self.config.task_type,
                ),
            )
        except errors.APIError as e:
            if is_rate_limit_error(e):
                raise RateLimitedError(f"Gemini rate limit hit: {e}") from e
            logger.error(
                "gemini_embedding_failed", code=e.code, status=e.status, error=str(e)
            )
            raise EmbeddingServiceError(f"Gemini embedding failed: {e}") from e
        except Exception as e:
            logger.error("gemini_embedding_failed", error=str(e))
            raise EmbeddingServiceError(f"Gemini embedding failed: {e}") from e

        if not response.embeddings or response.embeddings[0].values is None:
            raise EmbeddingServiceError("Gemini returned no embedding")

        vector = list(response.embeddings[0].values)
        if len(vector) != self.config.embedding_dimension:
            raise EmbeddingServiceError(
                f"Expected embedding dimension {self.config.embedding_dimension}, "
                f"got {len(vector)}"
            )
        return vector

    def get_embedding_dimension(self) -> int:
        return self.config.embedding_dimension

    def get_model_name(self) -> str:
        return self.config.model_name
