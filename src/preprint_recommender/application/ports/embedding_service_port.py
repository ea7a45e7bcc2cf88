"""
Port interface for embedding service.

This module defines the abstract interface for text embedding services,
following the hexagonal architecture pattern.
"""

from abc import ABC, abstractmethod


class EmbeddingServicePort(ABC):
    """Abstract interface for text embedding services.

    Implementations must classify failures at the boundary: quota
    exhaustion or throttling is raised as ``RateLimitedError``, anything
    else as ``EmbeddingServiceError``.
    """

    @abstractmethod
    async def embed_text(self, text: str) -> list[float]:
        """Generate the embedding for a single text with one backend call.

        Args:
            text: Text string to embed.

        Returns:
            Embedding vector.

        Raises:
            RateLimitedError: If the backend throttled the request.
            EmbeddingServiceError: If embedding generation failed otherwise.
        """
        pass

    @abstractmethod
    def get_embedding_dimension(self) -> int:
        """Get the dimension of embeddings produced by this service."""
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """Get the name of the embedding model."""
        pass
