"""Factory functions for creating application components with proper dependencies.

This module wires the recommendation use case to the concrete feed,
embedding and seed adapters described by the settings.
"""

from preprint_recommender.application.ports import PreprintSourcePort
from preprint_recommender.application.use_cases import (
    EmbedDocumentsUseCase,
    RecommendPreprintsUseCase,
)
from preprint_recommender.infrastructure.embeddings import (
    GeminiEmbeddingAdapter,
    GeminiEmbeddingConfig,
)
from preprint_recommender.infrastructure.seeds import SeedFolderLoader
from preprint_recommender.infrastructure.sources import (
    ArxivSourceAdapter,
    BiorxivSourceAdapter,
)
from preprint_recommender.shared.config.settings import Settings, get_settings


def create_sources(settings: Settings) -> dict[str, PreprintSourcePort]:
    """Create the feed adapters keyed by source name."""
    return {
        "arxiv": ArxivSourceAdapter(
            base_url=settings.sources.arxiv_base_url,
            pace_seconds=settings.sources.arxiv_pace_seconds,
            timeout=settings.sources.http_timeout,
        ),
        "biorxiv": BiorxivSourceAdapter(
            base_url=settings.sources.biorxiv_base_url,
            pace_seconds=settings.sources.biorxiv_pace_seconds,
            timeout=settings.sources.http_timeout,
        ),
    }


def create_embed_use_case(settings: Settings) -> EmbedDocumentsUseCase:
    """Create the embedding use case backed by Gemini.

    Raises:
        ConfigurationError: If no GenAI API key is configured
    """
    adapter = GeminiEmbeddingAdapter(
        GeminiEmbeddingConfig.from_settings(settings.embedding)
    )
    return EmbedDocumentsUseCase(
        adapter,
        max_retries=settings.embedding.embedding_max_retries,
        cooldown_seconds=settings.embedding.embedding_cooldown_seconds,
    )


def create_recommend_use_case(
    settings: Settings | None = None,
) -> RecommendPreprintsUseCase:
    """Create a fully wired recommendation use case.

    Args:
        settings: Settings to use, the cached application settings if omitted

    Returns:
        RecommendPreprintsUseCase ready for use
    """
    settings = settings or get_settings()
    return RecommendPreprintsUseCase(
        sources=create_sources(settings),
        seed_loader=SeedFolderLoader(
            embedding_dimension=settings.embedding.embedding_dimension
        ),
        embedder=create_embed_use_case(settings),
    )
