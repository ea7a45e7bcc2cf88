"""Application use cases for the preprint recommender."""

from .embed_documents import EmbedDocumentsUseCase
from .fetch_preprints import FetchPreprintsUseCase, deduplicate_preprints
from .recommend_preprints import (
    RecommendationReport,
    RecommendationRequest,
    RecommendPreprintsUseCase,
)

__all__ = [
    "EmbedDocumentsUseCase",
    "FetchPreprintsUseCase",
    "deduplicate_preprints",
    "RecommendationReport",
    "RecommendationRequest",
    "RecommendPreprintsUseCase",
]
