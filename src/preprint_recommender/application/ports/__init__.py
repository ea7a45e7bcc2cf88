"""Application layer ports for the preprint recommender."""

from .embedding_service_port import EmbeddingServicePort
from .preprint_source_port import PreprintSourcePort, SourcePage
from .seed_loader_port import SeedLoaderPort

__all__ = [
    "EmbeddingServicePort",
    "PreprintSourcePort",
    "SourcePage",
    "SeedLoaderPort",
]
