"""Domain entities for the preprint recommender."""

from .base import EmbeddableDocument, normalize_whitespace
from .preprint import Preprint, PreprintSource
from .seed_paper import SeedPaper

__all__ = [
    "EmbeddableDocument",
    "normalize_whitespace",
    "Preprint",
    "PreprintSource",
    "SeedPaper",
]
