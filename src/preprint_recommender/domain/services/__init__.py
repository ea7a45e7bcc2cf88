"""Domain services for the preprint recommender.

This module exports domain services that implement core business logic.
"""

from preprint_recommender.domain.services.date_window import compute_date_window
from preprint_recommender.domain.services.similarity_matcher import (
    ClosestSeed,
    SimilarityMatcher,
    closest_seed,
    cosine_similarity,
    rescale_similarity,
    similarity_threshold,
)

__all__ = [
    "compute_date_window",
    "ClosestSeed",
    "SimilarityMatcher",
    "closest_seed",
    "cosine_similarity",
    "rescale_similarity",
    "similarity_threshold",
]
