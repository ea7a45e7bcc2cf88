"""Similarity matcher and adaptive threshold engine.

This module implements the core recommendation algorithm: every candidate
is assigned its nearest seed by cosine similarity, and only candidates that
are at least as close to a seed as seeds typically are to each other are
kept.

The acceptance threshold is the 90th-percentile pairwise seed-to-seed
similarity, recomputed for every run. Kept candidates are rescaled with:
RescaledSimilarity = (RawSimilarity - Threshold) / (1 - Threshold) * 100
"""

import math
from collections.abc import Sequence
from typing import NamedTuple

import numpy as np

from preprint_recommender.domain.entities import Preprint, SeedPaper
from preprint_recommender.domain.value_objects import MatchResult, SeedMatchGroup
from preprint_recommender.shared.exceptions import NotEnoughSeedsError
from preprint_recommender.shared.utils.logger import get_logger

logger = get_logger(__name__)

THRESHOLD_PERCENTILE = 0.9


class ClosestSeed(NamedTuple):
    """Nearest seed of a candidate with its cosine similarity."""

    seed: SeedPaper
    similarity: float


def cosine_similarity(v1: Sequence[float], v2: Sequence[float]) -> float:
    """Compute cosine similarity between two vectors.

    Returns 0.0 when either vector has zero magnitude.

    Raises:
        ValueError: If the vectors have different dimensions
    """
    v1_arr = np.asarray(v1, dtype=np.float64)
    v2_arr = np.asarray(v2, dtype=np.float64)
    if v1_arr.shape != v2_arr.shape:
        raise ValueError(
            f"Embedding dimensions differ: {v1_arr.shape[0]} vs {v2_arr.shape[0]}"
        )
    norm_product = np.linalg.norm(v1_arr) * np.linalg.norm(v2_arr)
    if norm_product == 0:
        return 0.0
    return float(np.dot(v1_arr, v2_arr) / norm_product)


def closest_seed(
    candidate: Preprint, seeds: Sequence[SeedPaper]
) -> ClosestSeed | None:
    """Find the seed paper most similar to a candidate.

    Seeds without an embedding are skipped. On exact ties the first seed
    seen wins.

    Args:
        candidate: Preprint to find a match for
        seeds: Seed papers to compare against

    Returns:
        The closest seed and its similarity, or None if the candidate has no
        embedding or no seed has one.
    """
    if candidate.embedding is None:
        logger.warning(
            "candidate_without_embedding",
            title=candidate.title,
            identity=candidate.identity,
        )
        return None

    best: ClosestSeed | None = None
    for seed in seeds:
        if seed.embedding is None:
            continue
        similarity = cosine_similarity(candidate.embedding, seed.embedding)
        if best is None or similarity > best.similarity:
            best = ClosestSeed(seed=seed, similarity=similarity)

    if best is None:
        logger.warning("no_embedded_seeds", candidate=candidate.identity)
    return best


def similarity_threshold(seeds: Sequence[SeedPaper]) -> float:
    """Compute the acceptance threshold from seed-to-seed similarities.

    Args:
        seeds: Seed papers; only those with an embedding take part

    Returns:
        The 90th-percentile pairwise cosine similarity between seeds.

    Raises:
        NotEnoughSeedsError: If fewer than two seeds have an embedding
    """
    embedded = [seed.embedding for seed in seeds if seed.embedding is not None]

    similarities = [
        cosine_similarity(embedded[i], embedded[j])
        for i in range(len(embedded))
        for j in range(i + 1, len(embedded))
    ]
    if not similarities:
        raise NotEnoughSeedsError(embedded_seeds=len(embedded))

    similarities.sort()
    index = math.floor(len(similarities) * THRESHOLD_PERCENTILE)
    return similarities[index]


def rescale_similarity(raw_similarity: float, threshold: float) -> float:
    """Express how far above the threshold a similarity lies, on 0-100.

    A similarity equal to the threshold maps to 0, a perfect similarity of
    1.0 maps to 100. A threshold of 1.0 (identical seeds) leaves no room to
    scale, so anything clearing it maps to 100.

    Raises:
        ValueError: If the similarity is below the threshold
    """
    if raw_similarity < threshold:
        raise ValueError(
            f"Similarity {raw_similarity:.4f} is below threshold {threshold:.4f}"
        )
    if threshold >= 1.0:
        return 100.0
    return (raw_similarity - threshold) / (1.0 - threshold) * 100.0


class SimilarityMatcher:
    """Domain service turning embedded candidates into grouped matches."""

    def match(
        self,
        candidates: Sequence[Preprint],
        seeds: Sequence[SeedPaper],
        threshold: float,
    ) -> list[SeedMatchGroup]:
        """Match candidates to their nearest seed and keep those above threshold.

        Candidates below the threshold or without a scorable seed are left
        out silently.

        Args:
            candidates: Embedded preprints
            seeds: Embedded seed papers
            threshold: Minimum raw similarity to accept

        Returns:
            Groups keyed by seed identity in order of first match, each
            sorted by rescaled similarity (descending).
        """
        groups: dict[int, tuple[SeedPaper, list[MatchResult]]] = {}

        for candidate in candidates:
            result = closest_seed(candidate, seeds)
            if result is None or result.similarity < threshold:
                continue

            match = MatchResult(
                candidate=candidate,
                matched_seed=result.seed,
                raw_similarity=result.similarity,
                rescaled_similarity=rescale_similarity(result.similarity, threshold),
            )
            groups.setdefault(id(result.seed), (result.seed, []))[1].append(match)

        return [
            SeedMatchGroup(
                seed=seed,
                matches=sorted(
                    matches, key=lambda m: m.rescaled_similarity, reverse=True
                ),
            )
            for seed, matches in groups.values()
        ]
