"""Shared fixtures for the preprint recommender test suite."""

from datetime import datetime, timezone

import pytest

from preprint_recommender.domain.entities import Preprint, PreprintSource, SeedPaper


@pytest.fixture
def make_preprint():
    """Factory for preprints with sensible defaults."""

    def _make(
        identity: str = "http://arxiv.org/abs/2401.00001v1",
        title: str = "A preprint",
        abstract: str = "An abstract.",
        embedding=None,
        published: datetime | None = None,
        **kwargs,
    ) -> Preprint:
        return Preprint(
            identity=identity,
            title=title,
            abstract=abstract,
            embedding=embedding,
            published=published or datetime(2024, 1, 1, 12, tzinfo=timezone.utc),
            source=kwargs.pop("source", PreprintSource.ARXIV),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_seed():
    """Factory for seed papers with sensible defaults."""

    def _make(
        title: str = "A seed paper",
        abstract: str = "Seed abstract.",
        embedding=None,
        **kwargs,
    ) -> SeedPaper:
        return SeedPaper(title=title, abstract=abstract, embedding=embedding, **kwargs)

    return _make
