"""Unit tests for the Preprint and SeedPaper entities."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from preprint_recommender.domain.entities import (
    Preprint,
    PreprintSource,
    SeedPaper,
    normalize_whitespace,
)
from preprint_recommender.shared.exceptions import InvalidStateError


class TestNormalizeWhitespace:
    """Test cases for whitespace normalization."""

    def test_collapses_newlines_and_runs(self):
        assert normalize_whitespace("  Deep\n  learning\tfor\n\nproteins ") == (
            "Deep learning for proteins"
        )

    def test_blank_text_becomes_empty(self):
        assert normalize_whitespace(" \n\t ") == ""


class TestPreprint:
    """Test cases for the Preprint entity."""

    def test_create_normalizes_text(self, make_preprint):
        """Title and abstract are whitespace normalized."""
        paper = make_preprint(title="A\n  title", abstract=" Some\nabstract ")

        assert paper.title == "A title"
        assert paper.abstract == "Some abstract"

    def test_empty_title_rejected(self, make_preprint):
        with pytest.raises(ValidationError):
            make_preprint(title=" \n ")

    def test_empty_abstract_rejected(self, make_preprint):
        with pytest.raises(ValidationError):
            make_preprint(abstract="")

    def test_link_defaults_to_identity(self, make_preprint):
        paper = make_preprint(identity="http://arxiv.org/abs/1")
        assert paper.link == "http://arxiv.org/abs/1"

    def test_explicit_link_kept(self, make_preprint):
        paper = make_preprint(identity="id-1", link="https://example.org/1")
        assert paper.link == "https://example.org/1"

    def test_authors_stripped_and_empties_dropped(self, make_preprint):
        paper = make_preprint(authors=[" Ada Lovelace ", "", "  ", "Alan Turing"])
        assert paper.authors == ["Ada Lovelace", "Alan Turing"]

    def test_naive_published_becomes_local_aware(self):
        paper = Preprint(
            identity="id-1",
            title="T",
            abstract="A",
            published=datetime(2024, 3, 1, 9, 30),
            source=PreprintSource.BIORXIV,
        )
        assert paper.published.tzinfo is not None
        assert paper.published.replace(tzinfo=None) == datetime(2024, 3, 1, 9, 30)

    def test_embedding_text(self, make_preprint):
        paper = make_preprint(title="Title", abstract="Abstract")
        assert paper.embedding_text == "Title\n\nAbstract"

    def test_is_immutable(self, make_preprint):
        paper = make_preprint()
        with pytest.raises(ValidationError):
            paper.title = "Other"


class TestWithEmbedding:
    """Test cases for embedding assignment."""

    def test_returns_new_document(self, make_preprint):
        """The original document is left without an embedding."""
        paper = make_preprint()

        embedded = paper.with_embedding([0.1, 0.2, 0.3])

        assert embedded is not paper
        assert embedded.embedding == (0.1, 0.2, 0.3)
        assert embedded.has_embedding
        assert paper.embedding is None
        assert not paper.has_embedding
        assert embedded.identity == paper.identity

    def test_second_assignment_rejected(self, make_preprint):
        embedded = make_preprint().with_embedding([1.0, 0.0])

        with pytest.raises(InvalidStateError):
            embedded.with_embedding([0.0, 1.0])

    def test_seed_paper_keeps_type(self, make_seed):
        seed = make_seed(source_path="/seeds/a.json")

        embedded = seed.with_embedding([1.0, 0.0])

        assert isinstance(embedded, SeedPaper)
        assert embedded.source_path == "/seeds/a.json"


class TestSeedPaper:
    """Test cases for the SeedPaper entity."""

    def test_pre_supplied_embedding_is_kept(self):
        seed = SeedPaper(title="T", abstract="A", embedding=[1, 2, 3])
        assert seed.embedding == (1.0, 2.0, 3.0)

    def test_missing_abstract_rejected(self):
        with pytest.raises(ValidationError):
            SeedPaper(title="T", abstract="  ")
