"""Unit tests for feed normalization helpers."""

import pytest

from preprint_recommender.infrastructure.sources import as_list, normalize_whitespace


class TestAsList:
    """Test cases for as_list."""

    def test_single_mapping_is_wrapped(self):
        assert as_list({"name": "Ada"}) == [{"name": "Ada"}]

    def test_none_is_empty(self):
        assert as_list(None) == []

    def test_list_is_unchanged(self):
        authors = [{"name": "Ada"}, {"name": "Alan"}]
        assert as_list(authors) is authors

    def test_single_string_is_wrapped(self):
        assert as_list("Ada") == ["Ada"]

    def test_tuple_becomes_list(self):
        assert as_list(("a", "b")) == ["a", "b"]


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Title\nwith newline", "Title with newline"),
        ("  padded  ", "padded"),
        ("tabs\tand   spaces", "tabs and spaces"),
    ],
)
def test_normalize_whitespace(raw, expected):
    assert normalize_whitespace(raw) == expected
