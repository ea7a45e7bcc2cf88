"""Helpers shared by the preprint feed adapters."""

from collections.abc import Mapping
from typing import Any

from preprint_recommender.domain.entities import normalize_whitespace


def as_list(value: Any) -> list[Any]:
    """Coerce a field that may hold one item, many items or nothing.

    Feeds collapse single-element collections into a bare mapping, so a lone
    author arrives as a dict where several arrive as a list.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, Mapping | str):
        return [value]
    return list(value)


__all__ = ["as_list", "normalize_whitespace"]
