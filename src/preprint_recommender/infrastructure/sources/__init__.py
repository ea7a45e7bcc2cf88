"""Preprint feed adapters."""

from .arxiv_adapter import ArxivSourceAdapter
from .biorxiv_adapter import BiorxivSourceAdapter
from .normalization import as_list, normalize_whitespace

__all__ = [
    "ArxivSourceAdapter",
    "BiorxivSourceAdapter",
    "as_list",
    "normalize_whitespace",
]
