"""Shared utilities for the preprint recommender."""

from .logger import configure_logging, get_logger
from .timezone import ensure_aware, local_midnight, now_local

__all__ = [
    "configure_logging",
    "get_logger",
    "ensure_aware",
    "local_midnight",
    "now_local",
]
