"""Recommend recent preprints similar to a curated set of seed papers."""

__version__ = "1.0.0"
