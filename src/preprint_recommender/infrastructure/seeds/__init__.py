"""Seed paper loaders."""

from .seed_loader import SeedFolderLoader

__all__ = ["SeedFolderLoader"]
