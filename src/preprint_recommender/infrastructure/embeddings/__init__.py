"""Embedding service adapters."""

from .gemini_embedding_adapter import GeminiEmbeddingAdapter, GeminiEmbeddingConfig

__all__ = ["GeminiEmbeddingAdapter", "GeminiEmbeddingConfig"]
