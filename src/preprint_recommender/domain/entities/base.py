"""Common behaviour of documents that can be embedded and compared."""

from collections.abc import Sequence
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from preprint_recommender.shared.exceptions import InvalidStateError


def normalize_whitespace(value: str) -> str:
    """Collapse newlines and runs of whitespace into single spaces."""
    return " ".join(value.split())


class EmbeddableDocument(BaseModel):
    """A titled document carrying an optional embedding vector.

    Instances are immutable. The embedding is assigned exactly once through
    :meth:`with_embedding`, which returns a new document.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Title, whitespace normalized")
    abstract: str = Field(..., description="Abstract, whitespace normalized")
    embedding: tuple[float, ...] | None = Field(
        None, description="Embedding vector, absent until generated"
    )

    @field_validator("title", "abstract")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Normalize whitespace and reject empty text."""
        v = normalize_whitespace(v)
        if not v:
            raise ValueError("must not be empty")
        return v

    @property
    def embedding_text(self) -> str:
        """Text sent to the embedding backend: title, blank line, abstract."""
        return f"{self.title}\n\n{self.abstract}"

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None

    def with_embedding(self, vector: Sequence[float]) -> Self:
        """Return a copy of this document carrying ``vector``.

        Raises:
            InvalidStateError: If the document already has an embedding.
        """
        if self.embedding is not None:
            raise InvalidStateError(f"Document '{self.title}' is already embedded")
        return self.model_copy(update={"embedding": tuple(float(x) for x in vector)})
