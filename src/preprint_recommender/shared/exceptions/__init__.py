"""
Custom exceptions for the preprint recommender.

This module defines domain-specific exceptions that can be raised
throughout the application and handled consistently at the CLI layer.
"""

from typing import Any

from .business_exceptions import BusinessException, InvalidStateError
from .infrastructure_exceptions import (
    ConfigurationError,
    EmbeddingRetriesExhaustedError,
    EmbeddingServiceError,
    ExternalServiceError,
    InfrastructureException,
    RateLimitedError,
    SeedFolderError,
    SourceFetchError,
)


class PreprintRecommenderException(Exception):
    """Base exception for all preprint recommender custom exceptions."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: User-friendly error message
            error_code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class NotEnoughSeedsError(PreprintRecommenderException):
    """Raised when fewer than two seed papers carry an embedding."""

    def __init__(self, embedded_seeds: int) -> None:
        """
        Initialize NotEnoughSeedsError.

        Args:
            embedded_seeds: Number of seed papers that had an embedding
        """
        super().__init__(
            message=(
                "No pairwise similarities could be computed. Need at least two "
                f"seed papers with embeddings, got {embedded_seeds}"
            ),
            error_code="NOT_ENOUGH_EMBEDDED_SEEDS",
            details={"embedded_seeds": embedded_seeds},
        )


class InvalidRequestError(PreprintRecommenderException):
    """Raised when a recommendation run is requested with invalid parameters."""

    def __init__(self, parameter: str, reason: str) -> None:
        """
        Initialize InvalidRequestError.

        Args:
            parameter: Name of the invalid parameter
            reason: Reason why the parameter is invalid
        """
        super().__init__(
            message=f"Invalid parameter '{parameter}': {reason}",
            error_code="INVALID_REQUEST",
            details={"parameter": parameter, "reason": reason},
        )


__all__ = [
    "PreprintRecommenderException",
    "NotEnoughSeedsError",
    "InvalidRequestError",
    "BusinessException",
    "InvalidStateError",
    "InfrastructureException",
    "ExternalServiceError",
    "SourceFetchError",
    "EmbeddingServiceError",
    "RateLimitedError",
    "EmbeddingRetriesExhaustedError",
    "ConfigurationError",
    "SeedFolderError",
]
