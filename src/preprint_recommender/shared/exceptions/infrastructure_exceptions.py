"""Infrastructure-specific exceptions for the preprint recommender."""


class InfrastructureException(Exception):  # noqa: N818
    """Base exception for all infrastructure-related errors."""

    pass


class ExternalServiceError(InfrastructureException):
    """Raised when an external service call fails."""

    pass


class SourceFetchError(ExternalServiceError):
    """Raised when a preprint feed cannot be fetched or parsed."""

    def __init__(self, source: str, category: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {source} category '{category}': {reason}")
        self.source = source
        self.category = category
        self.reason = reason


class EmbeddingServiceError(ExternalServiceError):
    """Raised when the embedding backend fails in a way retrying won't fix."""

    pass


class RateLimitedError(EmbeddingServiceError):
    """Raised when the embedding backend reports quota exhaustion or HTTP 429."""

    pass


class EmbeddingRetriesExhaustedError(ExternalServiceError):
    """Raised when every embedding attempt for a document was rate limited."""

    def __init__(self, title: str, attempts: int) -> None:
        super().__init__(
            f"Embedding for '{title}' still rate limited after {attempts} attempts"
        )
        self.title = title
        self.attempts = attempts


class ConfigurationError(InfrastructureException):
    """Raised when there's a configuration issue."""

    pass


class SeedFolderError(ConfigurationError):
    """Raised when the seed folder is missing or is not a directory."""

    pass
