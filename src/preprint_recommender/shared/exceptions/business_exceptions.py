"""Business-specific exceptions for the preprint recommender."""


class BusinessException(Exception):  # noqa: N818
    """Base exception for all business logic errors."""

    pass


class InvalidStateError(BusinessException):
    """Raised when an operation is attempted on an entity in an invalid state."""

    pass
