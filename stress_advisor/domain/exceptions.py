"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ExplanationServiceError(DomainException):
    """Text-generation service errored, timed out, or is unavailable"""

    pass


class InvalidExplanationError(DomainException):
    """Text-generation output is not a well-typed explanation object"""

    pass
