"""Shared domain error messages and error types."""

from datetime import date


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class InvalidInputError(DomainError):
    """A required field is missing, non-numeric or out of range."""


class MissingDenominatorError(DomainError):
    """Fixed costs were entered without a monthly distance to spread them over."""


class NoInputProvidedError(DomainError):
    """Cost derivation was attempted with every section empty."""


class CapacityExceededError(DomainError):
    """The free record limit was reached."""


class NotFoundError(DomainError):
    """Requested record does not exist."""


class InsufficientDataError(DomainError):
    """Not enough records to perform the requested operation."""


class FeatureLockedError(DomainError):
    """The requested feature needs the premium entitlement."""


class ServiceError(DomainError):
    """An external service (text generation) failed."""


def record_not_found(record_id: str) -> str:
    """Return message for missing record."""
    return f"Record '{record_id}' not found"


def invalid_number(field_name: str, value: object) -> str:
    """Return message for a field that is not a number."""
    return f"{field_name} must be a number, got '{value}'"


def must_be_positive(field_name: str) -> str:
    """Return message for a field that must be greater than zero."""
    return f"{field_name} must be greater than zero"


def must_not_be_negative(field_name: str) -> str:
    """Return message for a field that must not be negative."""
    return f"{field_name} must not be negative"


def capacity_exceeded(limit: int) -> str:
    """Return message when the free record limit is reached."""
    return (
        f"You have reached the limit of {limit} records. "
        "Delete an old record or activate premium for unlimited records."
    )


def date_conflict(conflict_date: date) -> str:
    """Return message when a record already exists for a date."""
    return (
        f"A record already exists for {conflict_date.isoformat()}. "
        "It will be replaced when you save."
    )


def feature_locked(feature: str) -> str:
    """Return message for a premium-only feature."""
    return f"{feature} is a premium feature. Run 'drivetally premium activate' to unlock it."
