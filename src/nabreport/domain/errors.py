"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class InvalidRange(ValidationError):
    """Report date window is empty or inverted."""


class UnknownCategory(NotFoundError):
    """Transaction references a category missing from the category snapshot."""

    def __init__(self, category_id, transaction=None):
        super().__init__(unknown_category(category_id, transaction))
        self.category_id = category_id
        self.transaction = transaction


class ConfigError(ValidationError):
    """Configuration file is unreadable or invalid."""


class SourceError(DomainError):
    """Budget data source failed or returned unusable data."""


class InvariantViolation(RuntimeError):
    """Internal consistency check failed.

    This signals a programming error, not bad user data, so it is not a
    DomainError and the CLI lets it propagate.
    """


def invalid_range(start, end) -> str:
    """Return message for an inverted date window."""
    return f"Invalid date range: start {start} is after end {end}"


def unknown_category(category_id, transaction=None) -> str:
    """Return message for a transaction with an unknown category."""
    if transaction is None:
        return f"Unknown category '{category_id}'"
    payee = f" ({transaction.payee_name})" if transaction.payee_name else ""
    return (
        f"Transaction on {transaction.date}{payee} for {transaction.amount} "
        f"references unknown category '{category_id}'"
    )


def budget_not_found(budget_name: str) -> str:
    """Return message for a budget name that matches no budget."""
    return f"No budget found with name '{budget_name}'"
