"""Shared domain error messages and error types."""

from typing import Iterable, Optional

from rentaltax.domain.entities import ValidationIssue


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic.

    Carries the individual field issues when raised by the validation gate.
    """

    def __init__(self, message: str, issues: Optional[Iterable[ValidationIssue]] = None):
        super().__init__(message)
        self.issues: tuple[ValidationIssue, ...] = tuple(issues or ())


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def scenario_not_found(scenario_id: str) -> str:
    """Return message for missing scenario by ID."""
    return f"Scenario {scenario_id} not found"


def scenario_name_not_found(name: str) -> str:
    """Return message for missing scenario by name."""
    return f"Scenario '{name}' not found"


def scenario_name_required() -> str:
    """Return message for a blank scenario name."""
    return "Scenario name cannot be empty"


def invalid_inputs(issues: Iterable[ValidationIssue]) -> str:
    """Return message summarising validation failures."""
    issues = list(issues)
    count = len(issues)
    lines = [f"{issue.field}: {issue.message}" for issue in issues]
    return (
        f"Inputs failed validation with {count} error{'s' if count != 1 else ''}: "
        + "; ".join(lines)
    )
