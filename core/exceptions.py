# core/exceptions.py
from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., circular dependencies)."""


class CircularDependencyError(BusinessRuleError):
    """Raised by a schedule calculation when the precedence graph has a cycle.

    ``cycle`` lists task ids in traversal order; each id is a predecessor of
    the next one and the last id repeats the first.
    """

    def __init__(self, cycle: list[str]):
        self.cycle: list[str] = list(cycle)
        super().__init__(
            f"Circular dependency detected: {' -> '.join(self.cycle)}",
            code="SCHEDULE_CYCLE",
        )
