"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from typing import Iterable, Tuple

from modules.customers.validation import Violation


class CustomerValidationError(Exception):
    """Base for candidate customers that failed field validation."""

    def __init__(self, violations: Iterable[Violation]) -> None:
        self.violations: Tuple[Violation, ...] = tuple(violations)
        super().__init__("; ".join(str(v) for v in self.violations))


class InvalidCustomer(CustomerValidationError):
    """A required field is missing or blank (malformed request)."""


class UnprocessableCustomer(CustomerValidationError):
    """The request is well-formed but logically invalid (e.g. future birth date)."""


class CustomerAlreadyExists(Exception):
    """A customer with the same first and last name already exists."""


class CustomerNotFound(Exception):
    """The requested customer does not exist."""
