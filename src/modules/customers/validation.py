"""Field-level validation of candidate customers.

Two kinds of failure are distinguished because callers must tell
"you sent garbage" apart from "you sent a well-formed but logically
invalid request":

- ``MALFORMED``: a required name is missing or blank.
- ``UNPROCESSABLE``: the date of birth lies in the future.

``validate_customer`` never raises; it returns every failed constraint so
the service can report them all at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import TYPE_CHECKING, List, Optional, Tuple

from django.utils import timezone

if TYPE_CHECKING:
    from modules.customers.dtos import CustomerInputDTO


class ViolationKind(StrEnum):
    MALFORMED = "malformed"
    UNPROCESSABLE = "unprocessable"


@dataclass(frozen=True)
class Violation:
    field: str
    message: str
    kind: ViolationKind

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    violations: Tuple[Violation, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def kind(self) -> Optional[ViolationKind]:
        """Overall classification of the failure.

        A semantic violation wins over a structural one: once a request
        can be checked against the calendar it is treated as well-formed.
        """
        if not self.violations:
            return None
        if any(v.kind is ViolationKind.UNPROCESSABLE for v in self.violations):
            return ViolationKind.UNPROCESSABLE
        return ViolationKind.MALFORMED

    def messages(self) -> List[str]:
        return [str(v) for v in self.violations]


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_customer(
    candidate: CustomerInputDTO, today: Optional[date] = None
) -> ValidationResult:
    """Check *candidate* against the customer field constraints."""
    today = today or timezone.localdate()
    violations: List[Violation] = []

    for field in ("first_name", "last_name"):
        if _is_blank(getattr(candidate, field)):
            violations.append(
                Violation(field, "must not be blank", ViolationKind.MALFORMED)
            )

    if candidate.date_of_birth is not None and candidate.date_of_birth > today:
        violations.append(
            Violation(
                "date_of_birth",
                "must not be in the future",
                ViolationKind.UNPROCESSABLE,
            )
        )

    return ValidationResult(tuple(violations))
