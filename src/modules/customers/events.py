"""Domain events for the Customers bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent

CUSTOMER_DELETED_TOPIC = "customers.deleted"


@dataclass(frozen=True)
class CustomerDeleted(DomainEvent):
    """Raised after a customer row has been deleted."""
