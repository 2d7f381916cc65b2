"""Customer repository interface.

Extends ``IRepository[Customer]`` with the writes and look-ups the
customer service needs: name-pair look-up for duplicate detection, the
per-name lock that makes check-then-insert atomic, and bulk deletion.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, ContextManager, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db import models

    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate.

    ``data`` dictionaries passed to ``create`` / ``update`` carry
    ``first_name``, ``last_name``, ``date_of_birth`` and ``address``
    (a dict with ``street``, ``town``, ``county``, ``postcode``, or
    ``None`` for no address).
    """

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Customer]":
        """List customers with optional filters."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Customer:
        """Insert a customer (and its address) and return it with its new id."""

    @abstractmethod
    def update(self, id: int, data: Dict[str, Any]) -> Optional[Customer]:
        """Overwrite a customer's fields and address; ``None`` if absent."""

    @abstractmethod
    def delete_all(self) -> int:
        """Remove every customer. Returns the number of customers removed."""

    @abstractmethod
    def get_by_name(self, first_name: str, last_name: str) -> Optional[Customer]:
        """Retrieve the customer with exactly this first and last name."""

    @abstractmethod
    def find_by_first_name(self, first_name: str) -> List[Customer]:
        """All customers with the given first name."""

    @abstractmethod
    def lock_name(self, first_name: str, last_name: str) -> ContextManager[None]:
        """Exclusive hold on the name pair for the duration of a ``with`` block.

        Creates of the same pair run their duplicate check and insert
        inside this block, so at most one of them can succeed.
        """
