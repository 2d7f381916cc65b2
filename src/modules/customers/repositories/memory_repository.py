"""In-memory implementation of the Customer repository.

Keeps unsaved ``Customer`` instances (with their ``Address`` attached
through the reverse one-to-one accessor) in a dict.  Used by service
unit tests and for running the service without a database; it never
touches the ORM's query machinery.
"""

from __future__ import annotations

import itertools
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from modules.customers.models import Address, Customer, CustomerNameLock
from modules.customers.repositories.interfaces import ICustomerRepository


class CustomerMemoryRepository(ICustomerRepository):
    """Dict-backed Customer repository with monotonically increasing ids."""

    def __init__(self) -> None:
        self._rows: Dict[int, Customer] = {}
        self._ids = itertools.count(1)
        self._mutex = threading.RLock()
        self._name_locks: Dict[str, threading.Lock] = {}

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Customer]:
        return iter(list(self._rows.values()))

    @staticmethod
    def _build(id: int, data: Dict[str, Any]) -> Customer:
        customer = Customer(
            id=id,
            first_name=data["first_name"],
            last_name=data["last_name"],
            date_of_birth=data.get("date_of_birth"),
        )
        address_data = data.get("address")
        if address_data:
            customer.address = Address(**address_data)
        else:
            # cache "no address" so reads never fall through to the database
            Customer.address.related.set_cached_value(customer, None)
        return customer

    def get_by_id(self, id: int) -> Optional[Customer]:
        try:
            return self._rows.get(int(id))
        except (TypeError, ValueError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        """List customers; ``filters`` supports exact field matches only."""
        customers = sorted(self._rows.values(), key=lambda c: c.pk)
        for field, value in (filters or {}).items():
            customers = [c for c in customers if getattr(c, field) == value]
        return customers

    def create(self, data: Dict[str, Any]) -> Customer:
        with self._mutex:
            customer = self._build(next(self._ids), data)
            self._rows[customer.pk] = customer
        return customer

    def update(self, id: int, data: Dict[str, Any]) -> Optional[Customer]:
        with self._mutex:
            if self.get_by_id(id) is None:
                return None
            customer = self._build(int(id), data)
            self._rows[customer.pk] = customer
        return customer

    def delete(self, id: int) -> bool:
        with self._mutex:
            try:
                return self._rows.pop(int(id), None) is not None
            except (TypeError, ValueError):
                return False

    def delete_all(self) -> int:
        with self._mutex:
            count = len(self._rows)
            self._rows.clear()
        return count

    def get_by_name(self, first_name: str, last_name: str) -> Optional[Customer]:
        for customer in self.list():
            if customer.first_name == first_name and customer.last_name == last_name:
                return customer
        return None

    def find_by_first_name(self, first_name: str) -> List[Customer]:
        return self.list({"first_name": first_name})

    @contextmanager
    def lock_name(self, first_name: str, last_name: str) -> Iterator[None]:
        """Hold a per-pair ``threading.Lock`` for the duration of the block."""
        key = CustomerNameLock.key_for(first_name, last_name)
        with self._mutex:
            lock = self._name_locks.setdefault(key, threading.Lock())
        with lock:
            yield
