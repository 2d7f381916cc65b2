"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
or ``False`` instead of raising HTTP-level exceptions; the Service Layer
decides how to translate a missing entity into an API response.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import structlog
from django.db import models, transaction

from modules.customers.models import Address, Customer, CustomerNameLock
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def _queryset(self) -> "models.QuerySet[Customer]":
        return Customer.objects.select_related("address")

    def get_by_id(self, id: int) -> Optional[Customer]:
        """Retrieve a customer by primary key.

        Returns ``None`` for non-existent or non-integer IDs.
        """
        try:
            return self._queryset().filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Customer]":
        """List customers with optional Django ORM look-ups.

        Examples of valid filters::

            {"first_name": "Raja"}
            {"last_name__iexact": "kolli"}
        """
        queryset = self._queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Customer:
        customer = Customer.objects.create(
            first_name=data["first_name"],
            last_name=data["last_name"],
            date_of_birth=data.get("date_of_birth"),
        )
        address_data = data.get("address")
        if address_data is not None:
            Address.objects.create(customer=customer, **address_data)
        logger.info(
            "customer.inserted",
            customer_id=customer.pk,
            has_address=address_data is not None,
        )
        return self._queryset().get(pk=customer.pk)

    @transaction.atomic
    def update(self, id: int, data: Dict[str, Any]) -> Optional[Customer]:
        customer = self.get_by_id(id)
        if customer is None:
            return None

        customer.first_name = data["first_name"]
        customer.last_name = data["last_name"]
        customer.date_of_birth = data.get("date_of_birth")
        customer.save()

        address_data = data.get("address")
        if address_data is None:
            Address.objects.filter(customer=customer).delete()
        else:
            Address.objects.update_or_create(customer=customer, defaults=address_data)

        logger.info("customer.overwritten", customer_id=customer.pk)
        return self._queryset().get(pk=customer.pk)

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Delete a customer (its address cascades).

        Returns ``True`` if the customer was found and deleted,
        ``False`` if no customer exists with the given ID.
        """
        try:
            deleted, _ = Customer.objects.filter(id=id).delete()
        except (TypeError, ValueError):
            return False
        if not deleted:
            return False
        logger.info("customer.row_deleted", customer_id=id)
        return True

    @transaction.atomic
    def delete_all(self) -> int:
        count = Customer.objects.count()
        Customer.objects.all().delete()
        logger.info("customer.rows_purged", count=count)
        return count

    def get_by_name(self, first_name: str, last_name: str) -> Optional[Customer]:
        return (
            self._queryset()
            .filter(first_name=first_name, last_name=last_name)
            .first()
        )

    def find_by_first_name(self, first_name: str) -> List[Customer]:
        return list(self._queryset().filter(first_name=first_name))

    @contextmanager
    def lock_name(self, first_name: str, last_name: str) -> Iterator[None]:
        """Lock the name pair's row for the block, inside a (possibly nested) atomic block.

        The row lock is held until the outermost transaction ends.

        ``get_or_create`` tolerates two transactions inserting the same key
        (the loser re-reads after the unique constraint fires), then
        ``select_for_update`` blocks until the other transaction finishes.
        """
        key = CustomerNameLock.key_for(first_name, last_name)
        with transaction.atomic():
            CustomerNameLock.objects.get_or_create(name_key=key)
            CustomerNameLock.objects.select_for_update().get(name_key=key)
            yield
