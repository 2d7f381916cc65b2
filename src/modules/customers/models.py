"""Customer and Address models.

Business rules implemented:
- A customer has a non-blank first and last name and an optional date of
  birth (validated in ``modules.customers.validation``).
- The (first name, last name) pair is unique at creation time only; the
  service serialises creates through ``CustomerNameLock``.
- The address is owned 1:1 by its customer: its primary key *is* the
  customer and it is deleted together with it.
"""

from __future__ import annotations

from typing import Optional

from django.db import models

from modules.core.models import TimeStampedModel


class Customer(TimeStampedModel):
    """Customer aggregate root."""

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    date_of_birth = models.DateField(null=True, blank=True, default=None)

    class Meta:
        db_table = "customers"
        ordering = ["id"]
        indexes = [
            models.Index(
                fields=["first_name", "last_name"], name="customers_full_name_idx"
            ),
        ]

    @property
    def current_address(self) -> Optional[Address]:
        """The owned address, or ``None`` when the customer has none."""
        # RelatedObjectDoesNotExist subclasses AttributeError
        return getattr(self, "address", None)

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} (#{self.pk})"


class Address(models.Model):
    """Postal address owned by exactly one customer."""

    customer = models.OneToOneField(
        Customer,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="address",
    )
    street = models.CharField(max_length=255, blank=True, default="")
    town = models.CharField(max_length=100, blank=True, default="")
    county = models.CharField(max_length=100, blank=True, default="")
    postcode = models.CharField(max_length=20, blank=True, default="")

    class Meta:
        db_table = "customer_addresses"

    def __str__(self) -> str:
        return f"{self.street}, {self.town} {self.postcode}"


class CustomerNameLock(models.Model):
    """Row locked (``SELECT ... FOR UPDATE``) while a create checks and
    inserts a given (first name, last name) pair.

    One row per pair ever created; rows are never deleted so concurrent
    creates always contend on the same row.
    """

    name_key = models.CharField(max_length=512, unique=True)

    class Meta:
        db_table = "customer_name_locks"

    @staticmethod
    def key_for(first_name: str, last_name: str) -> str:
        return f"{first_name.strip().lower()}\x1f{last_name.strip().lower()}"

    def __str__(self) -> str:
        return self.name_key.replace("\x1f", " ")
