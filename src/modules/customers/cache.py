"""Read-through cache of customer snapshots.

Entries are keyed by customer id and hold the JSON dump of a
``CustomerOutputDTO``.  There is no size bound and no TTL: an entry lives
until it is explicitly evicted (delete, update) or the cache is cleared
(delete-all).
"""

from __future__ import annotations

from typing import Optional

import structlog
from django.core.cache import BaseCache, caches

from modules.customers.dtos import CustomerOutputDTO

logger = structlog.get_logger(__name__)

CUSTOMER_CACHE_ALIAS = "customers"


class CustomerCache:
    """Key-value memo of customer snapshots on a dedicated cache alias."""

    key_prefix = "customer"

    def __init__(self, alias: str = CUSTOMER_CACHE_ALIAS) -> None:
        self._alias = alias

    @property
    def backend(self) -> BaseCache:
        return caches[self._alias]

    def key(self, customer_id: int) -> str:
        return f"{self.key_prefix}:{customer_id}"

    def get(self, customer_id: int) -> Optional[CustomerOutputDTO]:
        raw = self.backend.get(self.key(customer_id))
        if raw is None:
            return None
        return CustomerOutputDTO.model_validate(raw)

    def put(self, customer_id: int, snapshot: CustomerOutputDTO) -> None:
        self.backend.set(
            self.key(customer_id), snapshot.model_dump(mode="json"), timeout=None
        )

    def evict(self, customer_id: int) -> None:
        self.backend.delete(self.key(customer_id))
        logger.debug("customer.cache_evicted", customer_id=customer_id)

    def clear(self) -> None:
        self.backend.clear()
        logger.info("customer.cache_cleared", alias=self._alias)
