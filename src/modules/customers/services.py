"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository`` and snapshot caching
to ``CustomerCache``.

Rules enforced here:
- Candidates are validated before any write; malformed input raises
  ``InvalidCustomer``, semantically invalid input ``UnprocessableCustomer``.
- A (first name, last name) pair may be created only once; the check and
  the insert share one transaction and the pair's name lock.
- Reads are cache-aside: cache first, repository on miss, then populate.
- Writes invalidate: update evicts the entry, delete evicts it and
  publishes ``CustomerDeleted`` so an asynchronous consumer evicts it
  again once the delete has committed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

import structlog
from django.db import transaction

from modules.customers.cache import CustomerCache
from modules.customers.dtos import CustomerOutputDTO
from modules.customers.events import CustomerDeleted
from modules.customers.exceptions import (
    CustomerAlreadyExists,
    CustomerNotFound,
    InvalidCustomer,
    UnprocessableCustomer,
)
from modules.customers.validation import ViolationKind, validate_customer
from shared.infrastructure.bus import event_bus as default_event_bus

if TYPE_CHECKING:
    from modules.customers.dtos import CustomerInputDTO
    from modules.customers.models import Customer
    from modules.customers.repositories.interfaces import ICustomerRepository
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    The cache and event bus default to the process-wide instances.
    """

    def __init__(
        self,
        repository: ICustomerRepository,
        cache: Optional[CustomerCache] = None,
        event_bus: Optional[IEventBus] = None,
    ) -> None:
        self._repo = repository
        self._cache = cache if cache is not None else CustomerCache()
        self._events = event_bus if event_bus is not None else default_event_bus

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CustomerInputDTO) -> int:
        """Create a new customer and return its id.

        The cache is not pre-populated; the first ``get_customer`` does it.

        Raises:
            InvalidCustomer: a name is missing or blank.
            UnprocessableCustomer: the date of birth is in the future.
            CustomerAlreadyExists: the (first, last) pair is taken.
        """
        self._validate(dto)
        log = logger.bind(first_name=dto.first_name, last_name=dto.last_name)

        with self._repo.lock_name(dto.first_name, dto.last_name):
            if self._repo.get_by_name(dto.first_name, dto.last_name):
                log.warning("customer.duplicate_name")
                raise CustomerAlreadyExists(
                    f"Customer {dto.first_name} {dto.last_name} already exists."
                )
            customer = self._repo.create(dto.to_fields())
        log.info("customer.created", customer_id=customer.pk)
        return customer.pk

    @transaction.atomic
    def update_customer(
        self, id: int, dto: CustomerInputDTO, partial: bool = False
    ) -> CustomerOutputDTO:
        """Overwrite a customer's mutable fields.

        With ``partial=True`` only the fields present in ``dto`` change.
        The cache entry is evicted now and again after commit, so a read
        racing the update cannot leave a stale snapshot behind.

        Raises:
            CustomerNotFound: the customer does not exist.
            InvalidCustomer / UnprocessableCustomer: the merged candidate
                fails validation.
        """
        existing = self._repo.get_by_id(id)
        if not existing:
            raise CustomerNotFound(f"Customer {id} not found.")

        log = logger.bind(customer_id=existing.pk)
        candidate = dto
        if partial:
            candidate = dto.merged_over(CustomerOutputDTO.from_entity(existing))
        self._validate(candidate)

        customer = self._repo.update(existing.pk, candidate.to_fields())
        self._invalidate(existing.pk)
        log.info("customer.updated", partial=partial)
        return CustomerOutputDTO.from_entity(customer)

    @transaction.atomic
    def delete_customer(self, id: int) -> None:
        """Delete a customer and notify downstream consumers.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")

        customer_id = customer.pk
        self._repo.delete(customer_id)
        self._cache.evict(customer_id)
        self._events.publish(CustomerDeleted(aggregate_id=customer_id))
        logger.info("customer.deleted", customer_id=customer_id)

    @transaction.atomic
    def delete_all_customers(self) -> int:
        """Delete every customer and drop every cached snapshot."""
        count = self._repo.delete_all()
        self._cache.clear()
        transaction.on_commit(self._cache.clear)
        logger.info("customer.all_deleted", count=count)
        return count

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> Iterable[Customer]:
        """Return all customers, optionally filtered. Empty is not an error."""
        return self._repo.list(filters)

    def find_by_first_name(self, first_name: str) -> List[Customer]:
        return self._repo.find_by_first_name(first_name)

    def get_customer(self, id: int) -> CustomerOutputDTO:
        """Retrieve a single customer snapshot, reading through the cache.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        cached = self._cache.get(id)
        if cached is not None:
            logger.debug("customer.cache_hit", customer_id=id)
            return cached

        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")

        snapshot = CustomerOutputDTO.from_entity(customer)
        self._cache.put(customer.pk, snapshot)
        logger.info("customer.retrieved", customer_id=customer.pk, cached=True)
        return snapshot

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(candidate: CustomerInputDTO) -> None:
        result = validate_customer(candidate)
        if result.is_valid:
            return
        logger.warning("customer.invalid", violations=result.messages())
        if result.kind is ViolationKind.UNPROCESSABLE:
            raise UnprocessableCustomer(result.violations)
        raise InvalidCustomer(result.violations)

    def _invalidate(self, customer_id: int) -> None:
        self._cache.evict(customer_id)
        transaction.on_commit(lambda: self._cache.evict(customer_id))
