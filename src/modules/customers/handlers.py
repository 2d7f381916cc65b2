"""Event handlers for Customers domain events."""

from __future__ import annotations

import structlog
from django.db import transaction

from modules.core.models import OutboxEvent
from modules.customers.events import CUSTOMER_DELETED_TOPIC, CustomerDeleted
from modules.customers.tasks import process_customer_deleted
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class CustomerDeletedHandler(IEventHandler[CustomerDeleted]):
    """Records the deletion in the outbox and hands it to Celery after commit.

    Runs inside the delete transaction: if the delete rolls back, so does
    the outbox row, and the task is never enqueued.
    """

    def handle(self, event: CustomerDeleted) -> None:
        outbox_event = OutboxEvent.objects.create(
            event_type=event.event_name,
            payload=event.to_payload(),
            aggregate_id=str(event.aggregate_id),
            topic=CUSTOMER_DELETED_TOPIC,
        )
        logger.info(
            "customer.deletion_recorded",
            customer_id=str(event.aggregate_id),
            outbox_event_id=str(outbox_event.id),
        )
        outbox_event_id = str(outbox_event.id)
        transaction.on_commit(lambda: process_customer_deleted.delay(outbox_event_id))


customer_deleted_handler = CustomerDeletedHandler()
