"""Asynchronous consumers for customer domain events."""

from __future__ import annotations

from typing import Any, Dict

import structlog
from celery import shared_task

from modules.core.models import EventStatus, OutboxEvent
from modules.customers.cache import CustomerCache
from modules.customers.events import CUSTOMER_DELETED_TOPIC

logger = structlog.get_logger(__name__)


@shared_task(name="customers.process_customer_deleted")
def process_customer_deleted(outbox_event_id: str) -> Dict[str, Any]:
    """Finish a customer deletion once the delete has committed.

    Evicts the customer's cache entry (a read that raced the delete may
    have re-populated it) and marks the outbox row as published.
    """
    event = OutboxEvent.objects.filter(id=outbox_event_id).first()
    if event is None:
        logger.warning(
            "customer.deletion_event_missing", outbox_event_id=outbox_event_id
        )
        return {"status": "missing", "outbox_event_id": outbox_event_id}
    if event.is_published:
        return {"status": "skipped", "outbox_event_id": outbox_event_id}

    log = logger.bind(customer_id=event.aggregate_id, outbox_event_id=outbox_event_id)
    try:
        CustomerCache().evict(int(event.aggregate_id))
    except Exception as exc:
        event.mark_as_failed(str(exc))
        log.error("customer.deletion_processing_failed", error=str(exc))
        raise

    event.mark_as_published()
    log.info("customer.deletion_processed")
    return {"status": "ok", "customer_id": event.aggregate_id}


@shared_task(name="customers.relay_pending_customer_deletions")
def relay_pending_customer_deletions(limit: int = 100) -> int:
    """Re-enqueue deletion events that never reached (or failed in) the consumer."""
    pending = OutboxEvent.objects.filter(
        topic=CUSTOMER_DELETED_TOPIC,
        status__in=[EventStatus.PENDING, EventStatus.FAILED],
    ).order_by("created_at")[:limit]

    relayed = 0
    for event in pending:
        process_customer_deleted.delay(str(event.id))
        relayed += 1

    if relayed:
        logger.info("customer.deletions_relayed", count=relayed)
    return relayed
