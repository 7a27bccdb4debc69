"""
Spending event service.

Events form the tracking timeline of a spending item. Items linked to a
procurement item are tracked through the procurement events instead.
"""

import logging
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.fiscal_years.services import get_fiscal_year_for_read, get_fiscal_year_for_write
from apps.spending.models import SpendingEvent, SpendingEventType

from .exceptions import (
    SpendingEventNotFoundError,
    InvalidSpendingStatusError,
    LinkedSpendingItemError,
)
from .items import get_active_item

logger = logging.getLogger(__name__)

LINKED_ITEM_MESSAGE = (
    "Cannot create tracking events for spending items linked to procurement. "
    "Use the linked procurement item's tracking events instead."
)


def _event_type(value) -> str:
    if value in (None, ''):
        return SpendingEventType.PENDING
    event_type = str(value).strip().upper()
    if event_type not in SpendingEventType.values:
        raise InvalidSpendingStatusError(f"Invalid event type: {value}")
    return event_type


def _active_events(item):
    return item.events.filter(active=True).select_related('created_by')


def _get_event(item, event_id) -> SpendingEvent:
    try:
        return _active_events(item).get(id=event_id)
    except SpendingEvent.DoesNotExist:
        raise SpendingEventNotFoundError("Event not found")


def list_spending_events(*, rc_id, fy_id, item_id, user: User) -> List[SpendingEvent]:
    """Active events of a spending item, newest first."""
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_item(fiscal_year, item_id)
    return list(_active_events(item))


def get_spending_event(*, rc_id, fy_id, item_id, event_id, user: User) -> SpendingEvent:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    return _get_event(get_active_item(fiscal_year, item_id), event_id)


def count_spending_events(*, rc_id, fy_id, item_id, user: User) -> int:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    return _active_events(get_active_item(fiscal_year, item_id)).count()


def get_latest_spending_event(*, rc_id, fy_id, item_id, user: User) -> Optional[SpendingEvent]:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_item(fiscal_year, item_id)
    return _active_events(item).order_by('-event_date', '-created_at', '-id').first()


@transaction.atomic
def create_spending_event(
    *,
    rc_id,
    fy_id,
    item_id,
    user: User,
    event_type: str = None,
    event_date=None,
    comment: str = ''
) -> SpendingEvent:
    """
    Add an event to a spending item's timeline.

    Raises:
        LinkedSpendingItemError: If the item is linked to a procurement item
        InvalidSpendingStatusError: If the event type is unknown
    """
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_item(fiscal_year, item_id)
    if item.procurement_item_id is not None:
        raise LinkedSpendingItemError(LINKED_ITEM_MESSAGE)

    event = SpendingEvent.objects.create(
        spending_item=item,
        event_type=_event_type(event_type),
        event_date=event_date or timezone.localdate(),
        comment=comment or '',
        created_by=user,
    )
    logger.info("User %s added %s event to spending item %s", user.username, event.event_type, item.id)
    return event


@transaction.atomic
def update_spending_event(*, rc_id, fy_id, item_id, event_id, user: User, **fields) -> SpendingEvent:
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    event = _get_event(get_active_item(fiscal_year, item_id), event_id)

    if fields.get('event_type'):
        event.event_type = _event_type(fields['event_type'])
    if fields.get('event_date') is not None:
        event.event_date = fields['event_date']
    if fields.get('comment') is not None:
        event.comment = fields['comment']

    event.save()
    return event


@transaction.atomic
def delete_spending_event(*, rc_id, fy_id, item_id, event_id, user: User) -> None:
    """Soft delete an event."""
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    event = _get_event(get_active_item(fiscal_year, item_id), event_id)
    event.active = False
    event.save(update_fields=['active'])
