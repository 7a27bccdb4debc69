"""
Procurement event service.

Events make up the timeline of a procurement item. An event with a
new_status moves the item to that status; when old_status is omitted it is
filled with the status the item had before the event.
"""

import logging
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.core.files import read_upload
from apps.fiscal_years.services import get_fiscal_year_for_read, get_fiscal_year_for_write
from apps.procurement.models import ProcurementEvent, ProcurementEventFile, ProcurementEventType

from .exceptions import (
    ProcurementEventNotFoundError,
    ProcurementFileNotFoundError,
    InvalidProcurementStatusError,
)
from .items import get_active_procurement_item, validate_procurement_status

logger = logging.getLogger(__name__)


def _event_type(value) -> str:
    if value in (None, ''):
        return ProcurementEventType.NOT_STARTED
    event_type = str(value).strip().upper()
    if event_type not in ProcurementEventType.values:
        raise InvalidProcurementStatusError(f"Invalid event type: {value}")
    return event_type


def _optional_status(value) -> str:
    return validate_procurement_status(value) if value else ''


def _item_for(*, rc_id, fy_id, item_id, user, write=False):
    lookup = get_fiscal_year_for_write if write else get_fiscal_year_for_read
    fiscal_year = lookup(rc_id=rc_id, fy_id=fy_id, user=user)
    return get_active_procurement_item(fiscal_year, item_id)


def _active_events(item):
    return item.events.filter(active=True).select_related('created_by')


def _get_event(item, event_id) -> ProcurementEvent:
    try:
        return _active_events(item).get(id=event_id)
    except ProcurementEvent.DoesNotExist:
        raise ProcurementEventNotFoundError("Event not found")


def _event_for(*, rc_id, fy_id, item_id, event_id, user, write=False) -> ProcurementEvent:
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user, write=write)
    return _get_event(item, event_id)


def list_procurement_events(*, rc_id, fy_id, item_id, user: User, event_type: Optional[str] = None) -> List[ProcurementEvent]:
    """Active events of an item, newest first, optionally of one type."""
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user)
    events = _active_events(item).prefetch_related('files')
    if event_type:
        events = events.filter(event_type=_event_type(event_type))
    return list(events)


def get_procurement_event(*, rc_id, fy_id, item_id, event_id, user: User) -> ProcurementEvent:
    return _event_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=event_id, user=user)


def count_procurement_events(*, rc_id, fy_id, item_id, user: User) -> int:
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user)
    return _active_events(item).count()


def get_latest_procurement_event(*, rc_id, fy_id, item_id, user: User) -> Optional[ProcurementEvent]:
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user)
    return _active_events(item).order_by('-event_date', '-created_at', '-id').first()


@transaction.atomic
def create_procurement_event(
    *,
    rc_id,
    fy_id,
    item_id,
    user: User,
    event_type: str = None,
    event_date=None,
    comment: str = '',
    old_status: str = None,
    new_status: str = None
) -> ProcurementEvent:
    """
    Add an event to a procurement item.

    Raises:
        InvalidProcurementStatusError: If the event type or a status is unknown
    """
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user, write=True)

    new_status = _optional_status(new_status)
    old_status = _optional_status(old_status)
    if new_status and not old_status:
        old_status = item.current_status

    event = ProcurementEvent.objects.create(
        procurement_item=item,
        event_type=_event_type(event_type),
        event_date=event_date or timezone.localdate(),
        comment=comment or '',
        old_status=old_status,
        new_status=new_status,
        created_by=user,
    )
    logger.info("User %s added %s event to procurement item %s", user.username, event.event_type, item.id)
    return event


@transaction.atomic
def update_procurement_event(*, rc_id, fy_id, item_id, event_id, user: User, **fields) -> ProcurementEvent:
    event = _event_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=event_id, user=user, write=True)

    if fields.get('event_type'):
        event.event_type = _event_type(fields['event_type'])
    if fields.get('event_date') is not None:
        event.event_date = fields['event_date']
    if fields.get('comment') is not None:
        event.comment = fields['comment']
    if fields.get('old_status') is not None:
        event.old_status = _optional_status(fields['old_status'])
    if fields.get('new_status') is not None:
        event.new_status = _optional_status(fields['new_status'])

    event.save()
    return event


@transaction.atomic
def delete_procurement_event(*, rc_id, fy_id, item_id, event_id, user: User) -> None:
    """Soft delete an event and its files."""
    event = _event_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=event_id, user=user, write=True)
    event.files.filter(active=True).update(active=False)
    event.active = False
    event.save(update_fields=['active', 'updated_at'])


# =============================================================================
# Files
# =============================================================================

def _get_file(event, file_id) -> ProcurementEventFile:
    try:
        return event.files.filter(active=True).get(id=file_id)
    except ProcurementEventFile.DoesNotExist:
        raise ProcurementFileNotFoundError("File not found")


def list_event_files(*, rc_id, fy_id, item_id, event_id, user: User) -> List[ProcurementEventFile]:
    event = _event_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=event_id, user=user)
    return list(event.files.filter(active=True).defer('content'))


def get_event_file(*, rc_id, fy_id, item_id, event_id, file_id, user: User) -> ProcurementEventFile:
    event = _event_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=event_id, user=user)
    return _get_file(event, file_id)


@transaction.atomic
def upload_event_file(*, rc_id, fy_id, item_id, event_id, user: User, uploaded_file, description: str = '') -> ProcurementEventFile:
    """Attach a file of any type to an event."""
    event = _event_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=event_id, user=user, write=True)
    file_name, content_type, file_size, content = read_upload(uploaded_file, restrict_types=False)

    stored = ProcurementEventFile.objects.create(
        event=event,
        file_name=file_name,
        content_type=content_type,
        file_size=file_size,
        content=content,
        description=description or '',
    )
    logger.info("User %s uploaded %s to procurement event %s", user.username, file_name, event.id)
    return stored


@transaction.atomic
def update_event_file_description(*, rc_id, fy_id, item_id, event_id, file_id, user: User, description: str) -> ProcurementEventFile:
    event = _event_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=event_id, user=user, write=True)
    stored = _get_file(event, file_id)
    stored.description = description or ''
    stored.save(update_fields=['description', 'updated_at'])
    return stored


@transaction.atomic
def delete_event_file(*, rc_id, fy_id, item_id, event_id, file_id, user: User) -> None:
    event = _event_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=event_id, user=user, write=True)
    stored = _get_file(event, file_id)
    stored.active = False
    stored.save(update_fields=['active', 'updated_at'])
