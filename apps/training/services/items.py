"""
Training item service.

Training items are deleted outright together with their participants and
allocations. Allocations are OM only.
"""

import logging
from typing import List

from django.db import transaction

from apps.accounts.models import User
from apps.fiscal_years.services import get_fiscal_year_for_read, get_fiscal_year_for_write
from apps.fiscal_years.services.allocations import parse_allocations, require_non_zero, write_allocations
from apps.training.models import (
    TrainingItem,
    TrainingMoneyAllocation,
    TrainingStatus,
    TrainingType,
    TrainingFormat,
)

from .exceptions import (
    TrainingServiceError,
    TrainingItemNotFoundError,
    DuplicateTrainingItemError,
    InvalidTrainingValueError,
)

logger = logging.getLogger(__name__)

TEXT_FIELDS = ('description', 'provider', 'reference_number', 'location')
DATE_FIELDS = ('start_date', 'end_date')


def _queryset():
    return (
        TrainingItem.objects
        .filter(active=True)
        .prefetch_related('participants', 'allocations__money')
    )


def get_active_training_item(fiscal_year, item_id) -> TrainingItem:
    try:
        return _queryset().get(id=item_id, fiscal_year=fiscal_year)
    except TrainingItem.DoesNotExist:
        raise TrainingItemNotFoundError("Training item not found")


def validate_choice(choices, value, label: str) -> str:
    normalized = (value or '').strip().upper()
    if normalized not in choices.values:
        raise InvalidTrainingValueError(f"Invalid {label}: {value}")
    return normalized


def _check_unique_name(fiscal_year, name: str, exclude_id=None) -> None:
    queryset = TrainingItem.objects.filter(fiscal_year=fiscal_year, name=name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateTrainingItemError(f"A training item with name '{name}' already exists in this fiscal year")


def _write_om_allocations(fiscal_year, item, allocations) -> list:
    parsed = parse_allocations(fiscal_year, allocations, om_only=True)
    require_non_zero(parsed, om_only=True)
    return write_allocations(
        model=TrainingMoneyAllocation, owner_field='training_item', owner=item, parsed=parsed
    )


def list_training_items(*, rc_id, fy_id, user: User) -> List[TrainingItem]:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    return list(_queryset().filter(fiscal_year=fiscal_year))


def get_training_item(*, rc_id, fy_id, item_id, user: User) -> TrainingItem:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    return get_active_training_item(fiscal_year, item_id)


@transaction.atomic
def create_training_item(
    *,
    rc_id,
    fy_id,
    user: User,
    name: str,
    status: str = None,
    training_type: str = None,
    format: str = None,
    participants: list = None,
    allocations: list = None,
    **fields
) -> TrainingItem:
    """
    Create a training item, optionally with participants and allocations.

    Args:
        participants: Participant payloads, see participants.add_participant
        allocations: OM allocation payloads; when given at least one OM
            amount must be positive

    Raises:
        TrainingServiceError: If the name is missing
        DuplicateTrainingItemError: If the name is taken in the fiscal year
        InvalidTrainingValueError: If status, type or format is unknown
    """
    from .participants import build_participant

    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)

    name = (name or '').strip()
    if not name:
        raise TrainingServiceError("Name is required")
    _check_unique_name(fiscal_year, name)

    item = TrainingItem(
        fiscal_year=fiscal_year,
        name=name,
        status=validate_choice(TrainingStatus, status or TrainingStatus.PLANNED, 'status'),
        training_type=validate_choice(TrainingType, training_type or TrainingType.OTHER, 'training type'),
        format=validate_choice(TrainingFormat, format or TrainingFormat.IN_PERSON, 'format'),
    )
    for field in TEXT_FIELDS + DATE_FIELDS:
        if fields.get(field) is not None:
            setattr(item, field, fields[field])
    item.save()

    for payload in participants or []:
        build_participant(item, payload).save()

    if allocations:
        _write_om_allocations(fiscal_year, item, allocations)
    else:
        write_allocations(model=TrainingMoneyAllocation, owner_field='training_item', owner=item, parsed={})

    logger.info("User %s created training item %s (%s) in Fiscal Year %s", user.username, name, item.id, fiscal_year.id)
    return get_active_training_item(fiscal_year, item.id)


@transaction.atomic
def update_training_item(*, rc_id, fy_id, item_id, user: User, **fields) -> TrainingItem:
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_training_item(fiscal_year, item_id)
    item.check_version(fields.get('version'))

    if fields.get('name') is not None:
        name = fields['name'].strip()
        if not name:
            raise TrainingServiceError("Name is required")
        _check_unique_name(fiscal_year, name, exclude_id=item.id)
        item.name = name

    for field in TEXT_FIELDS:
        if fields.get(field) is not None:
            setattr(item, field, fields[field])
    for field in DATE_FIELDS:
        if field in fields:
            setattr(item, field, fields[field])

    if fields.get('status'):
        item.status = validate_choice(TrainingStatus, fields['status'], 'status')
    if fields.get('training_type'):
        item.training_type = validate_choice(TrainingType, fields['training_type'], 'training type')
    if fields.get('format'):
        item.format = validate_choice(TrainingFormat, fields['format'], 'format')

    item.save()

    if fields.get('allocations'):
        _write_om_allocations(fiscal_year, item, fields['allocations'])

    return get_active_training_item(fiscal_year, item.id)


@transaction.atomic
def delete_training_item(*, rc_id, fy_id, item_id, user: User) -> None:
    """Delete a training item with its participants and allocations."""
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_training_item(fiscal_year, item_id)
    name = item.name
    item.delete()
    logger.info("User %s deleted training item %s (%s)", user.username, name, item_id)


@transaction.atomic
def update_training_status(*, rc_id, fy_id, item_id, user: User, status: str) -> TrainingItem:
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_training_item(fiscal_year, item_id)
    item.status = validate_choice(TrainingStatus, status, 'status')
    item.save(update_fields=['status'])
    logger.info("User %s set training item %s to %s", user.username, item.id, item.status)
    return item


def get_training_allocations(*, rc_id, fy_id, item_id, user: User) -> List[TrainingMoneyAllocation]:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_training_item(fiscal_year, item_id)
    return list(
        item.allocations.select_related('money').order_by('money__display_order', 'money__code')
    )


@transaction.atomic
def update_training_allocations(*, rc_id, fy_id, item_id, user: User, allocations: list) -> List[TrainingMoneyAllocation]:
    """Replace all OM allocations of an item; monies left out are set to zero."""
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_training_item(fiscal_year, item_id)
    return _write_om_allocations(fiscal_year, item, allocations)
