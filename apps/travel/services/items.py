"""
Travel item service.

Mirrors the training service: items are deleted outright and their
allocations are OM only.
"""

import logging
from typing import List

from django.db import transaction

from apps.accounts.models import User
from apps.fiscal_years.services import get_fiscal_year_for_read, get_fiscal_year_for_write
from apps.fiscal_years.services.allocations import parse_allocations, require_non_zero, write_allocations
from apps.travel.models import TravelItem, TravelMoneyAllocation, TravelStatus, TravelType

from .exceptions import (
    TravelServiceError,
    TravelItemNotFoundError,
    DuplicateTravelItemError,
    InvalidTravelValueError,
)

logger = logging.getLogger(__name__)

TEXT_FIELDS = ('description', 'emap', 'destination', 'purpose')
DATE_FIELDS = ('departure_date', 'return_date')


def _queryset():
    return (
        TravelItem.objects
        .filter(active=True)
        .prefetch_related('travellers', 'allocations__money')
    )


def get_active_travel_item(fiscal_year, item_id) -> TravelItem:
    try:
        return _queryset().get(id=item_id, fiscal_year=fiscal_year)
    except TravelItem.DoesNotExist:
        raise TravelItemNotFoundError("Travel item not found")


def validate_choice(choices, value, label: str) -> str:
    normalized = (value or '').strip().upper()
    if normalized not in choices.values:
        raise InvalidTravelValueError(f"Invalid {label}: {value}")
    return normalized


def _check_unique_name(fiscal_year, name: str, exclude_id=None) -> None:
    queryset = TravelItem.objects.filter(fiscal_year=fiscal_year, name=name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateTravelItemError(f"A travel item with name '{name}' already exists in this fiscal year")


def _write_om_allocations(fiscal_year, item, allocations) -> list:
    parsed = parse_allocations(fiscal_year, allocations, om_only=True)
    require_non_zero(parsed, om_only=True)
    return write_allocations(model=TravelMoneyAllocation, owner_field='travel_item', owner=item, parsed=parsed)


def list_travel_items(*, rc_id, fy_id, user: User) -> List[TravelItem]:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    return list(_queryset().filter(fiscal_year=fiscal_year))


def get_travel_item(*, rc_id, fy_id, item_id, user: User) -> TravelItem:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    return get_active_travel_item(fiscal_year, item_id)


@transaction.atomic
def create_travel_item(
    *,
    rc_id,
    fy_id,
    user: User,
    name: str,
    status: str = None,
    travel_type: str = None,
    travellers: list = None,
    allocations: list = None,
    **fields
) -> TravelItem:
    """
    Create a travel item, optionally with travellers and allocations.

    Raises:
        TravelServiceError: If the name is missing
        DuplicateTravelItemError: If the name is taken in the fiscal year
        InvalidTravelValueError: If the status or travel type is unknown
    """
    from .travellers import build_traveller

    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)

    name = (name or '').strip()
    if not name:
        raise TravelServiceError("Name is required")
    _check_unique_name(fiscal_year, name)

    item = TravelItem(
        fiscal_year=fiscal_year,
        name=name,
        status=validate_choice(TravelStatus, status or TravelStatus.PLANNED, 'status'),
        travel_type=validate_choice(TravelType, travel_type or TravelType.DOMESTIC, 'travel type'),
    )
    for field in TEXT_FIELDS + DATE_FIELDS:
        if fields.get(field) is not None:
            setattr(item, field, fields[field])
    item.save()

    for payload in travellers or []:
        build_traveller(item, payload).save()

    if allocations:
        _write_om_allocations(fiscal_year, item, allocations)
    else:
        write_allocations(model=TravelMoneyAllocation, owner_field='travel_item', owner=item, parsed={})

    logger.info("User %s created travel item %s (%s) in Fiscal Year %s", user.username, name, item.id, fiscal_year.id)
    return get_active_travel_item(fiscal_year, item.id)


@transaction.atomic
def update_travel_item(*, rc_id, fy_id, item_id, user: User, **fields) -> TravelItem:
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_travel_item(fiscal_year, item_id)
    item.check_version(fields.get('version'))

    if fields.get('name') is not None:
        name = fields['name'].strip()
        if not name:
            raise TravelServiceError("Name is required")
        _check_unique_name(fiscal_year, name, exclude_id=item.id)
        item.name = name

    for field in TEXT_FIELDS:
        if fields.get(field) is not None:
            setattr(item, field, fields[field])
    for field in DATE_FIELDS:
        if field in fields:
            setattr(item, field, fields[field])

    if fields.get('status'):
        item.status = validate_choice(TravelStatus, fields['status'], 'status')
    if fields.get('travel_type'):
        item.travel_type = validate_choice(TravelType, fields['travel_type'], 'travel type')

    item.save()

    if fields.get('allocations'):
        _write_om_allocations(fiscal_year, item, fields['allocations'])

    return get_active_travel_item(fiscal_year, item.id)


@transaction.atomic
def delete_travel_item(*, rc_id, fy_id, item_id, user: User) -> None:
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_travel_item(fiscal_year, item_id)
    name = item.name
    item.delete()
    logger.info("User %s deleted travel item %s (%s)", user.username, name, item_id)


@transaction.atomic
def update_travel_status(*, rc_id, fy_id, item_id, user: User, status: str) -> TravelItem:
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_travel_item(fiscal_year, item_id)
    item.status = validate_choice(TravelStatus, status, 'status')
    item.save(update_fields=['status'])
    logger.info("User %s set travel item %s to %s", user.username, item.id, item.status)
    return item


def get_travel_allocations(*, rc_id, fy_id, item_id, user: User) -> List[TravelMoneyAllocation]:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_travel_item(fiscal_year, item_id)
    return list(
        item.allocations.select_related('money').order_by('money__display_order', 'money__code')
    )


@transaction.atomic
def update_travel_allocations(*, rc_id, fy_id, item_id, user: User, allocations: list) -> List[TravelMoneyAllocation]:
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_travel_item(fiscal_year, item_id)
    return _write_om_allocations(fiscal_year, item, allocations)
