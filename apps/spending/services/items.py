"""
Spending item service.

Spending items are soft deleted; listings and lookups only see active rows.
"""

import logging
from typing import List, Optional

from django.db import transaction

from apps.accounts.models import User
from apps.currencies.services import validate_currency
from apps.fiscal_years.services import (
    get_fiscal_year_for_read,
    get_fiscal_year_for_write,
    resolve_category,
)
from apps.fiscal_years.services.allocations import (
    parse_allocations,
    require_non_zero,
    check_category_funding,
    write_allocations,
)
from apps.spending.models import SpendingItem, SpendingMoneyAllocation, SpendingStatus

from .exceptions import (
    SpendingServiceError,
    SpendingItemNotFoundError,
    InvalidSpendingStatusError,
)

logger = logging.getLogger(__name__)

TEXT_FIELDS = ('description', 'vendor', 'reference_number')
AMOUNT_FIELDS = ('amount', 'eco_amount')


def _queryset():
    return (
        SpendingItem.objects
        .filter(active=True)
        .select_related('category', 'procurement_item')
        .prefetch_related('allocations__money')
    )


def get_active_item(fiscal_year, item_id) -> SpendingItem:
    """Active spending item of a fiscal year or SpendingItemNotFoundError."""
    try:
        return _queryset().get(id=item_id, fiscal_year=fiscal_year)
    except SpendingItem.DoesNotExist:
        raise SpendingItemNotFoundError("Spending Item not found")


def _validate_status(status: str) -> str:
    value = (status or '').strip().upper()
    if value not in SpendingStatus.values:
        raise InvalidSpendingStatusError(f"Invalid status: {status}")
    return value


def list_spending_items(*, rc_id, fy_id, user: User, category_id: Optional[int] = None) -> List[SpendingItem]:
    """List active spending items, optionally limited to one category."""
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    queryset = _queryset().filter(fiscal_year=fiscal_year)
    if category_id is not None:
        queryset = queryset.filter(category_id=category_id)
    return list(queryset)


def get_spending_item(*, rc_id, fy_id, item_id, user: User) -> SpendingItem:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    return get_active_item(fiscal_year, item_id)


@transaction.atomic
def create_spending_item(
    *,
    rc_id,
    fy_id,
    user: User,
    name: str,
    category_id: Optional[int],
    allocations: list,
    description: str = '',
    vendor: str = '',
    reference_number: str = '',
    amount=None,
    eco_amount=None,
    status: str = SpendingStatus.DRAFT,
    currency: str = None,
    exchange_rate=None
) -> SpendingItem:
    """
    Create a spending item with its money allocations.

    Raises:
        SpendingServiceError: If the name or category is missing
        FiscalYearServiceError: If no allocation has a positive amount
        CurrencyError: If the currency or exchange rate is invalid
    """
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)

    name = (name or '').strip()
    if not name:
        raise SpendingServiceError("Name is required")
    if category_id is None:
        raise SpendingServiceError("Category ID is required")
    category = resolve_category(fiscal_year, category_id)

    currency, exchange_rate = validate_currency(currency, exchange_rate)
    status = _validate_status(status or SpendingStatus.DRAFT)

    parsed = parse_allocations(fiscal_year, allocations)
    require_non_zero(parsed)
    check_category_funding(category, parsed)

    item = SpendingItem.objects.create(
        fiscal_year=fiscal_year,
        name=name,
        description=description or '',
        vendor=vendor or '',
        reference_number=reference_number or '',
        amount=amount,
        eco_amount=eco_amount,
        status=status,
        currency=currency,
        exchange_rate=exchange_rate,
        category=category,
    )
    write_allocations(model=SpendingMoneyAllocation, owner_field='spending_item', owner=item, parsed=parsed)

    logger.info("User %s created spending item %s (%s) in Fiscal Year %s", user.username, name, item.id, fiscal_year.id)
    return get_active_item(fiscal_year, item.id)


@transaction.atomic
def update_spending_item(*, rc_id, fy_id, item_id, user: User, **fields) -> SpendingItem:
    """
    Update a spending item.

    Allocations, when given, are upserted per money. A category_id of -1
    clears the category.
    """
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_item(fiscal_year, item_id)
    item.check_version(fields.get('version'))

    if fields.get('name') is not None:
        name = fields['name'].strip()
        if not name:
            raise SpendingServiceError("Name is required")
        item.name = name

    for field in TEXT_FIELDS:
        if fields.get(field) is not None:
            setattr(item, field, fields[field])

    # Amounts may be cleared with an explicit null
    for field in AMOUNT_FIELDS:
        if field in fields:
            setattr(item, field, fields[field])

    if fields.get('status') is not None:
        item.status = _validate_status(fields['status'])

    if 'currency' in fields or 'exchange_rate' in fields:
        item.currency, item.exchange_rate = validate_currency(
            fields.get('currency', item.currency),
            fields.get('exchange_rate', item.exchange_rate),
        )

    if 'category_id' in fields:
        item.category = resolve_category(fiscal_year, fields['category_id'])

    item.save()

    if fields.get('allocations'):
        parsed = parse_allocations(fiscal_year, fields['allocations'])
        check_category_funding(item.category, parsed)
        write_allocations(
            model=SpendingMoneyAllocation, owner_field='spending_item', owner=item, parsed=parsed, replace=False
        )

    return get_active_item(fiscal_year, item.id)


@transaction.atomic
def delete_spending_item(*, rc_id, fy_id, item_id, user: User) -> None:
    """Soft delete a spending item."""
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_item(fiscal_year, item_id)
    item.active = False
    item.save(update_fields=['active'])
    logger.info("User %s deleted spending item %s (%s)", user.username, item.name, item.id)


@transaction.atomic
def update_spending_status(*, rc_id, fy_id, item_id, user: User, status: str) -> SpendingItem:
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_item(fiscal_year, item_id)
    item.status = _validate_status(status)
    item.save(update_fields=['status'])
    return item


def get_spending_allocations(*, rc_id, fy_id, item_id, user: User) -> List[SpendingMoneyAllocation]:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_item(fiscal_year, item_id)
    return list(
        item.allocations.select_related('money').order_by('money__display_order', 'money__code')
    )


@transaction.atomic
def update_spending_allocations(*, rc_id, fy_id, item_id, user: User, allocations: list) -> List[SpendingMoneyAllocation]:
    """Replace all allocations of an item; monies left out are set to zero."""
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_item(fiscal_year, item_id)

    parsed = parse_allocations(fiscal_year, allocations)
    require_non_zero(parsed)
    check_category_funding(item.category, parsed)
    return write_allocations(
        model=SpendingMoneyAllocation, owner_field='spending_item', owner=item, parsed=parsed
    )
