"""
Funding item service.

A funding item records money made available to a fiscal year. Its amounts
live in one MoneyAllocation per money type of the fiscal year.
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
from apps.funding.models import FundingItem, MoneyAllocation, FundingSource

from .exceptions import FundingServiceError, FundingItemNotFoundError, DuplicateFundingItemError

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A funding item with this name already exists for this fiscal year"


def _queryset():
    return FundingItem.objects.select_related('category').prefetch_related('allocations__money')


def _get_item(fiscal_year, item_id) -> FundingItem:
    try:
        return _queryset().get(id=item_id, fiscal_year=fiscal_year)
    except FundingItem.DoesNotExist:
        raise FundingItemNotFoundError("Funding item not found")


def _check_unique_name(fiscal_year, name, exclude_id=None) -> None:
    queryset = FundingItem.objects.filter(fiscal_year=fiscal_year, name=name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateFundingItemError(DUPLICATE_NAME_MESSAGE)


def _clean_name(name) -> str:
    name = (name or '').strip()
    if not name:
        raise FundingServiceError("Funding item name is required")
    return name


def list_funding_items(*, rc_id, fy_id, user: User, category_id: Optional[int] = None) -> List[FundingItem]:
    """List funding items of a fiscal year, optionally limited to one category."""
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    queryset = _queryset().filter(fiscal_year=fiscal_year)
    if category_id is not None:
        queryset = queryset.filter(category_id=category_id)
    return list(queryset)


def get_funding_item(*, rc_id, fy_id, item_id, user: User) -> FundingItem:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    return _get_item(fiscal_year, item_id)


@transaction.atomic
def create_funding_item(
    *,
    rc_id,
    fy_id,
    user: User,
    name: str,
    allocations: list,
    description: str = '',
    source: str = FundingSource.BUSINESS_PLAN,
    comments: str = '',
    currency: str = None,
    exchange_rate=None,
    category_id: Optional[int] = None
) -> FundingItem:
    """
    Create a funding item with its money allocations.

    Args:
        allocations: List of {'money_id', 'cap_amount', 'om_amount'}; at
            least one must carry a positive amount

    Raises:
        RCAccessDeniedError: If the user cannot write to the RC
        DuplicateFundingItemError: If the name is already used
        FiscalYearServiceError: If no allocation has a positive amount
        CurrencyError: If the currency or exchange rate is invalid
    """
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    name = _clean_name(name)
    _check_unique_name(fiscal_year, name)

    currency, exchange_rate = validate_currency(currency, exchange_rate)
    category = resolve_category(fiscal_year, category_id)

    parsed = parse_allocations(fiscal_year, allocations)
    require_non_zero(parsed)
    check_category_funding(category, parsed)

    item = FundingItem.objects.create(
        fiscal_year=fiscal_year,
        name=name,
        description=description or '',
        source=source or FundingSource.BUSINESS_PLAN,
        comments=comments or '',
        currency=currency,
        exchange_rate=exchange_rate,
        category=category,
    )
    write_allocations(model=MoneyAllocation, owner_field='funding_item', owner=item, parsed=parsed)

    logger.info("User %s created funding item %s (%s) in Fiscal Year %s", user.username, name, item.id, fiscal_year.id)
    return _get_item(fiscal_year, item.id)


@transaction.atomic
def update_funding_item(*, rc_id, fy_id, item_id, user: User, **fields) -> FundingItem:
    """
    Update a funding item.

    Allocations, when given, are upserted: listed monies get the new amounts
    and the others keep theirs. A category_id of -1 clears the category.
    """
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = _get_item(fiscal_year, item_id)
    item.check_version(fields.get('version'))

    if fields.get('name') is not None:
        name = _clean_name(fields['name'])
        _check_unique_name(fiscal_year, name, exclude_id=item.id)
        item.name = name

    for field in ('description', 'source', 'comments', 'active'):
        if fields.get(field) is not None:
            setattr(item, field, fields[field])

    if 'currency' in fields or 'exchange_rate' in fields:
        item.currency, item.exchange_rate = validate_currency(
            fields.get('currency', item.currency),
            fields.get('exchange_rate', item.exchange_rate),
        )

    if 'category_id' in fields:
        item.category = resolve_category(fiscal_year, fields['category_id'])

    item.save()

    if fields.get('allocations') is not None:
        parsed = parse_allocations(fiscal_year, fields['allocations'])
        check_category_funding(item.category, parsed)
        write_allocations(
            model=MoneyAllocation, owner_field='funding_item', owner=item, parsed=parsed, replace=False
        )

    return _get_item(fiscal_year, item.id)


@transaction.atomic
def delete_funding_item(*, rc_id, fy_id, item_id, user: User) -> None:
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = _get_item(fiscal_year, item_id)
    logger.info("User %s deleted funding item %s (%s)", user.username, item.name, item.id)
    item.delete()
