"""
Money type management service.

Money types are managed by RC owners only. Every fiscal year has exactly one
default money, AB (A-Base), which can be renamed but never recoded or
deleted.
"""

import logging
from typing import List, Sequence

from django.db import transaction
from django.db.models import Q

from apps.accounts.models import User
from apps.fiscal_years.models import FiscalYear, Money

from .exceptions import (
    FiscalYearServiceError,
    MoneyNotFoundError,
    DuplicateMoneyError,
    MoneyProtectedError,
)
from .lookups import get_fiscal_year_for_read, get_fiscal_year_for_owner

logger = logging.getLogger(__name__)

OWNER_ONLY_MESSAGE = "Only owners can manage money types for this Responsibility Centre"

DEFAULT_MONEY_NAME = "A-Base"
DEFAULT_MONEY_DESCRIPTION = "Default A-Base funding allocation"

# Allocation relations on Money and the amount columns each one carries
ALLOCATION_RELATIONS = (
    ('funding_allocations', ('cap_amount', 'om_amount')),
    ('spending_allocations', ('cap_amount', 'om_amount')),
    ('training_allocations', ('om_amount',)),
    ('travel_allocations', ('om_amount',)),
)


def ensure_default_money(fiscal_year: FiscalYear) -> Money:
    """Create the AB money for a fiscal year if it is missing."""
    money, created = Money.objects.get_or_create(
        fiscal_year=fiscal_year,
        code=Money.DEFAULT_CODE,
        defaults={
            'name': DEFAULT_MONEY_NAME,
            'description': DEFAULT_MONEY_DESCRIPTION,
            'is_default': True,
            'display_order': 0,
        },
    )
    return money


def is_money_in_use(money: Money) -> bool:
    """True when any item allocates a non-zero amount from this money."""
    for relation, amount_fields in ALLOCATION_RELATIONS:
        manager = getattr(money, relation, None)
        if manager is None:
            continue
        non_zero = Q()
        for field in amount_fields:
            non_zero |= Q(**{f'{field}__gt': 0})
        if manager.filter(non_zero).exists():
            return True
    return False


def can_delete_money(money: Money) -> bool:
    return not money.is_default and not is_money_in_use(money)


def _clean_code(code) -> str:
    code = (code or '').strip().upper()
    if not code:
        raise FiscalYearServiceError("Money code is required")
    return code


def _check_unique_code(fiscal_year, code, exclude_id=None) -> None:
    queryset = Money.objects.filter(fiscal_year=fiscal_year, code=code)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateMoneyError(f"A money type with code {code} already exists for this fiscal year")


def _get_money(fiscal_year, money_id) -> Money:
    try:
        return Money.objects.get(id=money_id, fiscal_year=fiscal_year)
    except Money.DoesNotExist:
        raise MoneyNotFoundError("Money type not found")


def list_monies(*, rc_id, fy_id, user: User) -> List[Money]:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    return list(fiscal_year.monies.all())


def get_money(*, rc_id, fy_id, money_id, user: User) -> Money:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    return _get_money(fiscal_year, money_id)


@transaction.atomic
def create_money(
    *,
    rc_id,
    fy_id,
    user: User,
    code: str,
    name: str,
    description: str = ''
) -> Money:
    """
    Create a money type (owner only).

    The code is upper-cased and must be unique within the fiscal year. New
    money types are appended after the existing ones.

    Raises:
        FiscalYearAccessDeniedError: If the user is not an owner
        DuplicateMoneyError: If the code is already used
    """
    fiscal_year = get_fiscal_year_for_owner(
        rc_id=rc_id, fy_id=fy_id, user=user, message=OWNER_ONLY_MESSAGE
    )
    code = _clean_code(code)
    name = (name or '').strip()
    if not name:
        raise FiscalYearServiceError("Money name is required")
    _check_unique_code(fiscal_year, code)

    last = fiscal_year.monies.order_by('-display_order').first()
    money = Money.objects.create(
        fiscal_year=fiscal_year,
        code=code,
        name=name,
        description=description or '',
        display_order=(last.display_order + 1) if last else 0,
    )
    logger.info("User %s created money %s in Fiscal Year %s", user.username, code, fiscal_year.id)
    return money


@transaction.atomic
def update_money(*, rc_id, fy_id, money_id, user: User, **fields) -> Money:
    """
    Update a money type (owner only).

    Raises:
        MoneyProtectedError: If the code of the default money would change
        DuplicateMoneyError: If the new code is already used
    """
    fiscal_year = get_fiscal_year_for_owner(
        rc_id=rc_id, fy_id=fy_id, user=user, message=OWNER_ONLY_MESSAGE
    )
    money = _get_money(fiscal_year, money_id)
    money.check_version(fields.get('version'))

    if fields.get('code') is not None:
        code = _clean_code(fields['code'])
        if money.is_default and code != money.code:
            raise MoneyProtectedError("Cannot change the code of the default money (AB)")
        _check_unique_code(fiscal_year, code, exclude_id=money.id)
        money.code = code

    if fields.get('name') is not None:
        name = fields['name'].strip()
        if not name:
            raise FiscalYearServiceError("Money name is required")
        money.name = name

    if fields.get('description') is not None:
        money.description = fields['description']
    if fields.get('active') is not None:
        money.active = fields['active']

    money.save()
    return money


@transaction.atomic
def delete_money(*, rc_id, fy_id, money_id, user: User) -> None:
    """
    Delete a money type (owner only).

    Raises:
        MoneyProtectedError: If it is the default money or items allocate from it
    """
    fiscal_year = get_fiscal_year_for_owner(
        rc_id=rc_id, fy_id=fy_id, user=user, message=OWNER_ONLY_MESSAGE
    )
    money = _get_money(fiscal_year, money_id)

    if money.is_default:
        raise MoneyProtectedError("Cannot delete the default money (AB)")
    if is_money_in_use(money):
        raise MoneyProtectedError(
            f"Cannot delete money {money.code} because it has funding or spending allocations"
        )

    logger.info("User %s deleted money %s from Fiscal Year %s", user.username, money.code, fiscal_year.id)
    money.delete()


@transaction.atomic
def reorder_monies(*, rc_id, fy_id, user: User, money_ids: Sequence[int]) -> List[Money]:
    """Set display order from the position of each id in money_ids (owner only)."""
    fiscal_year = get_fiscal_year_for_owner(
        rc_id=rc_id, fy_id=fy_id, user=user, message=OWNER_ONLY_MESSAGE
    )
    monies = {money.id: money for money in fiscal_year.monies.all()}
    for position, money_id in enumerate(money_ids):
        money = monies.get(money_id)
        if money is None:
            raise MoneyNotFoundError("Money type not found")
        if money.display_order != position:
            money.display_order = position
            money.save(update_fields=['display_order'])
    return list(fiscal_year.monies.all())
