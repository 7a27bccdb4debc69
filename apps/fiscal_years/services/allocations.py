"""
Money allocation helpers shared by funding, spending, training and travel.

Allocation payloads are lists of ``{"money_id", "cap_amount", "om_amount"}``
entries. Items always carry one allocation row per money of their fiscal
year; missing entries are stored as zero.
"""

from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Optional

from apps.fiscal_years.models import FiscalYear, Category

from .exceptions import FiscalYearServiceError, MoneyNotFoundError

ZERO = Decimal('0.00')
NO_AMOUNT_MESSAGE = "At least one money type must have a CAP or OM amount greater than $0.00"
NO_OM_AMOUNT_MESSAGE = "At least one money type must have an OM amount greater than $0.00"


def _amount(value, label: str) -> Decimal:
    if value in (None, ''):
        return ZERO
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise FiscalYearServiceError(f"{label} must be a number")
    if amount < 0:
        raise FiscalYearServiceError(f"{label} cannot be negative")
    return amount


def parse_allocations(
    fiscal_year: FiscalYear,
    allocations: Optional[Iterable[dict]],
    *,
    om_only: bool = False,
) -> Dict[int, dict]:
    """
    Validate an allocation payload against the fiscal year's money types.

    Returns:
        Mapping of money id to {'money', 'cap_amount', 'om_amount'}

    Raises:
        MoneyNotFoundError: If a money does not belong to the fiscal year
        FiscalYearServiceError: If an amount is negative or not a number
    """
    monies = {money.id: money for money in fiscal_year.monies.all()}
    parsed = {}
    for entry in allocations or []:
        money_id = entry.get('money_id')
        money = monies.get(int(money_id)) if money_id is not None else None
        if money is None:
            raise MoneyNotFoundError("Money type not found")
        cap = ZERO if om_only else _amount(entry.get('cap_amount'), 'CAP amount')
        om = _amount(entry.get('om_amount'), 'OM amount')
        parsed[money.id] = {'money': money, 'cap_amount': cap, 'om_amount': om}
    return parsed


def require_non_zero(parsed: Dict[int, dict], *, om_only: bool = False) -> None:
    """At least one allocation must hold a positive amount."""
    if any(a['cap_amount'] > 0 or a['om_amount'] > 0 for a in parsed.values()):
        return
    raise FiscalYearServiceError(NO_OM_AMOUNT_MESSAGE if om_only else NO_AMOUNT_MESSAGE)


def check_category_funding(category: Optional[Category], parsed: Dict[int, dict]) -> None:
    """Reject CAP amounts in OM-only categories and OM amounts in CAP-only ones."""
    if category is None:
        return
    for allocation in parsed.values():
        if allocation['cap_amount'] > 0 and not category.allows_cap:
            raise FiscalYearServiceError(f"Category {category.name} does not allow CAP funding")
        if allocation['om_amount'] > 0 and not category.allows_om:
            raise FiscalYearServiceError(f"Category {category.name} does not allow OM funding")


def write_allocations(*, model, owner_field: str, owner, parsed: Dict[int, dict], replace: bool = True) -> list:
    """
    Upsert allocation rows for an item.

    Args:
        model: Allocation model class
        owner_field: Name of the FK from the allocation to the item
        owner: The item
        parsed: Result of parse_allocations
        replace: Reset monies missing from parsed to zero

    Returns:
        The item's allocations ordered like its fiscal year's monies
    """
    has_cap = any(field.name == 'cap_amount' for field in model._meta.get_fields())
    fiscal_year = owner.fiscal_year
    existing = {
        allocation.money_id: allocation
        for allocation in model.objects.filter(**{owner_field: owner})
    }

    for money in fiscal_year.monies.all():
        entry = parsed.get(money.id)
        allocation = existing.get(money.id)
        if entry is None and allocation is not None and not replace:
            continue

        values = {'om_amount': entry['om_amount'] if entry else ZERO}
        if has_cap:
            values['cap_amount'] = entry['cap_amount'] if entry else ZERO

        if allocation is None:
            model.objects.create(**{owner_field: owner}, money=money, **values)
        else:
            changed = [f for f, v in values.items() if getattr(allocation, f) != v]
            for field in changed:
                setattr(allocation, field, values[field])
            if changed:
                allocation.save(update_fields=changed)

    return list(
        model.objects.filter(**{owner_field: owner})
        .select_related('money')
        .order_by('money__display_order', 'money__code')
    )


def allocation_totals(allocations) -> dict:
    cap = sum((getattr(a, 'cap_amount', ZERO) for a in allocations), ZERO)
    om = sum((a.om_amount for a in allocations), ZERO)
    return {'cap_total': cap, 'om_total': om, 'total': cap + om}
