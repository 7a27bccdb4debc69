"""
Deep cloning of fiscal years.

A clone copies the fiscal year with its money types and categories and
every item tracked in it: procurement (quotes, events, files), funding,
spending (allocations, events, invoices, files), training and travel.
Inactive rows are copied too and keep their active flag. References between
copied rows (money, category, procurement item) are remapped onto the
clone. Finally the fiscal year's audit history is copied.
"""

import logging

from django.db import transaction

from apps.accounts.models import User
from apps.fiscal_years.models import FiscalYear
from apps.rcs.services import permissions as rc_permissions

from .exceptions import FiscalYearServiceError
from .fiscal_year_management import check_unique_name
from .lookups import get_fiscal_year_for_read

logger = logging.getLogger(__name__)

# Fresh rows get their own timestamps and start at version 0
SKIPPED_FIELDS = {'id', 'created_at', 'updated_at', 'version'}


def _copied_fields(model):
    return [field for field in model._meta.concrete_fields if field.name not in SKIPPED_FIELDS]


def _copy(instance, **overrides):
    """Save a copy of a model row; overrides use attnames (e.g. fiscal_year_id)."""
    model = type(instance)
    values = {field.attname: getattr(instance, field.attname) for field in _copied_fields(model)}
    values.update(overrides)
    return model.objects.create(**values)


def _remap(mapping: dict, old_id):
    return mapping.get(old_id) if old_id is not None else None


def _clone_allocations(allocations, owner_field: str, owner, money_map: dict) -> None:
    for allocation in allocations:
        _copy(allocation, **{f'{owner_field}_id': owner.id, 'money_id': money_map[allocation.money_id]})


def _clone_procurement(source: FiscalYear, target: FiscalYear, category_map: dict) -> dict:
    from apps.procurement.models import ProcurementItem

    item_map = {}
    items = ProcurementItem.objects.filter(fiscal_year=source).prefetch_related(
        'quotes__files', 'events__files'
    )
    for item in items:
        clone = _copy(item, fiscal_year_id=target.id, category_id=_remap(category_map, item.category_id))
        item_map[item.id] = clone.id
        for quote in item.quotes.all():
            quote_clone = _copy(quote, procurement_item_id=clone.id)
            for stored in quote.files.all():
                _copy(stored, quote_id=quote_clone.id)
        for event in item.events.all():
            event_clone = _copy(event, procurement_item_id=clone.id)
            for stored in event.files.all():
                _copy(stored, event_id=event_clone.id)
    return item_map


def _clone_funding(source: FiscalYear, target: FiscalYear, money_map: dict, category_map: dict) -> int:
    from apps.funding.models import FundingItem

    items = FundingItem.objects.filter(fiscal_year=source).prefetch_related('allocations')
    for item in items:
        clone = _copy(item, fiscal_year_id=target.id, category_id=_remap(category_map, item.category_id))
        _clone_allocations(item.allocations.all(), 'funding_item', clone, money_map)
    return len(items)


def _clone_spending(source: FiscalYear, target: FiscalYear, money_map: dict, category_map: dict,
                    procurement_map: dict) -> int:
    from apps.spending.models import SpendingItem

    items = SpendingItem.objects.filter(fiscal_year=source).prefetch_related(
        'allocations', 'events', 'invoices__files'
    )
    for item in items:
        clone = _copy(
            item,
            fiscal_year_id=target.id,
            category_id=_remap(category_map, item.category_id),
            procurement_item_id=_remap(procurement_map, item.procurement_item_id),
        )
        _clone_allocations(item.allocations.all(), 'spending_item', clone, money_map)
        for event in item.events.all():
            _copy(event, spending_item_id=clone.id)
        for invoice in item.invoices.all():
            invoice_clone = _copy(invoice, spending_item_id=clone.id)
            for stored in invoice.files.all():
                _copy(stored, invoice_id=invoice_clone.id)
    return len(items)


def _clone_training(source: FiscalYear, target: FiscalYear, money_map: dict) -> int:
    from apps.training.models import TrainingItem

    items = TrainingItem.objects.filter(fiscal_year=source).prefetch_related('participants', 'allocations')
    for item in items:
        clone = _copy(item, fiscal_year_id=target.id)
        for participant in item.participants.all():
            _copy(participant, training_item_id=clone.id)
        _clone_allocations(item.allocations.all(), 'training_item', clone, money_map)
    return len(items)


def _clone_travel(source: FiscalYear, target: FiscalYear, money_map: dict) -> int:
    from apps.travel.models import TravelItem

    items = TravelItem.objects.filter(fiscal_year=source).prefetch_related('travellers', 'allocations')
    for item in items:
        clone = _copy(item, fiscal_year_id=target.id)
        for traveller in item.travellers.all():
            _copy(traveller, travel_item_id=clone.id)
        _clone_allocations(item.allocations.all(), 'travel_item', clone, money_map)
    return len(items)


@transaction.atomic
def deep_clone_fiscal_year(*, source: FiscalYear, target_rc, new_name: str) -> FiscalYear:
    """
    Copy a fiscal year and everything in it into target_rc.

    Name uniqueness and access are checked by the callers.

    Returns:
        The new fiscal year
    """
    from apps.audit.services import clone_audit_events_for_fiscal_year

    target = _copy(source, responsibility_centre_id=target_rc.id, name=new_name)

    money_map = {money.id: _copy(money, fiscal_year_id=target.id).id for money in source.monies.all()}
    category_map = {
        category.id: _copy(category, fiscal_year_id=target.id).id
        for category in source.categories.all()
    }

    procurement_map = _clone_procurement(source, target, category_map)
    funding_count = _clone_funding(source, target, money_map, category_map)
    spending_count = _clone_spending(source, target, money_map, category_map, procurement_map)
    training_count = _clone_training(source, target, money_map)
    travel_count = _clone_travel(source, target, money_map)

    clone_audit_events_for_fiscal_year(source_fiscal_year=source, target_fiscal_year=target)

    logger.info(
        "Cloned Fiscal Year %s into %s (RC %s): %d monies, %d categories, %d procurement, "
        "%d funding, %d spending, %d training, %d travel items",
        source.id, target.id, target_rc.id, len(money_map), len(category_map), len(procurement_map),
        funding_count, spending_count, training_count, travel_count,
    )
    return target


def _clean_name(new_name: str) -> str:
    name = (new_name or '').strip()
    if not name:
        raise FiscalYearServiceError("New fiscal year name is required")
    return name


@transaction.atomic
def clone_fiscal_year(*, rc_id, fy_id, user: User, new_name: str) -> FiscalYear:
    """
    Clone a fiscal year within its Responsibility Centre.

    Raises:
        FiscalYearServiceError: If the new name is empty
        DuplicateFiscalYearError: If the name is already used in the RC
        RCAccessDeniedError: If the user cannot read the RC
    """
    source = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    rc = source.responsibility_centre

    name = _clean_name(new_name)
    check_unique_name(rc, name)

    clone = deep_clone_fiscal_year(source=source, target_rc=rc, new_name=name)
    logger.info("User %s cloned Fiscal Year %s as %s", user.username, source.id, clone.id)
    return clone


@transaction.atomic
def clone_fiscal_year_to_rc(*, source_rc_id, fy_id, target_rc_id, user: User, new_name: str) -> FiscalYear:
    """
    Clone a fiscal year into another Responsibility Centre.

    Read access on the source RC and write access on the target RC are
    required.
    """
    source = get_fiscal_year_for_read(rc_id=source_rc_id, fy_id=fy_id, user=user)
    target_rc = rc_permissions.require_write_access(rc_id=target_rc_id, user=user)

    name = _clean_name(new_name)
    check_unique_name(target_rc, name)

    clone = deep_clone_fiscal_year(source=source, target_rc=target_rc, new_name=name)
    logger.info(
        "User %s cloned Fiscal Year %s from RC %s into RC %s as %s",
        user.username, source.id, source_rc_id, target_rc_id, clone.id,
    )
    return clone
