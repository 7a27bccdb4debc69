"""
Procurement item service.

Procurement items are soft deleted. Deleting one also deactivates its
quotes, events and any spending item created from it. The workflow status
is tracked through events (see events.py); the status endpoint here only
validates the requested value.
"""

import logging
from typing import List, Optional

from django.db import transaction
from django.db.models import Q

from apps.accounts.models import User
from apps.currencies.services import validate_currency, to_cad
from apps.fiscal_years.services import (
    get_fiscal_year_for_read,
    get_fiscal_year_for_write,
    resolve_category,
)
from apps.procurement.models import ProcurementItem, ProcurementStatus, TrackingStatus, ProcurementType

from .exceptions import (
    ProcurementServiceError,
    ProcurementItemNotFoundError,
    DuplicatePurchaseRequisitionError,
    InvalidProcurementStatusError,
)

logger = logging.getLogger(__name__)

DUPLICATE_PR_MESSAGE = "A procurement item with this PR already exists for this fiscal year"

TEXT_FIELDS = ('purchase_order', 'description', 'vendor', 'contract_number')
OPTIONAL_FIELDS = (
    'contract_start_date',
    'contract_end_date',
    'procurement_completed',
    'procurement_completed_date',
)
# price field -> (currency field, exchange rate field, CAD field)
PRICE_FIELDS = {
    'final_price': ('final_price_currency', 'final_price_exchange_rate', 'final_price_cad'),
    'quoted_price': ('quoted_price_currency', 'quoted_price_exchange_rate', 'quoted_price_cad'),
}


def _queryset():
    return (
        ProcurementItem.objects
        .filter(active=True)
        .select_related('category')
        .prefetch_related('spending_items')
    )


def get_active_procurement_item(fiscal_year, item_id) -> ProcurementItem:
    try:
        return _queryset().get(id=item_id, fiscal_year=fiscal_year)
    except ProcurementItem.DoesNotExist:
        raise ProcurementItemNotFoundError("Procurement item not found")


def validate_procurement_status(status) -> str:
    value = (status or '').strip().upper()
    if value not in ProcurementStatus.values:
        raise InvalidProcurementStatusError(f"Invalid status: {status}")
    return value


def _check_unique_pr(fiscal_year, purchase_requisition, exclude_id=None) -> None:
    if not purchase_requisition:
        return
    queryset = ProcurementItem.objects.filter(
        fiscal_year=fiscal_year, active=True, purchase_requisition=purchase_requisition
    )
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicatePurchaseRequisitionError(DUPLICATE_PR_MESSAGE)


def _apply_price(item, price_field, fields) -> None:
    currency_field, rate_field, cad_field = PRICE_FIELDS[price_field]
    touched = {price_field, currency_field, rate_field} & set(fields)
    if not touched:
        return
    if price_field in fields:
        setattr(item, price_field, fields[price_field])
    currency, rate = validate_currency(
        fields.get(currency_field, getattr(item, currency_field)),
        fields.get(rate_field, getattr(item, rate_field)),
    )
    setattr(item, currency_field, currency)
    setattr(item, rate_field, rate)
    setattr(item, cad_field, to_cad(getattr(item, price_field), currency, rate))


def list_procurement_items(
    *,
    rc_id,
    fy_id,
    user: User,
    status: Optional[str] = None,
    search: Optional[str] = None,
    category_id: Optional[int] = None
) -> List[ProcurementItem]:
    """
    List active procurement items.

    Args:
        status: Only items whose current (event-derived) status matches
        search: Case-insensitive match on name, PR or PO
        category_id: Only items in this category
    """
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    queryset = _queryset().filter(fiscal_year=fiscal_year)

    if search:
        queryset = queryset.filter(
            Q(name__icontains=search)
            | Q(purchase_requisition__icontains=search)
            | Q(purchase_order__icontains=search)
        )
    if category_id is not None:
        queryset = queryset.filter(category_id=category_id)

    items = list(queryset)
    if status:
        wanted = validate_procurement_status(status)
        items = [item for item in items if item.current_status == wanted]
    return items


def get_procurement_item(*, rc_id, fy_id, item_id, user: User) -> ProcurementItem:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    return get_active_procurement_item(fiscal_year, item_id)


@transaction.atomic
def create_procurement_item(*, rc_id, fy_id, user: User, name: str, **fields) -> ProcurementItem:
    """
    Create a procurement item.

    Raises:
        ProcurementServiceError: If the name is missing
        DuplicatePurchaseRequisitionError: If the PR is already used
        CurrencyError: If a price currency or exchange rate is invalid
    """
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)

    name = (name or '').strip()
    if not name:
        raise ProcurementServiceError("Name is required")

    purchase_requisition = (fields.get('purchase_requisition') or '').strip()
    _check_unique_pr(fiscal_year, purchase_requisition)

    item = ProcurementItem(
        fiscal_year=fiscal_year,
        name=name,
        purchase_requisition=purchase_requisition,
        tracking_status=fields.get('tracking_status') or TrackingStatus.ON_TRACK,
        procurement_type=fields.get('procurement_type') or ProcurementType.RC_INITIATED,
        category=resolve_category(fiscal_year, fields.get('category_id')),
    )
    for field in TEXT_FIELDS + OPTIONAL_FIELDS:
        if fields.get(field) is not None:
            setattr(item, field, fields[field])
    for price_field in PRICE_FIELDS:
        _apply_price(item, price_field, fields)
    item.save()

    logger.info("User %s created procurement item %s (%s) in Fiscal Year %s", user.username, name, item.id, fiscal_year.id)
    return item


@transaction.atomic
def update_procurement_item(*, rc_id, fy_id, item_id, user: User, **fields) -> ProcurementItem:
    """Update a procurement item. A category_id of -1 clears the category."""
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_procurement_item(fiscal_year, item_id)
    item.check_version(fields.get('version'))

    if fields.get('name') is not None:
        name = fields['name'].strip()
        if not name:
            raise ProcurementServiceError("Name is required")
        item.name = name

    if fields.get('purchase_requisition') is not None:
        purchase_requisition = fields['purchase_requisition'].strip()
        _check_unique_pr(fiscal_year, purchase_requisition, exclude_id=item.id)
        item.purchase_requisition = purchase_requisition

    for field in TEXT_FIELDS + ('tracking_status', 'procurement_type'):
        if fields.get(field) is not None:
            setattr(item, field, fields[field])
    for field in OPTIONAL_FIELDS:
        if field in fields:
            setattr(item, field, fields[field])
    for price_field in PRICE_FIELDS:
        _apply_price(item, price_field, fields)

    if 'category_id' in fields:
        item.category = resolve_category(fiscal_year, fields['category_id'])

    item.save()
    return item


@transaction.atomic
def delete_procurement_item(*, rc_id, fy_id, item_id, user: User) -> None:
    """Soft delete an item with its quotes, events, files and linked spending items."""
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_procurement_item(fiscal_year, item_id)

    for quote in item.quotes.filter(active=True):
        quote.files.filter(active=True).update(active=False)
    item.quotes.filter(active=True).update(active=False)
    for event in item.events.filter(active=True):
        event.files.filter(active=True).update(active=False)
    item.events.filter(active=True).update(active=False)
    for spending_item in item.spending_items.filter(active=True):
        spending_item.active = False
        spending_item.save(update_fields=['active'])

    item.active = False
    item.save(update_fields=['active'])
    logger.info("User %s deleted procurement item %s (%s)", user.username, item.name, item.id)


def request_status_change(*, rc_id, fy_id, item_id, user: User, status: str) -> ProcurementItem:
    """
    Validate a status for an item without storing it.

    The current status only changes through events carrying a new_status.

    Raises:
        InvalidProcurementStatusError: If the status is unknown
    """
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_procurement_item(fiscal_year, item_id)
    value = validate_procurement_status(status)
    logger.info(
        "Status %s requested for procurement item %s by %s; status is tracked through events",
        value, item.id, user.username,
    )
    return item
