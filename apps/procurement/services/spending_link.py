"""
Link between a procurement item and the spending item created from it.
"""

import logging

from django.db import transaction

from apps.accounts.models import User
from apps.fiscal_years.services import get_fiscal_year_for_write
from apps.fiscal_years.services.allocations import write_allocations
from apps.procurement.models import TrackingStatus
from apps.spending.models import SpendingItem, SpendingMoneyAllocation, SpendingStatus

from .exceptions import SpendingLinkError
from .items import get_active_procurement_item

logger = logging.getLogger(__name__)

MODIFIED_WARNING = "The linked spending item has been modified. Are you sure you want to unlink it?"


def _was_modified(spending_item) -> bool:
    return spending_item.version > 0


@transaction.atomic
def toggle_spending_link(*, rc_id, fy_id, item_id, user: User, force: bool = False) -> dict:
    """
    Create a spending item from a procurement item, or remove the link.

    When no active spending item is linked, one is created from the item's
    name, vendor, PO and price (final price, else quoted price). Otherwise the
    linked spending item is soft deleted. A linked item that was edited after
    creation is only unlinked when force is set; without it a warning is
    returned and nothing changes.

    Returns:
        Dict with 'procurement_item', 'spending_linked', 'has_warning' and
        'warning_message'

    Raises:
        SpendingLinkError: If the procurement item is cancelled
    """
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_procurement_item(fiscal_year, item_id)

    if item.tracking_status == TrackingStatus.CANCELLED:
        raise SpendingLinkError("Cannot link a cancelled procurement item to spending")

    linked = list(item.spending_items.filter(active=True).order_by('id'))

    if not linked:
        use_final = item.final_price is not None
        spending_item = SpendingItem.objects.create(
            fiscal_year=fiscal_year,
            name=item.name,
            description=item.description,
            vendor=item.vendor,
            reference_number=item.purchase_order,
            category=item.category,
            procurement_item=item,
            status=SpendingStatus.DRAFT,
            currency=item.final_price_currency if use_final else item.quoted_price_currency,
            exchange_rate=item.final_price_exchange_rate if use_final else item.quoted_price_exchange_rate,
            amount=item.final_price if use_final else item.quoted_price,
        )
        write_allocations(
            model=SpendingMoneyAllocation, owner_field='spending_item', owner=spending_item, parsed={}
        )
        logger.info("User %s created spending item %s from procurement item %s", user.username, spending_item.id, item.id)
        return _result(get_active_procurement_item(fiscal_year, item.id), linked=True)

    spending_item = linked[0]
    if _was_modified(spending_item) and not force:
        return _result(item, linked=True, warning=MODIFIED_WARNING)

    spending_item.active = False
    spending_item.save(update_fields=['active'])
    logger.info("User %s unlinked spending item %s from procurement item %s", user.username, spending_item.id, item.id)
    return _result(get_active_procurement_item(fiscal_year, item.id), linked=False)


def _result(item, *, linked: bool, warning: str = None) -> dict:
    return {
        'procurement_item': item,
        'spending_linked': linked,
        'has_warning': warning is not None,
        'warning_message': warning,
    }
