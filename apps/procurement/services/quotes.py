"""
Procurement quote service.

Quotes belong to a procurement item. At most one quote per item is
selected; selecting another rejects the previous one.
"""

import logging
from typing import List

from django.db import transaction

from apps.accounts.models import User
from apps.core.files import read_upload
from apps.currencies.services import validate_currency, to_cad
from apps.fiscal_years.services import get_fiscal_year_for_read, get_fiscal_year_for_write
from apps.procurement.models import ProcurementQuote, ProcurementQuoteFile, QuoteStatus

from .exceptions import ProcurementServiceError, QuoteNotFoundError, ProcurementFileNotFoundError
from .items import get_active_procurement_item

logger = logging.getLogger(__name__)

TEXT_FIELDS = ('vendor_contact', 'quote_reference', 'notes')
OPTIONAL_FIELDS = ('amount', 'amount_cap', 'amount_om', 'received_date', 'expiry_date')


def _item_for(*, rc_id, fy_id, item_id, user, write=False):
    lookup = get_fiscal_year_for_write if write else get_fiscal_year_for_read
    fiscal_year = lookup(rc_id=rc_id, fy_id=fy_id, user=user)
    return get_active_procurement_item(fiscal_year, item_id)


def _get_quote(item, quote_id) -> ProcurementQuote:
    try:
        return item.quotes.filter(active=True).get(id=quote_id)
    except ProcurementQuote.DoesNotExist:
        raise QuoteNotFoundError("Quote not found")


def _quote_for(*, rc_id, fy_id, item_id, quote_id, user, write=False) -> ProcurementQuote:
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user, write=write)
    return _get_quote(item, quote_id)


def _refresh_cad(quote) -> None:
    quote.amount_cap_cad = to_cad(quote.amount_cap, quote.currency, quote.exchange_rate)
    quote.amount_om_cad = to_cad(quote.amount_om, quote.currency, quote.exchange_rate)


def list_quotes(*, rc_id, fy_id, item_id, user: User) -> List[ProcurementQuote]:
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user)
    return list(item.quotes.filter(active=True).prefetch_related('files'))


def get_quote(*, rc_id, fy_id, item_id, quote_id, user: User) -> ProcurementQuote:
    return _quote_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=quote_id, user=user)


@transaction.atomic
def create_quote(
    *,
    rc_id,
    fy_id,
    item_id,
    user: User,
    vendor_name: str,
    currency: str = None,
    exchange_rate=None,
    **fields
) -> ProcurementQuote:
    """
    Add a vendor quote to a procurement item.

    Raises:
        ProcurementServiceError: If the vendor name is missing
        CurrencyError: If the currency or exchange rate is invalid
    """
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user, write=True)

    vendor_name = (vendor_name or '').strip()
    if not vendor_name:
        raise ProcurementServiceError("Vendor name is required")
    currency, exchange_rate = validate_currency(currency, exchange_rate)

    quote = ProcurementQuote(
        procurement_item=item,
        vendor_name=vendor_name,
        currency=currency,
        exchange_rate=exchange_rate,
        status=fields.get('status') or QuoteStatus.PENDING,
        created_by=user,
        modified_by=user,
    )
    for field in TEXT_FIELDS + OPTIONAL_FIELDS:
        if fields.get(field) is not None:
            setattr(quote, field, fields[field])
    _refresh_cad(quote)
    quote.save()

    logger.info("User %s added quote from %s to procurement item %s", user.username, vendor_name, item.id)
    return quote


@transaction.atomic
def update_quote(*, rc_id, fy_id, item_id, quote_id, user: User, **fields) -> ProcurementQuote:
    quote = _quote_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=quote_id, user=user, write=True)

    if fields.get('vendor_name') is not None:
        vendor_name = fields['vendor_name'].strip()
        if not vendor_name:
            raise ProcurementServiceError("Vendor name is required")
        quote.vendor_name = vendor_name

    for field in TEXT_FIELDS + ('status',):
        if fields.get(field) is not None:
            setattr(quote, field, fields[field])
    for field in OPTIONAL_FIELDS:
        if field in fields:
            setattr(quote, field, fields[field])

    if 'currency' in fields or 'exchange_rate' in fields:
        quote.currency, quote.exchange_rate = validate_currency(
            fields.get('currency', quote.currency),
            fields.get('exchange_rate', quote.exchange_rate),
        )

    _refresh_cad(quote)
    quote.modified_by = user
    quote.save()
    return quote


@transaction.atomic
def delete_quote(*, rc_id, fy_id, item_id, quote_id, user: User) -> None:
    """Soft delete a quote and its files."""
    quote = _quote_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=quote_id, user=user, write=True)
    quote.files.filter(active=True).update(active=False)
    quote.active = False
    quote.selected = False
    quote.modified_by = user
    quote.save(update_fields=['active', 'selected', 'modified_by', 'updated_at'])


@transaction.atomic
def select_quote(*, rc_id, fy_id, item_id, quote_id, user: User) -> ProcurementQuote:
    """Mark a quote SELECTED; a previously selected quote becomes REJECTED."""
    quote = _quote_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=quote_id, user=user, write=True)

    previous = (
        ProcurementQuote.objects
        .select_for_update()
        .filter(procurement_item_id=quote.procurement_item_id, selected=True, active=True)
        .exclude(id=quote.id)
    )
    for other in previous:
        other.selected = False
        other.status = QuoteStatus.REJECTED
        other.modified_by = user
        other.save(update_fields=['selected', 'status', 'modified_by', 'updated_at'])

    quote.selected = True
    quote.status = QuoteStatus.SELECTED
    quote.modified_by = user
    quote.save(update_fields=['selected', 'status', 'modified_by', 'updated_at'])

    logger.info("User %s selected quote %s for procurement item %s", user.username, quote.id, quote.procurement_item_id)
    return quote


# =============================================================================
# Files
# =============================================================================

def _get_file(quote, file_id) -> ProcurementQuoteFile:
    try:
        return quote.files.filter(active=True).get(id=file_id)
    except ProcurementQuoteFile.DoesNotExist:
        raise ProcurementFileNotFoundError("File not found")


def list_quote_files(*, rc_id, fy_id, item_id, quote_id, user: User) -> List[ProcurementQuoteFile]:
    quote = _quote_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=quote_id, user=user)
    return list(quote.files.filter(active=True).defer('content'))


def get_quote_file(*, rc_id, fy_id, item_id, quote_id, file_id, user: User) -> ProcurementQuoteFile:
    quote = _quote_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=quote_id, user=user)
    return _get_file(quote, file_id)


@transaction.atomic
def upload_quote_file(*, rc_id, fy_id, item_id, quote_id, user: User, uploaded_file, description: str = '') -> ProcurementQuoteFile:
    """Attach a document, image or spreadsheet to a quote."""
    quote = _quote_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=quote_id, user=user, write=True)
    file_name, content_type, file_size, content = read_upload(uploaded_file)

    stored = ProcurementQuoteFile.objects.create(
        quote=quote,
        file_name=file_name,
        content_type=content_type,
        file_size=file_size,
        content=content,
        description=description or '',
    )
    logger.info("User %s uploaded %s to quote %s", user.username, file_name, quote.id)
    return stored


@transaction.atomic
def replace_quote_file(*, rc_id, fy_id, item_id, quote_id, file_id, user: User, uploaded_file, description: str = None) -> ProcurementQuoteFile:
    quote = _quote_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=quote_id, user=user, write=True)
    stored = _get_file(quote, file_id)
    stored.file_name, stored.content_type, stored.file_size, stored.content = read_upload(uploaded_file)
    if description is not None:
        stored.description = description
    stored.save()
    return stored


@transaction.atomic
def delete_quote_file(*, rc_id, fy_id, item_id, quote_id, file_id, user: User) -> None:
    quote = _quote_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=quote_id, user=user, write=True)
    stored = _get_file(quote, file_id)
    stored.active = False
    stored.save(update_fields=['active', 'updated_at'])
