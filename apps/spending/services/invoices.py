"""
Spending invoice service.

Invoices record what was billed against a spending item. The CAD amount is
derived from the amount and exchange rate on every save. Attached files are
stored in the database.
"""

import logging
from typing import List

from django.db import transaction

from apps.accounts.models import User
from apps.core.files import read_upload
from apps.currencies.services import validate_currency, to_cad
from apps.fiscal_years.services import get_fiscal_year_for_read, get_fiscal_year_for_write
from apps.spending.models import SpendingInvoice, SpendingInvoiceFile

from .exceptions import SpendingServiceError, InvoiceNotFoundError, InvoiceFileNotFoundError
from .items import get_active_item

logger = logging.getLogger(__name__)

INVOICE_FIELDS = ('invoice_number', 'date_received', 'date_processed', 'comment')


def _get_invoice(item, invoice_id) -> SpendingInvoice:
    try:
        return item.invoices.filter(active=True).get(id=invoice_id)
    except SpendingInvoice.DoesNotExist:
        raise InvoiceNotFoundError("Invoice not found")


def _get_file(invoice, file_id) -> SpendingInvoiceFile:
    try:
        return invoice.files.filter(active=True).get(id=file_id)
    except SpendingInvoiceFile.DoesNotExist:
        raise InvoiceFileNotFoundError("File not found")


def _invoice_for(*, rc_id, fy_id, item_id, invoice_id, user, write=False) -> SpendingInvoice:
    lookup = get_fiscal_year_for_write if write else get_fiscal_year_for_read
    fiscal_year = lookup(rc_id=rc_id, fy_id=fy_id, user=user)
    return _get_invoice(get_active_item(fiscal_year, item_id), invoice_id)


def list_invoices(*, rc_id, fy_id, item_id, user: User) -> List[SpendingInvoice]:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_item(fiscal_year, item_id)
    return list(item.invoices.filter(active=True).prefetch_related('files'))


def get_invoice(*, rc_id, fy_id, item_id, invoice_id, user: User) -> SpendingInvoice:
    return _invoice_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=invoice_id, user=user)


@transaction.atomic
def create_invoice(*, rc_id, fy_id, item_id, user: User, amount, currency: str = None, exchange_rate=None, **fields) -> SpendingInvoice:
    """
    Record an invoice against a spending item.

    Raises:
        SpendingServiceError: If the amount is missing
        CurrencyError: If the currency or exchange rate is invalid
    """
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    item = get_active_item(fiscal_year, item_id)

    if amount is None:
        raise SpendingServiceError("Invoice amount is required")
    currency, exchange_rate = validate_currency(currency, exchange_rate)

    invoice = SpendingInvoice(
        spending_item=item,
        amount=amount,
        currency=currency,
        exchange_rate=exchange_rate,
        amount_cad=to_cad(amount, currency, exchange_rate),
        created_by=user,
        modified_by=user,
    )
    for field in INVOICE_FIELDS:
        if fields.get(field) is not None:
            setattr(invoice, field, fields[field])
    invoice.save()

    logger.info("User %s added invoice %s to spending item %s", user.username, invoice.id, item.id)
    return invoice


@transaction.atomic
def update_invoice(*, rc_id, fy_id, item_id, invoice_id, user: User, **fields) -> SpendingInvoice:
    invoice = _invoice_for(
        rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=invoice_id, user=user, write=True
    )

    for field in ('invoice_number', 'comment'):
        if fields.get(field) is not None:
            setattr(invoice, field, fields[field])
    for field in ('date_received', 'date_processed'):
        if field in fields:
            setattr(invoice, field, fields[field])

    if fields.get('amount') is not None:
        invoice.amount = fields['amount']
    if 'currency' in fields or 'exchange_rate' in fields:
        invoice.currency, invoice.exchange_rate = validate_currency(
            fields.get('currency', invoice.currency),
            fields.get('exchange_rate', invoice.exchange_rate),
        )

    invoice.amount_cad = to_cad(invoice.amount, invoice.currency, invoice.exchange_rate)
    invoice.modified_by = user
    invoice.save()
    return invoice


@transaction.atomic
def delete_invoice(*, rc_id, fy_id, item_id, invoice_id, user: User) -> None:
    """Soft delete an invoice together with its files."""
    invoice = _invoice_for(
        rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=invoice_id, user=user, write=True
    )
    invoice.files.filter(active=True).update(active=False)
    invoice.active = False
    invoice.modified_by = user
    invoice.save(update_fields=['active', 'modified_by', 'updated_at'])


# =============================================================================
# Files
# =============================================================================

def list_invoice_files(*, rc_id, fy_id, item_id, invoice_id, user: User) -> List[SpendingInvoiceFile]:
    invoice = _invoice_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=invoice_id, user=user)
    return list(invoice.files.filter(active=True).defer('content'))


def get_invoice_file(*, rc_id, fy_id, item_id, invoice_id, file_id, user: User) -> SpendingInvoiceFile:
    invoice = _invoice_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=invoice_id, user=user)
    return _get_file(invoice, file_id)


@transaction.atomic
def upload_invoice_file(*, rc_id, fy_id, item_id, invoice_id, user: User, uploaded_file, description: str = '') -> SpendingInvoiceFile:
    """
    Attach a file to an invoice.

    Raises:
        ServiceValidationError: If the file is empty, too large or of a
            type that is not allowed
    """
    invoice = _invoice_for(
        rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=invoice_id, user=user, write=True
    )
    file_name, content_type, file_size, content = read_upload(uploaded_file)

    stored = SpendingInvoiceFile.objects.create(
        invoice=invoice,
        file_name=file_name,
        content_type=content_type,
        file_size=file_size,
        content=content,
        description=description or '',
    )
    logger.info("User %s uploaded %s to invoice %s", user.username, file_name, invoice.id)
    return stored


@transaction.atomic
def replace_invoice_file(*, rc_id, fy_id, item_id, invoice_id, file_id, user: User, uploaded_file, description: str = None) -> SpendingInvoiceFile:
    """Swap the content of an attached file, keeping its id."""
    invoice = _invoice_for(
        rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=invoice_id, user=user, write=True
    )
    stored = _get_file(invoice, file_id)
    stored.file_name, stored.content_type, stored.file_size, stored.content = read_upload(uploaded_file)
    if description is not None:
        stored.description = description
    stored.save()
    return stored


@transaction.atomic
def delete_invoice_file(*, rc_id, fy_id, item_id, invoice_id, file_id, user: User) -> None:
    """Soft delete an attached file."""
    invoice = _invoice_for(
        rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=invoice_id, user=user, write=True
    )
    stored = _get_file(invoice, file_id)
    stored.active = False
    stored.save(update_fields=['active', 'updated_at'])
