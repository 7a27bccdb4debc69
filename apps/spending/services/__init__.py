"""
Spending services layer.

Spending items with their allocations, tracking events and invoices.
"""

from .exceptions import (
    SpendingServiceError,
    SpendingItemNotFoundError,
    SpendingEventNotFoundError,
    InvoiceNotFoundError,
    InvoiceFileNotFoundError,
    InvalidSpendingStatusError,
    LinkedSpendingItemError,
)

from .items import (
    list_spending_items,
    get_spending_item,
    create_spending_item,
    update_spending_item,
    delete_spending_item,
    update_spending_status,
    get_spending_allocations,
    update_spending_allocations,
)

from .events import (
    list_spending_events,
    get_spending_event,
    count_spending_events,
    get_latest_spending_event,
    create_spending_event,
    update_spending_event,
    delete_spending_event,
)

from .invoices import (
    list_invoices,
    get_invoice,
    create_invoice,
    update_invoice,
    delete_invoice,
    list_invoice_files,
    get_invoice_file,
    upload_invoice_file,
    replace_invoice_file,
    delete_invoice_file,
)


__all__ = [
    # Exceptions
    'SpendingServiceError',
    'SpendingItemNotFoundError',
    'SpendingEventNotFoundError',
    'InvoiceNotFoundError',
    'InvoiceFileNotFoundError',
    'InvalidSpendingStatusError',
    'LinkedSpendingItemError',

    # Spending items
    'list_spending_items',
    'get_spending_item',
    'create_spending_item',
    'update_spending_item',
    'delete_spending_item',
    'update_spending_status',
    'get_spending_allocations',
    'update_spending_allocations',

    # Events
    'list_spending_events',
    'get_spending_event',
    'count_spending_events',
    'get_latest_spending_event',
    'create_spending_event',
    'update_spending_event',
    'delete_spending_event',

    # Invoices
    'list_invoices',
    'get_invoice',
    'create_invoice',
    'update_invoice',
    'delete_invoice',
    'list_invoice_files',
    'get_invoice_file',
    'upload_invoice_file',
    'replace_invoice_file',
    'delete_invoice_file',
]
