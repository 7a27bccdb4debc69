"""
Procurement services layer.

Procurement items, vendor quotes, the event timeline and the link to
spending.
"""

from .exceptions import (
    ProcurementServiceError,
    ProcurementItemNotFoundError,
    QuoteNotFoundError,
    ProcurementEventNotFoundError,
    ProcurementFileNotFoundError,
    DuplicatePurchaseRequisitionError,
    InvalidProcurementStatusError,
    SpendingLinkError,
)

from .items import (
    list_procurement_items,
    get_procurement_item,
    create_procurement_item,
    update_procurement_item,
    delete_procurement_item,
    request_status_change,
)

from .quotes import (
    list_quotes,
    get_quote,
    create_quote,
    update_quote,
    delete_quote,
    select_quote,
    list_quote_files,
    get_quote_file,
    upload_quote_file,
    replace_quote_file,
    delete_quote_file,
)

from .events import (
    list_procurement_events,
    get_procurement_event,
    count_procurement_events,
    get_latest_procurement_event,
    create_procurement_event,
    update_procurement_event,
    delete_procurement_event,
    list_event_files,
    get_event_file,
    upload_event_file,
    update_event_file_description,
    delete_event_file,
)

from .spending_link import toggle_spending_link


__all__ = [
    # Exceptions
    'ProcurementServiceError',
    'ProcurementItemNotFoundError',
    'QuoteNotFoundError',
    'ProcurementEventNotFoundError',
    'ProcurementFileNotFoundError',
    'DuplicatePurchaseRequisitionError',
    'InvalidProcurementStatusError',
    'SpendingLinkError',

    # Procurement items
    'list_procurement_items',
    'get_procurement_item',
    'create_procurement_item',
    'update_procurement_item',
    'delete_procurement_item',
    'request_status_change',

    # Quotes
    'list_quotes',
    'get_quote',
    'create_quote',
    'update_quote',
    'delete_quote',
    'select_quote',
    'list_quote_files',
    'get_quote_file',
    'upload_quote_file',
    'replace_quote_file',
    'delete_quote_file',

    # Events
    'list_procurement_events',
    'get_procurement_event',
    'count_procurement_events',
    'get_latest_procurement_event',
    'create_procurement_event',
    'update_procurement_event',
    'delete_procurement_event',
    'list_event_files',
    'get_event_file',
    'upload_event_file',
    'update_event_file_description',
    'delete_event_file',

    # Spending link
    'toggle_spending_link',
]
