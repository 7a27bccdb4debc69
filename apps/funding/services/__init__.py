"""
Funding services layer.
"""

from .exceptions import (
    FundingServiceError,
    FundingItemNotFoundError,
    DuplicateFundingItemError,
)

from .funding_items import (
    list_funding_items,
    get_funding_item,
    create_funding_item,
    update_funding_item,
    delete_funding_item,
)


__all__ = [
    # Exceptions
    'FundingServiceError',
    'FundingItemNotFoundError',
    'DuplicateFundingItemError',

    # Funding items
    'list_funding_items',
    'get_funding_item',
    'create_funding_item',
    'update_funding_item',
    'delete_funding_item',
]
