"""
Travel services layer.
"""

from .exceptions import (
    TravelServiceError,
    TravelItemNotFoundError,
    TravellerNotFoundError,
    DuplicateTravelItemError,
    InvalidTravelValueError,
)

from .items import (
    list_travel_items,
    get_travel_item,
    create_travel_item,
    update_travel_item,
    delete_travel_item,
    update_travel_status,
    get_travel_allocations,
    update_travel_allocations,
)

from .travellers import (
    list_travellers,
    add_traveller,
    update_traveller,
    delete_traveller,
)


__all__ = [
    # Exceptions
    'TravelServiceError',
    'TravelItemNotFoundError',
    'TravellerNotFoundError',
    'DuplicateTravelItemError',
    'InvalidTravelValueError',

    # Travel items
    'list_travel_items',
    'get_travel_item',
    'create_travel_item',
    'update_travel_item',
    'delete_travel_item',
    'update_travel_status',
    'get_travel_allocations',
    'update_travel_allocations',

    # Travellers
    'list_travellers',
    'add_traveller',
    'update_traveller',
    'delete_traveller',
]
