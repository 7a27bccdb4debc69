"""
Custom exceptions for spending services.
"""

from config.exceptions import ServiceError, ServiceNotFound


class SpendingServiceError(ServiceError):
    """Base exception for spending service errors."""
    pass


class SpendingItemNotFoundError(SpendingServiceError):
    """Raised when a spending item does not exist or was deleted."""
    status_code = ServiceNotFound.status_code


class SpendingEventNotFoundError(SpendingServiceError):
    status_code = ServiceNotFound.status_code


class InvoiceNotFoundError(SpendingServiceError):
    status_code = ServiceNotFound.status_code


class InvoiceFileNotFoundError(SpendingServiceError):
    status_code = ServiceNotFound.status_code


class InvalidSpendingStatusError(SpendingServiceError):
    """Raised when a status or event type is not recognised."""
    pass


class LinkedSpendingItemError(SpendingServiceError):
    """Raised when an operation is not allowed on a procurement-linked item."""
    pass
