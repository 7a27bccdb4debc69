"""
Custom exceptions for funding services.
"""

from config.exceptions import ServiceError, ServiceNotFound


class FundingServiceError(ServiceError):
    """Base exception for funding service errors."""
    pass


class FundingItemNotFoundError(FundingServiceError):
    """Raised when a funding item does not exist in the fiscal year."""
    status_code = ServiceNotFound.status_code


class DuplicateFundingItemError(FundingServiceError):
    """Raised when a funding item name is already used in the fiscal year."""
    pass
