"""
Custom exceptions for procurement services.
"""

from config.exceptions import ServiceError, ServiceNotFound


class ProcurementServiceError(ServiceError):
    """Base exception for procurement service errors."""
    pass


class ProcurementItemNotFoundError(ProcurementServiceError):
    """Raised when a procurement item does not exist or was deleted."""
    status_code = ServiceNotFound.status_code


class QuoteNotFoundError(ProcurementServiceError):
    status_code = ServiceNotFound.status_code


class ProcurementEventNotFoundError(ProcurementServiceError):
    status_code = ServiceNotFound.status_code


class ProcurementFileNotFoundError(ProcurementServiceError):
    status_code = ServiceNotFound.status_code


class DuplicatePurchaseRequisitionError(ProcurementServiceError):
    """Raised when a PR number is already used by an active item of the fiscal year."""
    pass


class InvalidProcurementStatusError(ProcurementServiceError):
    """Raised when a status or event type is not recognised."""
    pass


class SpendingLinkError(ProcurementServiceError):
    """Raised when a procurement item cannot be linked to spending."""
    pass
