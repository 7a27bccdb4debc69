"""
Custom exceptions for fiscal year services.
"""

from config.exceptions import ServiceError, ServiceAccessDenied, ServiceNotFound


class FiscalYearServiceError(ServiceError):
    """Base exception for fiscal year service errors."""
    pass


class FiscalYearNotFoundError(FiscalYearServiceError):
    """Raised when a fiscal year does not exist in the RC."""
    status_code = ServiceNotFound.status_code


class FiscalYearAccessDeniedError(FiscalYearServiceError):
    """Raised when the user lacks the access level an operation needs."""
    status_code = ServiceAccessDenied.status_code


class DuplicateFiscalYearError(FiscalYearServiceError):
    """Raised when a fiscal year name is already used in the RC."""
    pass


class InvalidDisplaySettingsError(FiscalYearServiceError):
    """Raised when on-target thresholds are inconsistent."""
    pass


class MoneyNotFoundError(FiscalYearServiceError):
    """Raised when a money type does not exist in the fiscal year."""
    status_code = ServiceNotFound.status_code


class DuplicateMoneyError(FiscalYearServiceError):
    """Raised when a money code is already used in the fiscal year."""
    pass


class MoneyProtectedError(FiscalYearServiceError):
    """Raised when the default money would be removed or recoded, or a money is in use."""
    pass


class CategoryNotFoundError(FiscalYearServiceError):
    """Raised when a category does not exist in the fiscal year."""
    status_code = ServiceNotFound.status_code


class DuplicateCategoryError(FiscalYearServiceError):
    """Raised when a category name is already used in the fiscal year."""
    pass


class DefaultCategoryError(FiscalYearServiceError):
    """Raised when a default category would be modified or deleted."""
    pass
