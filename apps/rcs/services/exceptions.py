"""
Domain-specific exceptions for Responsibility Centre services.

These exceptions represent business rule violations. The API exception
handler converts them to JSON error responses using their status_code.
"""

from rest_framework import status

from config.exceptions import ServiceError


class RCServiceError(ServiceError):
    """Base exception for all Responsibility Centre service errors."""
    pass


class RCNotFoundError(RCServiceError):
    """Raised when an RC does not exist or is not visible to the user."""
    status_code = status.HTTP_404_NOT_FOUND


class RCAccessDeniedError(RCServiceError):
    """Raised when the user lacks the access level an operation needs."""
    status_code = status.HTTP_403_FORBIDDEN


class DuplicateRCNameError(RCServiceError):
    """Raised when an RC name is already taken."""
    pass


class PermissionNotFoundError(RCServiceError):
    """Raised when an access grant does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


class DemoRCModificationError(RCServiceError):
    """Raised when sharing of the Demo RC is changed."""
    pass


class PrincipalNotFoundError(RCServiceError):
    """Raised when a user principal cannot be found in the directory."""
    pass


class DuplicateGrantError(RCServiceError):
    """Raised when a principal already holds a grant on the RC."""
    pass


class InvalidPermissionChangeError(RCServiceError):
    """Raised when a grant change would break ownership rules."""
    pass
