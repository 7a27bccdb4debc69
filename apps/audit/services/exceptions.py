"""Domain-specific exceptions for audit services."""

from rest_framework import status

from config.exceptions import ServiceError


class AuditServiceError(ServiceError):
    """Base exception for audit services."""
    pass


class AuditAccessDeniedError(AuditServiceError):
    """Raised when a non-owner asks for audit data."""
    status_code = status.HTTP_403_FORBIDDEN
