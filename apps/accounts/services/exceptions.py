"""Domain-specific exceptions for accounts services."""

from rest_framework import status

from config.exceptions import ServiceError


class AccountsServiceError(ServiceError):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    status_code = status.HTTP_401_UNAUTHORIZED


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    status_code = status.HTTP_403_FORBIDDEN


class LoginMethodDisabledError(AccountsServiceError):
    """Raised when a login method is switched off in configuration."""
    status_code = status.HTTP_403_FORBIDDEN


class InvalidThemeError(AccountsServiceError):
    """Raised when an unknown UI theme is requested."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
