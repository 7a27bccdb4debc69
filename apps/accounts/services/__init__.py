"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    LoginMethodDisabledError,
    InvalidThemeError,
    UserNotFoundError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user, get_login_methods
from .preferences import update_theme, is_username_available
from .directory import (
    search_users,
    search_groups,
    search_distribution_lists,
    find_directory_user,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'LoginMethodDisabledError',
    'InvalidThemeError',
    'UserNotFoundError',
    # Authentication
    'register_user',
    'authenticate_user',
    'get_login_methods',
    # Preferences
    'update_theme',
    'is_username_available',
    # Directory
    'search_users',
    'search_groups',
    'search_distribution_lists',
    'find_directory_user',
]
