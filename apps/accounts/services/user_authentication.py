"""User authentication service."""

from django.conf import settings
from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.accounts.models import AuthProvider
from .exceptions import InvalidCredentialsError, InactiveAccountError, LoginMethodDisabledError

User = get_user_model()


@transaction.atomic
def authenticate_user(*, username: str, password: str) -> User:
    """
    Authenticate a local user with username and password.

    Uses select_for_update() to prevent race conditions when updating last_login.

    Args:
        username: Login name
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        LoginMethodDisabledError: If local login is switched off
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If account is deactivated
    """
    if not settings.LOGIN_METHODS.get('local', True):
        raise LoginMethodDisabledError("Local login is disabled")

    try:
        user = (
            User.objects
            .select_for_update()
            .get(username=username, auth_provider=AuthProvider.LOCAL)
        )
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid username or password")

    if not user.check_password(password):
        raise InvalidCredentialsError("Invalid username or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user


def get_login_methods() -> dict:
    """Report which login methods are enabled."""
    methods = settings.LOGIN_METHODS
    return {
        'local': bool(methods.get('local', True)),
        'ldap': bool(methods.get('ldap', False)),
        'oauth2': bool(methods.get('oauth2', False)),
    }
