"""User preference services."""

from django.contrib.auth import get_user_model

from apps.accounts.models import Theme
from .exceptions import InvalidThemeError

User = get_user_model()


def update_theme(*, user: User, theme: str) -> User:
    """
    Persist the user's UI theme.

    Raises:
        InvalidThemeError: If theme is not light or dark
    """
    if theme not in Theme.values:
        raise InvalidThemeError(f"Invalid theme: {theme}. Must be one of: {', '.join(Theme.values)}")

    user.theme = theme
    user.save(update_fields=['theme', 'updated_at'])
    return user


def is_username_available(username: str) -> bool:
    username = (username or '').strip()
    if not username:
        return False
    return not User.objects.filter(username__iexact=username).exists()
