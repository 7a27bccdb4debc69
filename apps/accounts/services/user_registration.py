"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import AuthProvider
from .exceptions import UserRegistrationError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    username: str,
    password: str,
    email: str = None,
    full_name: str = ""
) -> User:
    """
    Register a new local user.

    Args:
        username: Login name (unique)
        password: User's password (will be hashed)
        email: Optional email address (unique when given)
        full_name: Optional full name

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the username or email is taken
    """
    username = (username or '').strip()
    if not username:
        raise UserRegistrationError("Username is required")

    if User.objects.filter(username__iexact=username).exists():
        raise UserRegistrationError("Username already exists")

    if email and User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("Email already exists")

    try:
        user = User.objects.create_user(
            username=username,
            password=password,
            email=email or None,
            full_name=full_name or '',
            auth_provider=AuthProvider.LOCAL,
        )
    except IntegrityError:
        raise UserRegistrationError("Username already exists")

    logger.info("Registered local user %s", user.username)
    return user
