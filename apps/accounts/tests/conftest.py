import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, AuthProvider


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        username='testuser',
        password='TestPass123!',
        email='testuser@example.com',
        full_name='Test User',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        username='inactive',
        password='TestPass123!',
        full_name='Inactive User',
        is_active=False,
    )


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return User.objects.create_user(
        username='otheruser',
        password='OtherPass123!',
        email='otheruser@example.com',
        full_name='Other User',
    )


@pytest.fixture
def ldap_user(db):
    """Create a directory user that belongs to a group and a distribution list."""
    return User.objects.create_user(
        username='jdoe',
        full_name='Jane Doe',
        email='jane.doe@example.com',
        auth_provider=AuthProvider.LDAP,
        external_id='jdoe',
        directory_groups=['finance-team', 'budget-list@example.com'],
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
