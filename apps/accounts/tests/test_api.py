import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new user."""
        url = reverse('users:register')
        data = {
            'username': 'newuser',
            'email': 'newuser@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'full_name': 'New User',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['username'] == 'newuser'
        assert User.objects.filter(username='newuser').exists()

    def test_register_without_email(self, api_client):
        """Email and full name are optional."""
        url = reverse('users:register')
        data = {
            'username': 'minimal',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.get(username='minimal').email is None

    def test_register_duplicate_username(self, api_client, user):
        """Cannot register with an existing username."""
        url = reverse('users:register')
        data = {
            'username': 'TestUser',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Username already exists'

    def test_register_duplicate_email(self, api_client, user):
        """Cannot register with an existing email."""
        url = reverse('users:register')
        data = {
            'username': 'another',
            'email': user.email,
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Email already exists'

    def test_register_password_mismatch(self, api_client):
        """Registration fails when passwords don't match."""
        url = reverse('users:register')
        data = {
            'username': 'mismatch',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data['details']

    def test_register_weak_password(self, api_client):
        """Registration fails with weak password."""
        url = reverse('users:register')
        data = {
            'username': 'weak',
            'password': '123',
            'password_confirm': '123',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        """Login with correct credentials returns tokens."""
        url = reverse('users:login')
        response = api_client.post(url, {'username': 'testuser', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert response.data['user']['username'] == 'testuser'

    def test_login_updates_last_login(self, api_client, user):
        """Successful login records last_login."""
        url = reverse('users:login')
        api_client.post(url, {'username': 'testuser', 'password': 'TestPass123!'})

        user.refresh_from_db()
        assert user.last_login is not None

    def test_login_wrong_password(self, api_client, user):
        """Wrong password is rejected with 401."""
        url = reverse('users:login')
        response = api_client.post(url, {'username': 'testuser', 'password': 'WrongPass123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid username or password'

    def test_login_unknown_user(self, api_client, db):
        """Unknown username is rejected with 401."""
        url = reverse('users:login')
        response = api_client.post(url, {'username': 'ghost', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_user(self, api_client, user_inactive):
        """Inactive account cannot log in."""
        url = reverse('users:login')
        response = api_client.post(url, {'username': 'inactive', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_directory_user_rejected(self, api_client, ldap_user):
        """Directory users cannot use the local password login."""
        url = reverse('users:login')
        response = api_client.post(url, {'username': 'jdoe', 'password': 'anything'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_disabled(self, api_client, user, settings):
        """Local login can be switched off."""
        settings.LOGIN_METHODS = {'local': False, 'ldap': True, 'oauth2': False}
        url = reverse('users:login')
        response = api_client.post(url, {'username': 'testuser', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error'] == 'Local login is disabled'


# =============================================================================
# Logout Tests
# =============================================================================

@pytest.mark.django_db
class TestLogout:
    """Tests for POST /api/auth/logout/"""

    def test_logout_success(self, authenticated_client, user):
        """Logout with a valid refresh token."""
        url = reverse('users:logout')
        refresh = RefreshToken.for_user(user)
        response = authenticated_client.post(url, {'refresh': str(refresh)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Logout successful'

    def test_logout_invalid_token(self, authenticated_client):
        """Logout with a malformed refresh token fails."""
        url = reverse('users:logout')
        response = authenticated_client.post(url, {'refresh': 'not-a-token'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_logout_unauthenticated(self, api_client):
        """Logout requires authentication."""
        url = reverse('users:logout')
        response = api_client.post(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Login Methods / Username Availability Tests
# =============================================================================

@pytest.mark.django_db
class TestLoginMethods:
    """Tests for GET /api/auth/login-methods/"""

    def test_default_methods(self, api_client, settings):
        """Reports the configured login methods."""
        settings.LOGIN_METHODS = {'local': True, 'ldap': False, 'oauth2': True}
        response = api_client.get(reverse('users:login-methods'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'local': True, 'ldap': False, 'oauth2': True}


@pytest.mark.django_db
class TestCheckUsername:
    """Tests for GET /api/auth/check-username/"""

    def test_available(self, api_client):
        """Unused username is available."""
        response = api_client.get(reverse('users:check-username'), {'username': 'fresh'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['available'] is True

    def test_taken_case_insensitive(self, api_client, user):
        """Username comparison ignores case."""
        response = api_client.get(reverse('users:check-username'), {'username': 'TESTUSER'})

        assert response.data['available'] is False

    def test_blank_is_unavailable(self, api_client):
        """Blank username is never available."""
        response = api_client.get(reverse('users:check-username'), {'username': '  '})

        assert response.data['available'] is False


# =============================================================================
# Current User / Profile Tests
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:
    """Tests for GET /api/auth/user/"""

    def test_get_current_user(self, authenticated_client, user):
        """Returns the authenticated user's profile."""
        response = authenticated_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['username'] == 'testuser'
        assert response.data['display_name'] == 'Test User'
        assert response.data['theme'] == 'light'

    def test_unauthenticated(self, api_client):
        """Anonymous requests are rejected."""
        response = api_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestUpdateProfile:
    """Tests for PATCH /api/auth/user/update/"""

    def test_update_full_name(self, authenticated_client, user):
        """Full name can be changed."""
        response = authenticated_client.patch(
            reverse('users:update-profile'), {'full_name': 'Renamed User'}
        )

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.full_name == 'Renamed User'

    def test_username_is_read_only(self, authenticated_client, user):
        """Username cannot be changed through the profile endpoint."""
        authenticated_client.patch(reverse('users:update-profile'), {'username': 'hijack'})

        user.refresh_from_db()
        assert user.username == 'testuser'


@pytest.mark.django_db
class TestTheme:
    """Tests for PUT /api/auth/user/theme/"""

    def test_set_dark(self, authenticated_client, user):
        """Theme switches to dark."""
        response = authenticated_client.put(reverse('users:theme'), {'theme': 'dark'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['theme'] == 'dark'
        user.refresh_from_db()
        assert user.theme == 'dark'

    def test_invalid_theme(self, authenticated_client):
        """Unknown theme is rejected."""
        response = authenticated_client.put(reverse('users:theme'), {'theme': 'neon'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'Invalid theme' in response.data['error']


# =============================================================================
# Directory Search Tests
# =============================================================================

@pytest.mark.django_db
class TestDirectorySearch:
    """Tests for GET /api/auth/directory/..."""

    def test_search_users(self, authenticated_client, user, ldap_user):
        """Users match on username, full name or email."""
        response = authenticated_client.get(reverse('users:directory-users'), {'q': 'jane'})

        assert response.status_code == status.HTTP_200_OK
        assert [entry['identifier'] for entry in response.data] == ['jdoe']

    def test_search_users_blank_query(self, authenticated_client, user):
        """Blank query returns nothing."""
        response = authenticated_client.get(reverse('users:directory-users'), {'q': ''})

        assert response.data == []

    def test_search_groups_excludes_distribution_lists(self, authenticated_client, ldap_user):
        """Group search only returns security groups."""
        response = authenticated_client.get(reverse('users:directory-groups'), {'q': 'e'})

        identifiers = [entry['identifier'] for entry in response.data]
        assert 'finance-team' in identifiers
        assert 'budget-list@example.com' not in identifiers

    def test_search_distribution_lists(self, authenticated_client, ldap_user):
        """Distribution list search returns identifiers containing @."""
        response = authenticated_client.get(
            reverse('users:directory-distribution-lists'), {'q': 'budget'}
        )

        assert [entry['identifier'] for entry in response.data] == ['budget-list@example.com']

    def test_directory_requires_auth(self, api_client):
        """Directory search is not anonymous."""
        response = api_client.get(reverse('users:directory-users'), {'q': 'a'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
