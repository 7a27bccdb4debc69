import pytest
from apps.accounts.models import User, AuthProvider
from apps.accounts.services import (
    register_user,
    search_users,
    find_directory_user,
    UserRegistrationError,
)


@pytest.mark.django_db
class TestRegisterUser:
    """Tests for the register_user service."""

    def test_blank_username(self):
        """A blank username is rejected."""
        with pytest.raises(UserRegistrationError, match='Username is required'):
            register_user(username='   ', password='SecurePass123!')

    def test_creates_local_user(self):
        """Registered users are local and can check their password."""
        user = register_user(username='alice', password='SecurePass123!')

        assert user.auth_provider == AuthProvider.LOCAL
        assert user.check_password('SecurePass123!')


@pytest.mark.django_db
class TestDirectoryUser:
    """Tests for directory-backed user records."""

    def test_principal_identifiers_include_username(self):
        """Grant matching uses groups plus the username."""
        user = User.objects.create_user(username='carol', auth_provider=AuthProvider.LDAP, directory_groups=['finance'])

        assert user.get_principal_identifiers() == ['finance', 'carol']


@pytest.mark.django_db
class TestSearchUsers:
    """Tests for directory user search."""

    def test_max_results_clamped(self):
        """Result count never drops below one."""
        for i in range(3):
            User.objects.create_user(username=f'user{i}')

        assert len(search_users(query='user', max_results=0)) == 1
        assert len(search_users(query='user', max_results='bogus')) == 3

    def test_inactive_users_hidden(self):
        """Inactive users are not offered for grants."""
        User.objects.create_user(username='gone', is_active=False)

        assert search_users(query='gone') == []

    def test_find_directory_user_exact(self):
        """Exact lookup ignores partial matches."""
        User.objects.create_user(username='dan')
        User.objects.create_user(username='danielle')

        assert find_directory_user('DAN')['identifier'] == 'dan'
        assert find_directory_user('da') is None
