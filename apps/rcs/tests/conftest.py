import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.rcs.models import ResponsibilityCentre, RCAccess, AccessLevel, PrincipalType


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def rc_owner(db):
    """Create the user that owns the test RC."""
    return User.objects.create_user(
        username='rc_owner',
        password='TestPass123!',
        full_name='RC Owner',
    )


@pytest.fixture
def rc_editor(db):
    """Create a user with READ_WRITE access to the test RC."""
    return User.objects.create_user(
        username='rc_editor',
        password='TestPass123!',
        full_name='RC Editor',
    )


@pytest.fixture
def rc_viewer(db):
    """Create a user with READ_ONLY access to the test RC."""
    return User.objects.create_user(
        username='rc_viewer',
        password='TestPass123!',
        full_name='RC Viewer',
    )


@pytest.fixture
def rc_outsider(db):
    """Create a user with no access to the test RC."""
    return User.objects.create_user(
        username='rc_outsider',
        password='TestPass123!',
        full_name='RC Outsider',
    )


@pytest.fixture
def rc_group_member(db):
    """Create a directory user whose access comes from a group."""
    return User.objects.create_user(
        username='rc_group_member',
        full_name='Group Member',
        directory_groups=['finance-team'],
    )


# =============================================================================
# Responsibility Centres
# =============================================================================

@pytest.fixture
def rc(db, rc_owner, rc_editor, rc_viewer):
    """Create an RC shared with an editor and a viewer."""
    rc = ResponsibilityCentre.objects.create(
        name='Operations',
        description='Operations budget',
        owner=rc_owner,
    )
    RCAccess.objects.create(
        responsibility_centre=rc,
        user=rc_editor,
        principal_identifier=rc_editor.username,
        principal_type=PrincipalType.USER,
        access_level=AccessLevel.READ_WRITE,
        granted_by=rc_owner,
    )
    RCAccess.objects.create(
        responsibility_centre=rc,
        user=rc_viewer,
        principal_identifier=rc_viewer.username,
        principal_type=PrincipalType.USER,
        access_level=AccessLevel.READ_ONLY,
        granted_by=rc_owner,
    )
    return rc


@pytest.fixture
def group_grant(db, rc, rc_owner):
    """Grant the finance-team group READ_ONLY access to the test RC."""
    return RCAccess.objects.create(
        responsibility_centre=rc,
        principal_identifier='finance-team',
        principal_type=PrincipalType.GROUP,
        access_level=AccessLevel.READ_ONLY,
        granted_by=rc_owner,
    )


@pytest.fixture
def demo_rc(db, settings):
    """Create the Demo RC, owned by a system user."""
    settings.DEMO_RC_NAME = 'Demo'
    system = User.objects.create_user(username='system')
    return ResponsibilityCentre.objects.create(name='Demo', owner=system)


# =============================================================================
# Authenticated clients
# =============================================================================

def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def owner_client(rc_owner):
    """Return an API client authenticated as the RC owner."""
    return _client_for(rc_owner)


@pytest.fixture
def editor_client(rc_editor):
    """Return an API client authenticated as the editor."""
    return _client_for(rc_editor)


@pytest.fixture
def viewer_client(rc_viewer):
    """Return an API client authenticated as the viewer."""
    return _client_for(rc_viewer)


@pytest.fixture
def outsider_client(rc_outsider):
    """Return an API client authenticated as the outsider."""
    return _client_for(rc_outsider)
