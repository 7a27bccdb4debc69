import pytest
from rest_framework.test import APIClient
from apps.accounts.models import User
from apps.rcs.models import ResponsibilityCentre


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def core_owner(db):
    """Create the user that owns the test RC."""
    return User.objects.create_user(
        username='core_owner',
        password='TestPass123!',
        full_name='Core Owner',
    )


@pytest.fixture
def core_rc(db, core_owner):
    """Create a versioned row to save from several copies."""
    return ResponsibilityCentre.objects.create(name='Facilities', owner=core_owner)
