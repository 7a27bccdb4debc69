import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.fiscal_years.models import FiscalYear, Money
from apps.fiscal_years.services import ensure_default_money, ensure_default_categories
from apps.rcs.models import ResponsibilityCentre, RCAccess, AccessLevel, PrincipalType
from apps.training.models import (
    TrainingItem,
    TrainingParticipant,
    TrainingMoneyAllocation,
    TrainingType,
    TrainingFormat,
)


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def training_owner(db):
    """Create the RC owner."""
    return User.objects.create_user(username='training_owner', password='TestPass123!')


@pytest.fixture
def training_viewer(db):
    """Create a READ_ONLY user."""
    return User.objects.create_user(username='training_viewer', password='TestPass123!')


# =============================================================================
# RC, fiscal year and monies
# =============================================================================

@pytest.fixture
def training_rc(db, training_owner, training_viewer):
    """Create an RC shared read-only with the viewer."""
    rc = ResponsibilityCentre.objects.create(name='Learning and Development', owner=training_owner)
    RCAccess.objects.create(
        responsibility_centre=rc,
        user=training_viewer,
        principal_identifier=training_viewer.username,
        principal_type=PrincipalType.USER,
        access_level=AccessLevel.READ_ONLY,
    )
    return rc


@pytest.fixture
def training_fy(db, training_rc):
    """Create a seeded fiscal year."""
    fiscal_year = FiscalYear.objects.create(responsibility_centre=training_rc, name='FY 2025-2026')
    ensure_default_money(fiscal_year)
    ensure_default_categories(fiscal_year)
    return fiscal_year


@pytest.fixture
def ab_money(training_fy):
    """Return the default AB money."""
    return training_fy.monies.get(code=Money.DEFAULT_CODE)


@pytest.fixture
def oa_money(training_fy):
    """Create an OA money type."""
    return Money.objects.create(fiscal_year=training_fy, code='OA', name='Operating Allotment', display_order=1)


# =============================================================================
# Training items
# =============================================================================

@pytest.fixture
def training_item(training_fy, ab_money):
    """Create a conference with one participant and an AB allocation."""
    item = TrainingItem.objects.create(
        fiscal_year=training_fy,
        name='PyCon Canada',
        provider='PyCon',
        training_type=TrainingType.CONFERENCE_REGISTRATION,
        format=TrainingFormat.IN_PERSON,
        location='Toronto',
    )
    TrainingMoneyAllocation.objects.create(training_item=item, money=ab_money, om_amount=Decimal('1200.00'))
    return item


@pytest.fixture
def participant(training_item):
    """Create a participant with an estimated cost in CAD."""
    return TrainingParticipant.objects.create(
        training_item=training_item,
        name='Jordan Lee',
        eco='ECO-17',
        estimated_cost=Decimal('600.00'),
    )


# =============================================================================
# Authenticated clients
# =============================================================================

def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def owner_client(training_owner):
    """Return an API client authenticated as the owner."""
    return _client_for(training_owner)


@pytest.fixture
def viewer_client(training_viewer):
    """Return an API client authenticated as the viewer."""
    return _client_for(training_viewer)
