import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.fiscal_years.models import FiscalYear, Money
from apps.fiscal_years.services import ensure_default_money, ensure_default_categories
from apps.rcs.models import ResponsibilityCentre, RCAccess, AccessLevel, PrincipalType
from apps.travel.models import TravelItem, TravelTraveller, TravelMoneyAllocation, TravelType


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def travel_owner(db):
    """Create the RC owner."""
    return User.objects.create_user(username='travel_owner', password='TestPass123!')


@pytest.fixture
def travel_editor(db):
    """Create a READ_WRITE user."""
    return User.objects.create_user(username='travel_editor', password='TestPass123!')


@pytest.fixture
def travel_viewer(db):
    """Create a READ_ONLY user."""
    return User.objects.create_user(username='travel_viewer', password='TestPass123!')


@pytest.fixture
def travel_rc(db, travel_owner, travel_editor, travel_viewer):
    """Create an RC shared with an editor and a viewer."""
    rc = ResponsibilityCentre.objects.create(name='Field Operations', owner=travel_owner)
    for user, level in ((travel_editor, AccessLevel.READ_WRITE), (travel_viewer, AccessLevel.READ_ONLY)):
        RCAccess.objects.create(
            responsibility_centre=rc,
            user=user,
            principal_identifier=user.username,
            principal_type=PrincipalType.USER,
            access_level=level,
        )
    return rc


@pytest.fixture
def travel_fy(db, travel_rc):
    """Create a seeded fiscal year."""
    fiscal_year = FiscalYear.objects.create(responsibility_centre=travel_rc, name='FY 2025-2026')
    ensure_default_money(fiscal_year)
    ensure_default_categories(fiscal_year)
    return fiscal_year


@pytest.fixture
def ab_money(travel_fy):
    """Return the default AB money."""
    return travel_fy.monies.get(code=Money.DEFAULT_CODE)


@pytest.fixture
def travel_item(travel_fy, ab_money):
    """Create an international trip with an AB allocation."""
    item = TravelItem.objects.create(
        fiscal_year=travel_fy,
        name='Site Visit Geneva',
        emap='EMAP-2025-04',
        destination='Geneva',
        travel_type=TravelType.INTERNATIONAL,
    )
    TravelMoneyAllocation.objects.create(travel_item=item, money=ab_money, om_amount=Decimal('4000.00'))
    return item


@pytest.fixture
def traveller(travel_item):
    """Create a traveller costed in euros."""
    return TravelTraveller.objects.create(
        travel_item=travel_item,
        name='Avery Chen',
        taac='TAAC-881',
        estimated_cost=Decimal('2500.00'),
        currency='EUR',
        exchange_rate=Decimal('1.48'),
    )


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def owner_client(travel_owner):
    """Return an API client authenticated as the owner."""
    return _client_for(travel_owner)


@pytest.fixture
def editor_client(travel_editor):
    """Return an API client authenticated as the editor."""
    return _client_for(travel_editor)


@pytest.fixture
def viewer_client(travel_viewer):
    """Return an API client authenticated as the viewer."""
    return _client_for(travel_viewer)
