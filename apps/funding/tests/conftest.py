import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.fiscal_years.models import FiscalYear, Money
from apps.fiscal_years.services import ensure_default_money, ensure_default_categories
from apps.funding.models import FundingItem, MoneyAllocation
from apps.rcs.models import ResponsibilityCentre, RCAccess, AccessLevel, PrincipalType


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def funding_owner(db):
    """Create the RC owner."""
    return User.objects.create_user(username='funding_owner', password='TestPass123!')


@pytest.fixture
def funding_viewer(db):
    """Create a READ_ONLY user."""
    return User.objects.create_user(username='funding_viewer', password='TestPass123!')


@pytest.fixture
def funding_outsider(db):
    """Create a user with no access."""
    return User.objects.create_user(username='funding_outsider', password='TestPass123!')


# =============================================================================
# RC, fiscal year and monies
# =============================================================================

@pytest.fixture
def funding_rc(db, funding_owner, funding_viewer):
    """Create an RC shared read-only with the viewer."""
    rc = ResponsibilityCentre.objects.create(name='Research Computing', owner=funding_owner)
    RCAccess.objects.create(
        responsibility_centre=rc,
        user=funding_viewer,
        principal_identifier=funding_viewer.username,
        principal_type=PrincipalType.USER,
        access_level=AccessLevel.READ_ONLY,
    )
    return rc


@pytest.fixture
def funding_fy(db, funding_rc):
    """Create a fiscal year seeded with AB and the default categories."""
    fiscal_year = FiscalYear.objects.create(responsibility_centre=funding_rc, name='FY 2025-2026')
    ensure_default_money(fiscal_year)
    ensure_default_categories(fiscal_year)
    return fiscal_year


@pytest.fixture
def ab_money(funding_fy):
    """Return the default AB money."""
    return funding_fy.monies.get(code=Money.DEFAULT_CODE)


@pytest.fixture
def oa_money(funding_fy):
    """Create an OA money type."""
    return Money.objects.create(fiscal_year=funding_fy, code='OA', name='Operating Allotment', display_order=1)


@pytest.fixture
def compute_category(funding_fy):
    """Return the default Compute category (CAP and OM)."""
    return funding_fy.categories.get(name='Compute')


@pytest.fixture
def licenses_category(funding_fy):
    """Return the default OM-only Software Licenses category."""
    return funding_fy.categories.get(name='Software Licenses')


@pytest.fixture
def funding_item(funding_fy, ab_money, oa_money):
    """Create a funding item with AB and OA allocations."""
    item = FundingItem.objects.create(fiscal_year=funding_fy, name='Base Budget', description='Annual base')
    MoneyAllocation.objects.create(
        funding_item=item, money=ab_money, cap_amount=Decimal('5000.00'), om_amount=Decimal('2000.00'),
    )
    MoneyAllocation.objects.create(
        funding_item=item, money=oa_money, cap_amount=Decimal('0.00'), om_amount=Decimal('750.00'),
    )
    return item


# =============================================================================
# Authenticated clients
# =============================================================================

def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def owner_client(funding_owner):
    """Return an API client authenticated as the owner."""
    return _client_for(funding_owner)


@pytest.fixture
def viewer_client(funding_viewer):
    """Return an API client authenticated as the viewer."""
    return _client_for(funding_viewer)


@pytest.fixture
def outsider_client(funding_outsider):
    """Return an API client authenticated as the outsider."""
    return _client_for(funding_outsider)
