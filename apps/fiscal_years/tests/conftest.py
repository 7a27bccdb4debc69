import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.audit.models import AuditEvent
from apps.fiscal_years.models import FiscalYear, Money, Category, FundingType
from apps.fiscal_years.services import ensure_default_money, ensure_default_categories
from apps.funding.models import FundingItem, MoneyAllocation
from apps.procurement.models import (
    ProcurementItem,
    ProcurementQuote,
    ProcurementQuoteFile,
    ProcurementEvent,
    ProcurementEventType,
    ProcurementStatus,
)
from apps.rcs.models import ResponsibilityCentre, RCAccess, AccessLevel, PrincipalType
from apps.spending.models import (
    SpendingItem,
    SpendingMoneyAllocation,
    SpendingEvent,
    SpendingInvoice,
    SpendingInvoiceFile,
)
from apps.training.models import TrainingItem, TrainingParticipant, TrainingMoneyAllocation
from apps.travel.models import TravelItem, TravelTraveller, TravelMoneyAllocation


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def fy_owner(db):
    """Create the RC owner."""
    return User.objects.create_user(username='fy_owner', password='TestPass123!')


@pytest.fixture
def fy_editor(db):
    """Create a READ_WRITE user."""
    return User.objects.create_user(username='fy_editor', password='TestPass123!')


@pytest.fixture
def fy_viewer(db):
    """Create a READ_ONLY user."""
    return User.objects.create_user(username='fy_viewer', password='TestPass123!')


@pytest.fixture
def fy_outsider(db):
    """Create a user with no access."""
    return User.objects.create_user(username='fy_outsider', password='TestPass123!')


# =============================================================================
# RC and fiscal year
# =============================================================================

def _grant(rc, user, level):
    RCAccess.objects.create(
        responsibility_centre=rc,
        user=user,
        principal_identifier=user.username,
        principal_type=PrincipalType.USER,
        access_level=level,
    )


@pytest.fixture
def fy_rc(db, fy_owner, fy_editor, fy_viewer):
    """Create an RC with an editor and a viewer."""
    rc = ResponsibilityCentre.objects.create(name='Science', owner=fy_owner)
    _grant(rc, fy_editor, AccessLevel.READ_WRITE)
    _grant(rc, fy_viewer, AccessLevel.READ_ONLY)
    return rc


@pytest.fixture
def other_rc(db, fy_editor):
    """Create a second RC owned by the editor."""
    return ResponsibilityCentre.objects.create(name='Editor Lab', owner=fy_editor)


@pytest.fixture
def fiscal_year(db, fy_rc):
    """Create a fiscal year seeded with AB and the default categories."""
    fiscal_year = FiscalYear.objects.create(responsibility_centre=fy_rc, name='FY 2025-2026')
    ensure_default_money(fiscal_year)
    ensure_default_categories(fiscal_year)
    return fiscal_year


@pytest.fixture
def inactive_fiscal_year(db, fy_rc):
    """Create an inactive fiscal year."""
    return FiscalYear.objects.create(responsibility_centre=fy_rc, name='FY 2023-2024', active=False)


@pytest.fixture
def ab_money(fiscal_year):
    """Return the default AB money."""
    return fiscal_year.monies.get(code=Money.DEFAULT_CODE)


@pytest.fixture
def extra_money(fiscal_year):
    """Create an OA money type."""
    return Money.objects.create(fiscal_year=fiscal_year, code='OA', name='Operating Allotment', display_order=1)


@pytest.fixture
def custom_category(fiscal_year):
    """Create a custom OM-only category."""
    return Category.objects.create(
        fiscal_year=fiscal_year, name='Travel Support', funding_type=FundingType.OM_ONLY, display_order=10,
    )


@pytest.fixture
def funded_item(fiscal_year, extra_money):
    """Create a funding item that allocates from the OA money."""
    item = FundingItem.objects.create(fiscal_year=fiscal_year, name='Base Funding')
    MoneyAllocation.objects.create(
        funding_item=item, money=extra_money, cap_amount=Decimal('1000.00'), om_amount=Decimal('0.00'),
    )
    return item


@pytest.fixture
def populated_fiscal_year(fiscal_year, ab_money, extra_money, custom_category, funded_item, fy_owner):
    """Fill the fiscal year with one item of every kind."""
    funded_item.category = custom_category
    funded_item.save()

    procurement = ProcurementItem.objects.create(
        fiscal_year=fiscal_year, name='Server Purchase', category=custom_category, purchase_order='PO-1',
    )
    quote = ProcurementQuote.objects.create(
        procurement_item=procurement, vendor_name='Acme', amount=Decimal('500.00'),
    )
    ProcurementQuoteFile.objects.create(
        quote=quote, file_name='quote.pdf', content_type='application/pdf', file_size=3, content=b'pdf',
    )
    ProcurementEvent.objects.create(
        procurement_item=procurement,
        event_type=ProcurementEventType.QUOTE,
        old_status=ProcurementStatus.DRAFT,
        new_status=ProcurementStatus.PENDING_QUOTES,
    )

    spending = SpendingItem.objects.create(
        fiscal_year=fiscal_year, name='Server Spend', category=custom_category, procurement_item=procurement,
    )
    SpendingMoneyAllocation.objects.create(
        spending_item=spending, money=extra_money, cap_amount=Decimal('0.00'), om_amount=Decimal('250.00'),
    )
    SpendingEvent.objects.create(spending_item=spending, comment='Ordered')
    invoice = SpendingInvoice.objects.create(spending_item=spending, invoice_number='INV-7', amount=Decimal('250.00'))
    SpendingInvoiceFile.objects.create(
        invoice=invoice, file_name='inv.png', content_type='image/png', file_size=3, content=b'png',
    )
    SpendingItem.objects.create(fiscal_year=fiscal_year, name='Retired Spend', active=False)

    training = TrainingItem.objects.create(fiscal_year=fiscal_year, name='Kubernetes Course')
    TrainingParticipant.objects.create(training_item=training, name='Alex')
    TrainingMoneyAllocation.objects.create(training_item=training, money=ab_money, om_amount=Decimal('1200.00'))

    travel = TravelItem.objects.create(fiscal_year=fiscal_year, name='Conference Trip')
    TravelTraveller.objects.create(travel_item=travel, name='Sam')
    TravelMoneyAllocation.objects.create(travel_item=travel, money=ab_money, om_amount=Decimal('900.00'))

    AuditEvent.objects.create(
        username='fy_owner', action='CREATE', entity_type='FUNDING_ITEM',
        rc_id=fiscal_year.responsibility_centre_id, fiscal_year_id=fiscal_year.id, outcome='SUCCESS',
    )
    return fiscal_year


# =============================================================================
# Authenticated clients
# =============================================================================

def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def owner_client(fy_owner):
    """Return an API client authenticated as the owner."""
    return _client_for(fy_owner)


@pytest.fixture
def editor_client(fy_editor):
    """Return an API client authenticated as the editor."""
    return _client_for(fy_editor)


@pytest.fixture
def viewer_client(fy_viewer):
    """Return an API client authenticated as the viewer."""
    return _client_for(fy_viewer)


@pytest.fixture
def outsider_client(fy_outsider):
    """Return an API client authenticated as the outsider."""
    return _client_for(fy_outsider)
