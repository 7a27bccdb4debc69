import pytest
from decimal import Decimal
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.fiscal_years.models import FiscalYear, Money
from apps.fiscal_years.services import ensure_default_money, ensure_default_categories
from apps.procurement.models import ProcurementItem
from apps.rcs.models import ResponsibilityCentre, RCAccess, AccessLevel, PrincipalType
from apps.spending.models import (
    SpendingItem,
    SpendingMoneyAllocation,
    SpendingEvent,
    SpendingEventType,
    SpendingInvoice,
    SpendingInvoiceFile,
)


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def spending_owner(db):
    """Create the RC owner."""
    return User.objects.create_user(username='spending_owner', password='TestPass123!')


@pytest.fixture
def spending_viewer(db):
    """Create a READ_ONLY user."""
    return User.objects.create_user(username='spending_viewer', password='TestPass123!')


# =============================================================================
# RC, fiscal year and monies
# =============================================================================

@pytest.fixture
def spending_rc(db, spending_owner, spending_viewer):
    """Create an RC shared read-only with the viewer."""
    rc = ResponsibilityCentre.objects.create(name='Infrastructure', owner=spending_owner)
    RCAccess.objects.create(
        responsibility_centre=rc,
        user=spending_viewer,
        principal_identifier=spending_viewer.username,
        principal_type=PrincipalType.USER,
        access_level=AccessLevel.READ_ONLY,
    )
    return rc


@pytest.fixture
def spending_fy(db, spending_rc):
    """Create a fiscal year seeded with AB and the default categories."""
    fiscal_year = FiscalYear.objects.create(responsibility_centre=spending_rc, name='FY 2025-2026')
    ensure_default_money(fiscal_year)
    ensure_default_categories(fiscal_year)
    return fiscal_year


@pytest.fixture
def ab_money(spending_fy):
    """Return the default AB money."""
    return spending_fy.monies.get(code=Money.DEFAULT_CODE)


@pytest.fixture
def oa_money(spending_fy):
    """Create an OA money type."""
    return Money.objects.create(fiscal_year=spending_fy, code='OA', name='Operating Allotment', display_order=1)


@pytest.fixture
def compute_category(spending_fy):
    """Return the default Compute category (CAP and OM)."""
    return spending_fy.categories.get(name='Compute')


@pytest.fixture
def contractors_category(spending_fy):
    """Return the default OM-only Contractors category."""
    return spending_fy.categories.get(name='Contractors')


# =============================================================================
# Spending items
# =============================================================================

@pytest.fixture
def spending_item(spending_fy, ab_money, compute_category):
    """Create a spending item with an AB allocation."""
    item = SpendingItem.objects.create(
        fiscal_year=spending_fy,
        name='GPU Nodes',
        vendor='Acme Compute',
        amount=Decimal('12000.00'),
        category=compute_category,
    )
    SpendingMoneyAllocation.objects.create(
        spending_item=item, money=ab_money, cap_amount=Decimal('12000.00'), om_amount=Decimal('0.00'),
    )
    return item


@pytest.fixture
def deleted_spending_item(spending_fy, compute_category):
    """Create a soft deleted spending item."""
    return SpendingItem.objects.create(
        fiscal_year=spending_fy, name='Old Servers', category=compute_category, active=False,
    )


@pytest.fixture
def linked_spending_item(spending_fy, compute_category):
    """Create a spending item linked to a procurement item."""
    procurement = ProcurementItem.objects.create(fiscal_year=spending_fy, name='Storage Array')
    return SpendingItem.objects.create(
        fiscal_year=spending_fy, name='Storage Array', category=compute_category, procurement_item=procurement,
    )


@pytest.fixture
def spending_event(spending_item, spending_owner):
    """Create an ECO requested event."""
    return SpendingEvent.objects.create(
        spending_item=spending_item,
        event_type=SpendingEventType.ECO_REQUESTED,
        event_date='2025-05-01',
        comment='Sent to finance',
        created_by=spending_owner,
    )


@pytest.fixture
def invoice(spending_item, spending_owner):
    """Create a CAD invoice."""
    return SpendingInvoice.objects.create(
        spending_item=spending_item,
        invoice_number='INV-001',
        amount=Decimal('6000.00'),
        amount_cad=Decimal('6000.00'),
        created_by=spending_owner,
        modified_by=spending_owner,
    )


@pytest.fixture
def invoice_file(invoice):
    """Attach a PDF to the invoice."""
    return SpendingInvoiceFile.objects.create(
        invoice=invoice,
        file_name='inv-001.pdf',
        content_type='application/pdf',
        file_size=8,
        content=b'%PDF-1.4',
    )


@pytest.fixture
def pdf_upload():
    """Return a small PDF upload."""
    return SimpleUploadedFile('scan.pdf', b'%PDF-1.4 scanned invoice', content_type='application/pdf')


# =============================================================================
# Authenticated clients
# =============================================================================

def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def owner_client(spending_owner):
    """Return an API client authenticated as the owner."""
    return _client_for(spending_owner)


@pytest.fixture
def viewer_client(spending_viewer):
    """Return an API client authenticated as the viewer."""
    return _client_for(spending_viewer)
