import datetime
import pytest
from decimal import Decimal
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.fiscal_years.models import FiscalYear
from apps.fiscal_years.services import ensure_default_money, ensure_default_categories
from apps.procurement.models import (
    ProcurementItem,
    ProcurementQuote,
    ProcurementQuoteFile,
    ProcurementEvent,
    ProcurementEventFile,
    ProcurementEventType,
    ProcurementStatus,
)
from apps.rcs.models import ResponsibilityCentre, RCAccess, AccessLevel, PrincipalType


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def proc_owner(db):
    """Create the RC owner."""
    return User.objects.create_user(username='proc_owner', password='TestPass123!')


@pytest.fixture
def proc_viewer(db):
    """Create a READ_ONLY user."""
    return User.objects.create_user(username='proc_viewer', password='TestPass123!')


# =============================================================================
# RC and fiscal year
# =============================================================================

@pytest.fixture
def proc_rc(db, proc_owner, proc_viewer):
    """Create an RC shared read-only with the viewer."""
    rc = ResponsibilityCentre.objects.create(name='Platform Services', owner=proc_owner)
    RCAccess.objects.create(
        responsibility_centre=rc,
        user=proc_viewer,
        principal_identifier=proc_viewer.username,
        principal_type=PrincipalType.USER,
        access_level=AccessLevel.READ_ONLY,
    )
    return rc


@pytest.fixture
def proc_fy(db, proc_rc):
    """Create a fiscal year seeded with AB and the default categories."""
    fiscal_year = FiscalYear.objects.create(responsibility_centre=proc_rc, name='FY 2025-2026')
    ensure_default_money(fiscal_year)
    ensure_default_categories(fiscal_year)
    return fiscal_year


@pytest.fixture
def storage_category(proc_fy):
    """Return the default Storage category."""
    return proc_fy.categories.get(name='Storage')


# =============================================================================
# Procurement items
# =============================================================================

@pytest.fixture
def procurement_item(proc_fy, storage_category):
    """Create a procurement item with a PR and a quoted price."""
    return ProcurementItem.objects.create(
        fiscal_year=proc_fy,
        name='Object Storage Expansion',
        purchase_requisition='PR-100',
        purchase_order='PO-200',
        vendor='Acme Storage',
        quoted_price=Decimal('25000.00'),
        quoted_price_cad=Decimal('25000.00'),
        category=storage_category,
    )


@pytest.fixture
def second_item(proc_fy):
    """Create a second procurement item."""
    return ProcurementItem.objects.create(fiscal_year=proc_fy, name='Backup Licences', purchase_requisition='PR-101')


@pytest.fixture
def quote(procurement_item, proc_owner):
    """Create a pending quote."""
    return ProcurementQuote.objects.create(
        procurement_item=procurement_item,
        vendor_name='Acme Storage',
        amount=Decimal('24000.00'),
        amount_cap=Decimal('24000.00'),
        amount_cap_cad=Decimal('24000.00'),
        created_by=proc_owner,
        modified_by=proc_owner,
    )


@pytest.fixture
def other_quote(procurement_item, proc_owner):
    """Create a competing quote."""
    return ProcurementQuote.objects.create(
        procurement_item=procurement_item,
        vendor_name='Globex',
        amount=Decimal('26000.00'),
        created_by=proc_owner,
        modified_by=proc_owner,
    )


@pytest.fixture
def quote_file(quote):
    """Attach a PDF to the quote."""
    return ProcurementQuoteFile.objects.create(
        quote=quote, file_name='quote.pdf', content_type='application/pdf', file_size=8, content=b'%PDF-1.4',
    )


@pytest.fixture
def procurement_event(procurement_item, proc_owner):
    """Create an event that moves the item to PENDING_QUOTES."""
    return ProcurementEvent.objects.create(
        procurement_item=procurement_item,
        event_type=ProcurementEventType.QUOTE,
        event_date=datetime.date(2025, 5, 1),
        old_status=ProcurementStatus.DRAFT,
        new_status=ProcurementStatus.PENDING_QUOTES,
        created_by=proc_owner,
    )


@pytest.fixture
def event_file(procurement_event):
    """Attach a file to the event."""
    return ProcurementEventFile.objects.create(
        event=procurement_event, file_name='notes.txt', content_type='text/plain', file_size=5, content=b'notes',
    )


@pytest.fixture
def pdf_upload():
    """Return a small PDF upload."""
    return SimpleUploadedFile('vendor-quote.pdf', b'%PDF-1.4 quote', content_type='application/pdf')


# =============================================================================
# Authenticated clients
# =============================================================================

def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def owner_client(proc_owner):
    """Return an API client authenticated as the owner."""
    return _client_for(proc_owner)


@pytest.fixture
def viewer_client(proc_viewer):
    """Return an API client authenticated as the viewer."""
    return _client_for(proc_viewer)
