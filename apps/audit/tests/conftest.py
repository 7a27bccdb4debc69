import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.audit.models import AuditEvent, AuditOutcome
from apps.fiscal_years.models import FiscalYear
from apps.rcs.models import ResponsibilityCentre, RCAccess, AccessLevel, PrincipalType


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def audit_owner(db):
    """Create the owner of the audited RC."""
    return User.objects.create_user(username='audit_owner', password='TestPass123!')


@pytest.fixture
def audit_editor(db):
    """Create a READ_WRITE user on the audited RC."""
    return User.objects.create_user(username='audit_editor', password='TestPass123!')


@pytest.fixture
def audit_rc(db, audit_owner, audit_editor):
    """Create an RC shared with the editor."""
    rc = ResponsibilityCentre.objects.create(name='Audited RC', owner=audit_owner)
    RCAccess.objects.create(
        responsibility_centre=rc,
        user=audit_editor,
        principal_identifier=audit_editor.username,
        principal_type=PrincipalType.USER,
        access_level=AccessLevel.READ_WRITE,
    )
    return rc


@pytest.fixture
def audit_fiscal_year(db, audit_rc):
    """Create a fiscal year in the audited RC."""
    return FiscalYear.objects.create(responsibility_centre=audit_rc, name='FY 2025-2026')


@pytest.fixture
def audit_events(db, audit_rc, audit_fiscal_year):
    """Create two RC-level events and one fiscal year event."""
    common = {'username': 'audit_owner', 'rc_id': audit_rc.id, 'rc_name': audit_rc.name}
    return [
        AuditEvent.objects.create(
            action='UPDATE', entity_type='RESPONSIBILITY_CENTRE', outcome=AuditOutcome.SUCCESS, **common
        ),
        AuditEvent.objects.create(
            action='GRANT_ACCESS', entity_type='RC_ACCESS', outcome=AuditOutcome.FAILURE,
            error_message='User not found: ghost', **common
        ),
        AuditEvent.objects.create(
            action='CREATE', entity_type='FUNDING_ITEM', outcome=AuditOutcome.SUCCESS,
            fiscal_year_id=audit_fiscal_year.id, fiscal_year_name=audit_fiscal_year.name, **common
        ),
    ]


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def owner_client(audit_owner):
    """Return an API client authenticated as the RC owner."""
    return _client_for(audit_owner)


@pytest.fixture
def editor_client(audit_editor):
    """Return an API client authenticated as the editor."""
    return _client_for(audit_editor)
