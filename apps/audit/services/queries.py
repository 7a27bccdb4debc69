"""Audit history queries (owner only)."""

from django.db.models import QuerySet

from apps.audit.models import AuditEvent
from apps.rcs.services import get_rc, is_owner

from .exceptions import AuditAccessDeniedError


def _require_owner(rc_id, user):
    rc = get_rc(rc_id)
    if not is_owner(rc=rc, user=user):
        raise AuditAccessDeniedError("Only owners can view audit data")
    return rc


def list_rc_audit_events(*, rc_id, user) -> QuerySet[AuditEvent]:
    """All events recorded against an RC, newest first."""
    rc = _require_owner(rc_id, user)
    return AuditEvent.objects.filter(rc_id=rc.id).order_by('-created_at', '-id')


def list_fiscal_year_audit_events(*, rc_id, fy_id, user) -> QuerySet[AuditEvent]:
    """Events recorded against one fiscal year of an RC, newest first."""
    rc = _require_owner(rc_id, user)
    return (
        AuditEvent.objects
        .filter(rc_id=rc.id, fiscal_year_id=fy_id)
        .order_by('-created_at', '-id')
    )
