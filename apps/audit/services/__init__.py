"""Audit services: recording, querying and cloning audit events."""

from .exceptions import AuditServiceError, AuditAccessDeniedError
from .recording import (
    start_audit_event,
    mark_success,
    mark_failure,
    get_client_ip,
    build_parameters,
    resolve_entity_name,
)
from .queries import list_rc_audit_events, list_fiscal_year_audit_events
from .cloning import clone_audit_events_for_rc, clone_audit_events_for_fiscal_year

__all__ = [
    # Exceptions
    'AuditServiceError',
    'AuditAccessDeniedError',
    # Recording
    'start_audit_event',
    'mark_success',
    'mark_failure',
    'get_client_ip',
    'build_parameters',
    'resolve_entity_name',
    # Queries
    'list_rc_audit_events',
    'list_fiscal_year_audit_events',
    # Cloning
    'clone_audit_events_for_rc',
    'clone_audit_events_for_fiscal_year',
]
