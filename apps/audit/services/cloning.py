"""Copy audit history onto cloned Responsibility Centres and fiscal years."""

import logging

from apps.audit.models import AuditEvent, AuditOutcome

logger = logging.getLogger(__name__)

COPIED_FIELDS = (
    'username', 'action', 'entity_type', 'entity_id', 'entity_name',
    'parameters', 'http_method', 'endpoint', 'user_agent', 'ip_address',
    'outcome', 'error_message', 'created_at',
)


def _copy(source: AuditEvent, **overrides) -> AuditEvent:
    values = {field: getattr(source, field) for field in COPIED_FIELDS}
    values.update(overrides)
    return AuditEvent(cloned_from_audit_id=source.id, **values)


def _completed(events):
    # In-flight events, such as the clone being recorded, stay with their source
    return events.exclude(outcome=AuditOutcome.PENDING)


def clone_audit_events_for_rc(*, source_rc, target_rc) -> int:
    """
    Copy RC-level events (those not tied to a fiscal year).

    Fiscal year events are copied by clone_audit_events_for_fiscal_year as
    each fiscal year is cloned.
    """
    events = _completed(AuditEvent.objects.filter(rc_id=source_rc.id, fiscal_year_id__isnull=True))
    clones = [
        _copy(event, rc_id=target_rc.id, rc_name=target_rc.name)
        for event in events
    ]
    AuditEvent.objects.bulk_create(clones)
    logger.info("Cloned %d audit events from RC %s to RC %s", len(clones), source_rc.id, target_rc.id)
    return len(clones)


def clone_audit_events_for_fiscal_year(*, source_fiscal_year, target_fiscal_year) -> int:
    """Copy the events of one fiscal year onto its clone."""
    target_rc = target_fiscal_year.responsibility_centre
    events = _completed(AuditEvent.objects.filter(
        rc_id=source_fiscal_year.responsibility_centre_id,
        fiscal_year_id=source_fiscal_year.id,
    ))
    clones = [
        _copy(
            event,
            rc_id=target_rc.id,
            rc_name=target_rc.name,
            fiscal_year_id=target_fiscal_year.id,
            fiscal_year_name=target_fiscal_year.name,
        )
        for event in events
    ]
    AuditEvent.objects.bulk_create(clones)
    logger.info(
        "Cloned %d audit events from FY %s to FY %s",
        len(clones), source_fiscal_year.id, target_fiscal_year.id,
    )
    return len(clones)
