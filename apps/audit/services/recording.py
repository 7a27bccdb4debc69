"""
Audit event recording.

An event is written as PENDING before the audited action runs and is then
moved to SUCCESS or FAILURE. These writes run in autocommit mode, outside
the business transaction, so a rolled back action still leaves its FAILURE
record behind.
"""

import json
import logging
from typing import Optional

from django.conf import settings

from apps.audit.models import AuditEvent, AuditOutcome

logger = logging.getLogger(__name__)

TRUNCATION_SUFFIX = '...(truncated)'

# URL kwargs naming the audited entity, most specific first
ENTITY_ID_KWARGS = ('file_id', 'access_id', 'pk')

CLONE_ACTION = 'CLONE'


def get_client_ip(request) -> str:
    """First X-Forwarded-For entry, then X-Real-IP, then the socket address."""
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR', '')
    if forwarded:
        first = forwarded.split(',')[0].strip()
        if first and first.lower() != 'unknown':
            return first

    real_ip = request.META.get('HTTP_X_REAL_IP', '').strip()
    if real_ip and real_ip.lower() != 'unknown':
        return real_ip

    return request.META.get('REMOTE_ADDR', '') or ''


def _request_body(request) -> dict:
    files = getattr(request, 'FILES', {}) or {}
    data = request.data
    if hasattr(data, 'dict'):
        data = data.dict()
    if isinstance(data, dict):
        return {key: value for key, value in data.items() if key not in files}
    return data


def _uploaded_files(request) -> list:
    files = getattr(request, 'FILES', None)
    if not files:
        return []
    return [
        {
            'fileName': uploaded.name,
            'contentType': uploaded.content_type,
            'size': uploaded.size,
        }
        for uploaded in files.values()
    ]


def build_parameters(request, url_kwargs: dict) -> str:
    """Serialize path kwargs, request body and file metadata as JSON text."""
    parameters = {key: value for key, value in url_kwargs.items()}
    body = _request_body(request)
    if body:
        parameters['requestBody'] = body
    files = _uploaded_files(request)
    if files:
        parameters['files'] = files

    text = json.dumps(parameters, default=str)
    max_length = settings.AUDIT_PARAMETERS_MAX_LENGTH
    if len(text) > max_length:
        text = text[:max_length] + TRUNCATION_SUFFIX
    return text


def resolve_entity_name(request) -> str:
    """Entity name from the body (name, description, code) or the uploaded file."""
    body = _request_body(request)
    if isinstance(body, dict):
        for key in ('name', 'description', 'code'):
            value = body.get(key)
            if value:
                return str(value)[:255]
    files = _uploaded_files(request)
    if files:
        return files[0]['fileName'][:255]
    return ''


def _lookup_names(rc_id, fiscal_year_id):
    from apps.rcs.models import ResponsibilityCentre
    from apps.fiscal_years.models import FiscalYear

    rc_name = ''
    fiscal_year_name = ''
    if rc_id is not None:
        rc_name = (
            ResponsibilityCentre.objects.filter(id=rc_id).values_list('name', flat=True).first() or ''
        )
    if fiscal_year_id is not None:
        fiscal_year_name = (
            FiscalYear.objects.filter(id=fiscal_year_id).values_list('name', flat=True).first() or ''
        )
    return rc_name, fiscal_year_name


def _as_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def start_audit_event(*, request, action: str, entity_type: str, url_kwargs: dict) -> AuditEvent:
    """
    Insert the PENDING event for an audited request.

    Raises:
        Any database error; callers must not run the action when this fails.
    """
    rc_id = _as_int(url_kwargs.get('rc_id'))
    fiscal_year_id = _as_int(url_kwargs.get('fy_id'))
    if rc_id is None and entity_type == 'RESPONSIBILITY_CENTRE':
        rc_id = _as_int(url_kwargs.get('pk'))
    if fiscal_year_id is None and entity_type == 'FISCAL_YEAR':
        fiscal_year_id = _as_int(url_kwargs.get('pk'))

    entity_id = None
    for key in ENTITY_ID_KWARGS:
        if key in url_kwargs:
            entity_id = _as_int(url_kwargs[key])
            break

    rc_name, fiscal_year_name = _lookup_names(rc_id, fiscal_year_id)
    user = request.user

    return AuditEvent.objects.create(
        username=user.username if user.is_authenticated else 'anonymous',
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        entity_name=resolve_entity_name(request),
        rc_id=rc_id,
        rc_name=rc_name,
        fiscal_year_id=fiscal_year_id,
        fiscal_year_name=fiscal_year_name,
        parameters=build_parameters(request, url_kwargs),
        http_method=request.method,
        endpoint=request.path[:500],
        user_agent=request.META.get('HTTP_USER_AGENT', '')[:500],
        ip_address=get_client_ip(request)[:45],
        outcome=AuditOutcome.PENDING,
    )


def mark_success(event: AuditEvent, response_data=None) -> AuditEvent:
    """
    Move an event to SUCCESS, filling in the id of a newly created entity.

    CLONE events start out pointing at the source; the id in the response
    is the copy, so it replaces the source id and scope.
    """
    event.outcome = AuditOutcome.SUCCESS
    fields = ['outcome']

    if isinstance(response_data, dict):
        new_id = _as_int(response_data.get('id'))
        is_clone = event.action == CLONE_ACTION
        if new_id is not None and (event.entity_id is None or is_clone):
            event.entity_id = new_id
            fields.append('entity_id')
            if event.entity_type == 'RESPONSIBILITY_CENTRE' and (event.rc_id is None or is_clone):
                event.rc_id = new_id
                event.rc_name = str(response_data.get('name', ''))[:100]
                fields += ['rc_id', 'rc_name']
            if event.entity_type == 'FISCAL_YEAR' and (event.fiscal_year_id is None or is_clone):
                event.fiscal_year_id = new_id
                event.fiscal_year_name = str(response_data.get('name', ''))[:50]
                fields += ['fiscal_year_id', 'fiscal_year_name']
                target_rc_id = _as_int(response_data.get('rc_id'))
                if is_clone and target_rc_id is not None and target_rc_id != event.rc_id:
                    event.rc_id = target_rc_id
                    event.rc_name, _ = _lookup_names(target_rc_id, None)
                    fields += ['rc_id', 'rc_name']
        if not event.entity_name:
            name = response_data.get('name') or response_data.get('file_name')
            if name:
                event.entity_name = str(name)[:255]
                fields.append('entity_name')

    event.save(update_fields=fields)
    return event


def mark_failure(event: AuditEvent, error_message: str) -> AuditEvent:
    """Move an event to FAILURE with the error that ended the request."""
    event.outcome = AuditOutcome.FAILURE
    event.error_message = error_message or 'Unknown error'
    event.save(update_fields=['outcome', 'error_message'])
    return event
