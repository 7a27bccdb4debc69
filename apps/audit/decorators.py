"""
Audit decorator for mutating API views.
"""
import logging
from functools import wraps

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response

from .services import start_audit_event, mark_success, mark_failure

logger = logging.getLogger(__name__)

AUDIT_FAILURE_MESSAGE = (
    'Audit recording failed. Action was not performed. '
    'Please try again or contact your administrator.'
)


def _error_text(response) -> str:
    data = getattr(response, 'data', None)
    if isinstance(data, dict):
        for key in ('error', 'detail', 'message'):
            if data.get(key):
                return str(data[key])
    return f'HTTP {response.status_code}'


def audited(action, entity_type):
    """
    Record an audit event around a view or ViewSet method.

    A PENDING event is committed before the view runs. If that insert fails
    the view is not executed and a 500 AUDIT_FAILURE response is returned.
    The event becomes SUCCESS for 2xx/3xx responses and FAILURE for error
    responses or exceptions. Exceptions are re-raised for DRF to render.

    Args:
        action: Verb recorded on the event (e.g. 'CREATE', 'UPDATE', 'DELETE')
        entity_type: Kind of entity touched (e.g. 'FUNDING_ITEM')

    Usage:
        class FundingItemViewSet(viewsets.ModelViewSet):
            @audited('CREATE', 'FUNDING_ITEM')
            def create(self, request, *args, **kwargs):
                ...

        @api_view(['POST'])
        @audited('GRANT_ACCESS', 'RC_ACCESS')
        def grant_user_access(request, rc_id):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(*args, **kwargs):
            request = next(arg for arg in args if isinstance(arg, Request))

            try:
                event = start_audit_event(
                    request=request,
                    action=action,
                    entity_type=entity_type,
                    url_kwargs=kwargs,
                )
            except Exception:
                logger.exception(
                    "Audit recording failed for %s %s on %s", action, entity_type, request.path
                )
                return Response(
                    {'error': AUDIT_FAILURE_MESSAGE, 'code': 'AUDIT_FAILURE'},
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                )

            try:
                response = view_func(*args, **kwargs)
            except Exception as exc:
                mark_failure(event, getattr(exc, 'message', None) or str(exc))
                raise

            if response.status_code >= 400:
                mark_failure(event, _error_text(response))
            else:
                mark_success(event, getattr(response, 'data', None))
            return response

        return wrapper
    return decorator
