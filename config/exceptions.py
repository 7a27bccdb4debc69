"""
Project-wide error handling.

Service modules raise subclasses of ServiceError. The DRF exception handler
below turns them, and DRF's own exceptions, into a uniform JSON body:

    {"error": "<message>"}

Validation errors additionally carry the field errors under "details".
"""
import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for all service layer errors."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message=''):
        super().__init__(message)
        self.message = message


class ServiceValidationError(ServiceError):
    """Raised when input breaks a business rule."""
    status_code = status.HTTP_400_BAD_REQUEST


class ServiceAccessDenied(ServiceError):
    """Raised when the user lacks the access level an operation needs."""
    status_code = status.HTTP_403_FORBIDDEN


class ServiceNotFound(ServiceError):
    """Raised when an entity does not exist or is not visible to the user."""
    status_code = status.HTTP_404_NOT_FOUND


class ServiceConflict(ServiceError):
    """Raised when a write races another change to the same record."""
    status_code = status.HTTP_409_CONFLICT


def _first_message(errors):
    if isinstance(errors, dict):
        for field, value in errors.items():
            message = _first_message(value)
            if message:
                return message if field == 'non_field_errors' else f"{field}: {message}"
        return ''
    if isinstance(errors, (list, tuple)):
        for value in errors:
            message = _first_message(value)
            if message:
                return message
        return ''
    return str(errors)


def api_exception_handler(exc, context):
    """
    Render every API error as {"error": ...}.

    Unhandled exceptions are logged and reported as 500 so clients always
    receive JSON.
    """
    if isinstance(exc, ServiceError):
        return Response({'error': exc.message}, status=exc.status_code)

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(
            "Unhandled error in %s",
            view.__class__.__name__ if view is not None else 'unknown view',
        )
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        response.data = {
            'error': _first_message(response.data) or 'Invalid input',
            'details': response.data,
        }
    elif isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'error': str(response.data['detail'])}

    return response
