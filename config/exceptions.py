"""
Global exception handler for consistent API error responses.
Follows DRF convention and returns uniform structure.
"""
import logging
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from django.core.exceptions import PermissionDenied, ValidationError as DjangoValidationError
from django.conf import settings

from core.exceptions import NotFoundError, ScheduleConflictError

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns:
    { "detail": str, "code": str, "errors": dict (optional) }
    """
    response = exception_handler(exc, context)
    if response is not None:
        data = response.data if isinstance(response.data, dict) else {'detail': str(response.data)}
        if 'detail' not in data and response.data:
            data = {'detail': _get_detail(exc), 'errors': response.data}
        data.setdefault('detail', _get_detail(exc))
        data.setdefault('code', _get_code(exc))
        response.data = data
        return response

    if isinstance(exc, ScheduleConflictError):
        return Response(
            {
                'detail': exc.message,
                'code': exc.code,
                'conflicts': [{'id': c.id, 'name': c.name} for c in exc.conflicts],
            },
            status=status.HTTP_409_CONFLICT
        )
    if isinstance(exc, NotFoundError):
        return Response(
            {'detail': exc.message, 'code': exc.code},
            status=status.HTTP_404_NOT_FOUND
        )
    if isinstance(exc, PermissionDenied):
        return Response(
            {'detail': str(exc) or 'Permission denied', 'code': 'permission_denied'},
            status=status.HTTP_403_FORBIDDEN
        )
    if isinstance(exc, DjangoValidationError):
        return Response(
            {'detail': _validation_message(exc), 'code': 'validation_error'},
            status=status.HTTP_400_BAD_REQUEST
        )

    request = context.get('request') if context else None
    logger.exception('Unhandled exception on %s: %s', getattr(request, 'path', 'unknown'), exc)
    error_detail = 'An internal error occurred.'
    if settings.DEBUG:
        error_detail = f'An internal error occurred: {str(exc)}'
    # Never expose stack traces to frontend; use standard API error format
    return Response(
        {'detail': error_detail, 'code': 'internal_error'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def _validation_message(exc):
    messages = getattr(exc, 'messages', None) or [str(exc)]
    return '; '.join(str(m) for m in messages)


def _get_detail(exc):
    if hasattr(exc, 'detail'):
        d = exc.detail
        if isinstance(d, list):
            return str(d[0]) if d else 'Error'
        if isinstance(d, dict):
            if 'detail' in d:
                return str(d['detail'])
            field, errors = next(iter(d.items()), ('', ''))
            first = errors[0] if isinstance(errors, list) and errors else errors
            return f'{field}: {first}' if field != 'non_field_errors' else str(first)
        return str(d)
    return str(exc)


def _get_code(exc):
    codes = {
        'AuthenticationFailed': 'invalid_credentials',
        'NotAuthenticated': 'not_authenticated',
        'NotFound': 'not_found',
        'PermissionDenied': 'permission_denied',
        'ValidationError': 'validation_error',
        'ParseError': 'validation_error',
    }
    return codes.get(type(exc).__name__, 'error')
