"""
API error taxonomy and the project-wide DRF exception handler.

Every failure is rendered as ``{'ok': False, 'error': {'code', 'message'}}``.
Messages for authentication failures are deliberately generic: callers
cannot tell an unknown email from a wrong password, nor a malformed token
from an expired one.
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class AuthenticationError(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Invalid credentials'
    default_code = 'invalid_credentials'


class InvalidTokenError(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Invalid token'
    default_code = 'invalid_token'


class PatientAccessDenied(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Forbidden for this patient'
    default_code = 'patient_forbidden'


class ConflictError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict'
    default_code = 'conflict'


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found'
    default_code = 'not_found'


class InternalError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Server error'
    default_code = 'server_error'


def _message(data):
    if isinstance(data, dict):
        if 'detail' in data:
            return data['detail']
        if list(data) == ['non_field_errors']:
            return _message(data['non_field_errors'])
        return data
    if isinstance(data, list) and len(data) == 1:
        return data[0]
    return data


def api_exception_handler(exc, context):
    # rest_framework.views loads the authentication classes, which import
    # this module; import it here so settings can name this handler.
    from rest_framework.views import exception_handler as drf_exception_handler

    resp = drf_exception_handler(exc, context)
    if resp is None:
        # Datastore faults and anything unexpected: surface the raw message.
        view = context.get('view')
        logger.error('unhandled error in %s', view.__class__.__name__ if view else 'view',
                     exc_info=exc)
        exc = InternalError(str(exc))
        resp = drf_exception_handler(exc, context)
    code = (
        getattr(getattr(exc, 'detail', None), 'code', None)
        or getattr(exc, 'default_code', None)
        or ('not_found' if resp.status_code == 404 else 'api_error')
    )
    if resp.status_code >= 500:
        logger.error('api error %s: %s', resp.status_code, exc)
    return Response(
        {'ok': False, 'error': {'code': code, 'message': _message(resp.data)}},
        status=resp.status_code,
        headers={k: resp[k] for k in ('WWW-Authenticate', 'Retry-After') if k in resp},
    )
