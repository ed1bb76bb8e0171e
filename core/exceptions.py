from rest_framework import exceptions, status
from rest_framework.exceptions import ValidationError

__all__ = [
    'ValidationError', 'AuthenticationError', 'AuthorizationError',
    'NotFoundError', 'StateError', 'ConflictError',
]


class AuthenticationError(exceptions.AuthenticationFailed):
    default_detail = 'Token is not valid'
    default_code = 'authentication_failed'


class AuthorizationError(exceptions.PermissionDenied):
    default_detail = 'Not authorized'
    default_code = 'not_authorized'


class NotFoundError(exceptions.NotFound):
    default_code = 'not_found'


class StateError(exceptions.APIException):
    """The operation is not valid for the entity's current status."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Operation not allowed in the current state.'
    default_code = 'invalid_state'


class ConflictError(exceptions.APIException):
    """Duplicate application or review."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'
