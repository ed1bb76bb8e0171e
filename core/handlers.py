import logging

from django.conf import settings
from django.http import JsonResponse
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    Render every API error as {"message", "code"[, "errors"]}.

    Anything DRF does not recognise is logged and reported as a generic
    server error; the exception text is only included when DEBUG is on.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        view_name = view.__class__.__name__ if view else 'unknown view'
        logger.error(f"Unhandled error in {view_name}: {exc}", exc_info=exc)
        body = {'message': 'Something went wrong!', 'code': 'server_error'}
        if settings.DEBUG:
            body['error'] = str(exc)
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    data = response.data
    if isinstance(exc, ValidationError):
        response.data = {'message': 'Validation failed', 'code': 'invalid', 'errors': data}
        return response

    detail = data.get('detail', data) if isinstance(data, dict) else data
    code = getattr(detail, 'code', None) or getattr(exc, 'default_code', 'error')
    response.data = {'message': str(detail), 'code': code}
    return response


def route_not_found(request, exception=None):
    return JsonResponse({'message': 'Route not found'}, status=404)
