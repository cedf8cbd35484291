"""
API exception handling for Warehouse Stock Backend.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler
from apps.core.store_client import StoreError, StoreUnavailable
from apps.users.services.auth_service import AuthServiceError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


def api_exception_handler(exc, context):
    """
    Turn remote store failures into a generic error response.
    Everything else goes through the default DRF handler.
    """
    if isinstance(exc, (StoreError, AuthServiceError)):
        view = context.get('view')
        logger.error(f"Store failure in {view.__class__.__name__ if view else 'view'}: {exc}", extra={
            'status_code': getattr(exc, 'status_code', None),
            'event_type': 'store_failure'
        }, exc_info=exc)

        code = status.HTTP_502_BAD_GATEWAY
        if isinstance(exc, StoreUnavailable) or isinstance(exc.__cause__, StoreUnavailable):
            code = status.HTTP_503_SERVICE_UNAVAILABLE
        return Response({'error': GENERIC_ERROR_MESSAGE}, status=code)

    return exception_handler(exc, context)
