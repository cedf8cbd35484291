"""
Request logging middleware for Warehouse Stock Backend.
"""
import logging
import time
import uuid

from django.http import HttpRequest, HttpResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = 'X-Request-ID'


class RequestLoggingMiddleware(MiddlewareMixin):
    """
    Logs each API call with its duration and the warehouseman behind it.

    A request id sent by the mobile client is reused so its logs and ours
    can be matched; otherwise a new one is generated.
    """

    def process_request(self, request: HttpRequest) -> None:
        request._started_at = time.perf_counter()
        request._request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        logger.debug("Request started", extra={
            'request_id': request._request_id,
            'method': request.method,
            'path': request.path,
            'event_type': 'request_start'
        })

    def process_response(self, request: HttpRequest, response: HttpResponse) -> HttpResponse:
        request_id = getattr(request, '_request_id', '')
        started_at = getattr(request, '_started_at', None)

        if started_at is not None:
            # DRF sets the authenticated warehouseman on the wrapped request
            user = getattr(request, 'user', None)
            level = logging.WARNING if response.status_code >= 500 else logging.INFO
            logger.log(level, f"{request.method} {request.path} -> {response.status_code}", extra={
                'request_id': request_id,
                'warehouseman_id': getattr(user, 'id', None),
                'status_code': response.status_code,
                'duration_ms': round((time.perf_counter() - started_at) * 1000, 2),
                'event_type': 'request_end'
            })

        response[REQUEST_ID_HEADER] = request_id
        return response
