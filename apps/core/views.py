"""
Health endpoints for Warehouse Stock Backend.
"""
from django.core.cache import cache
from django.http import HttpResponse, JsonResponse
from django.utils import timezone
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_GET
from apps.core.store_client import StoreError, get_store_client

CACHE_PROBE_KEY = 'health-probe'


def _check_store() -> dict:
    try:
        get_store_client().get('/products', params={'_limit': 1})
    except StoreError as e:
        return {'status': 'unhealthy', 'error': str(e)}
    return {'status': 'healthy'}


def _check_cache() -> dict:
    # Sessions and the deletion ledger depend on the cache
    try:
        cache.set(CACHE_PROBE_KEY, 'ok', 10)
        if cache.get(CACHE_PROBE_KEY) != 'ok':
            return {'status': 'unhealthy', 'error': 'cache read back a different value'}
    except Exception as e:
        return {'status': 'unhealthy', 'error': str(e)}
    return {'status': 'healthy'}


@never_cache
@require_GET
def health_check(request):
    """
    Report whether the remote product store and the local cache respond.
    Answers 503 when either one does not.
    """
    checks = {
        'store': _check_store(),
        'cache': _check_cache(),
    }
    healthy = all(check['status'] == 'healthy' for check in checks.values())

    return JsonResponse({
        'status': 'healthy' if healthy else 'unhealthy',
        'timestamp': timezone.now().isoformat(),
        'checks': checks,
    }, status=200 if healthy else 503)


@never_cache
@require_GET
def readiness_check(request):
    return HttpResponse("Ready", content_type="text/plain")


@never_cache
@require_GET
def liveness_check(request):
    return HttpResponse("Alive", content_type="text/plain")
