"""
Development settings for Warehouse Stock Backend.

Expects a local copy of the product store (for example json-server on
port 3000) unless STORE_BASE_URL says otherwise.
"""
from .base import *

DEBUG = True
ALLOWED_HOSTS = ['*']

if not SECRET_KEY:
    SECRET_KEY = 'dev-insecure-secret-key'

# Sessions survive restarts only when Redis is configured
if not env('REDIS_URL', default=''):
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'stock-dev',
        }
    }

# The mobile client runs from an emulator or a dev server on another port
CORS_ALLOW_ALL_ORIGINS = True

REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {
    'anon': '1000/hour',
    'user': '10000/hour'
}

LOGGING['loggers']['apps']['level'] = 'DEBUG'

STOCK_SYSTEM.update({
    'ACCESS_TOKEN_HOURS': 72,
})
