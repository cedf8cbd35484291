"""
Test settings for Warehouse Stock Backend.
"""
from .base import *

DEBUG = False
SECRET_KEY = 'test-secret-key-not-for-production'
ALLOWED_HOSTS = ['testserver', 'localhost']

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'stock-test',
    }
}

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []

LOGGING['loggers']['apps']['level'] = 'WARNING'

STOCK_SYSTEM.update({
    'STORE_BASE_URL': 'http://store.test',
    'STORE_TIMEOUT': 5,
    'DEFAULT_WAREHOUSEMAN_ID': 1,
    'VERIFY_BEFORE_WRITE': False,
})
