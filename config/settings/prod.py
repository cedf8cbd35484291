"""
Production settings for Warehouse Stock Backend.
"""
from .base import *

DEBUG = False

for required in ('SECRET_KEY', 'ALLOWED_HOSTS', 'STORE_BASE_URL', 'REDIS_URL'):
    if not env(required, default=''):
        raise ValueError(f"{required} environment variable is required in production")

SECURE_SSL_REDIRECT = True
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'

CORS_ALLOW_ALL_ORIGINS = False

# Login is the only anonymous endpoint; keep secret-code guessing slow
REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {
    'anon': '30/hour',
    'user': '500/hour'
}

# Sessions expire after a working day unless the client logs out first
STOCK_SYSTEM['SESSION_TTL'] = 12 * 60 * 60

LOGGING['loggers']['django']['level'] = 'WARNING'

logs_dir = BASE_DIR / 'logs'
logs_dir.mkdir(exist_ok=True)

LOGGING['handlers']['file'] = {
    'class': 'logging.FileHandler',
    'filename': logs_dir / 'stock.log',
    'formatter': 'json',
}
LOGGING['loggers']['apps']['handlers'].append('file')

MIDDLEWARE.insert(0, 'django.middleware.security.SecurityMiddleware')
