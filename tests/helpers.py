"""
Shared test helpers.
"""
import copy

from apps.core.store_client import StoreResponse


PARIS = {'city': 'Paris', 'latitude': 48.8566, 'longitude': 2.3522}
LYON = {'city': 'Lyon', 'latitude': 45.764, 'longitude': 4.8357}


def store_response(data, status=200):
    """Build a store response as returned by the store client."""
    return StoreResponse(data=data, status=status)


def echo_write(path, payload):
    """PUT/POST double returning what was written, as the store does."""
    return StoreResponse(data=copy.deepcopy(payload), status=200)
