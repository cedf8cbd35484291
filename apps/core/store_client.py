"""
HTTP client for the remote product store.

The store is a plain JSON REST API holding products and warehousemen.
It has no transactions and no versioning; every write replaces the whole
record.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base exception for remote store failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class StoreNotFound(StoreError):
    """The requested resource does not exist in the store."""
    pass


class StoreUnavailable(StoreError):
    """The store could not be reached (connection error or timeout)."""
    pass


@dataclass
class StoreResponse:
    """Decoded store response."""
    data: Any
    status: int


class ProductStoreClient:
    """Thin wrapper around a requests session bound to the store base URL."""

    def __init__(self, base_url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        })

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> StoreResponse:
        return self._request('GET', path, params=params)

    def post(self, path: str, payload: Dict[str, Any]) -> StoreResponse:
        return self._request('POST', path, json=payload)

    def put(self, path: str, payload: Dict[str, Any]) -> StoreResponse:
        return self._request('PUT', path, json=payload)

    def delete(self, path: str) -> StoreResponse:
        return self._request('DELETE', path)

    def _request(self, method: str, path: str, **kwargs) -> StoreResponse:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("Store request", extra={
            'method': method,
            'url': url,
            'event_type': 'store_request'
        })

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            if status_code == 404:
                raise StoreNotFound(f"{method} {path} not found", status_code=404) from e
            logger.error(f"Store request failed: {method} {path} -> {status_code}", extra={
                'method': method,
                'url': url,
                'status_code': status_code,
                'event_type': 'store_error'
            })
            raise StoreError(f"Store returned {status_code} for {method} {path}", status_code=status_code) from e
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.error(f"Store unreachable: {method} {path}: {e}", extra={
                'method': method,
                'url': url,
                'event_type': 'store_unavailable'
            })
            raise StoreUnavailable(f"Store unreachable for {method} {path}") from e
        except requests.RequestException as e:
            logger.error(f"Store request error: {method} {path}: {e}", exc_info=True)
            raise StoreError(str(e)) from e

        # DELETE on the store answers with an empty object or no body
        data = response.json() if response.content else None
        return StoreResponse(data=data, status=response.status_code)


_client: Optional[ProductStoreClient] = None


def get_store_client() -> ProductStoreClient:
    """Return the process-wide store client built from settings."""
    global _client
    if _client is None:
        config = settings.STOCK_SYSTEM
        _client = ProductStoreClient(
            base_url=config['STORE_BASE_URL'],
            timeout=config['STORE_TIMEOUT'],
        )
    return _client
