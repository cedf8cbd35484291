"""
Authentication service for Warehouse Stock Backend.
Warehousemen log in with the shared secret code stored on their record.
"""
import logging
from typing import Optional

from apps.core.store_client import ProductStoreClient, StoreError, get_store_client
from apps.users.entities import Warehouseman
from apps.users.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class AuthServiceError(Exception):
    """Raised when login or logout cannot be completed."""
    pass


class AuthService:
    """Service class for secret-code login and session lookup."""

    @staticmethod
    def login(secret_key: str, session_id: str, client: Optional[ProductStoreClient] = None) -> Optional[Warehouseman]:
        """
        Find the warehouseman owning a secret code and open a session.

        Args:
            secret_key: Code typed by the warehouse worker
            session_id: Identifier of the session to open
            client: Store client, defaults to the configured one

        Returns:
            The matching Warehouseman, or None if no record has this code

        Raises:
            AuthServiceError: If the store cannot be queried
        """
        client = client or get_store_client()

        try:
            response = client.get('/warehousemans')
        except StoreError as e:
            logger.error(f"Login error: {e}", exc_info=True)
            raise AuthServiceError("Login failed") from e

        for record in response.data or []:
            if record.get('secretKey') == secret_key:
                warehouseman = Warehouseman.from_dict(record)
                SessionStore.save(session_id, warehouseman)
                logger.info("Warehouseman logged in", extra={
                    'warehouseman_id': warehouseman.id,
                    'event_type': 'login'
                })
                return warehouseman

        logger.info("Login rejected: unknown secret code", extra={'event_type': 'login_failed'})
        return None

    @staticmethod
    def logout(session_id: str) -> None:
        SessionStore.clear(session_id)

    @staticmethod
    def get_current_user(session_id: str) -> Optional[Warehouseman]:
        """Return the logged-in warehouseman, or None when logged out."""
        return SessionStore.load(session_id)
