"""
Session store for logged-in warehousemen.
"""
import json
import logging
from typing import Optional

from django.conf import settings
from django.core.cache import cache
from apps.users.entities import Warehouseman

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Key-value store holding the logged-in identity per session.
    An absent or unparsable entry means logged out.
    """

    KEY_PREFIX = 'warehouseman-session'

    @classmethod
    def _key(cls, session_id: str) -> str:
        return f"{cls.KEY_PREFIX}:{session_id}"

    @classmethod
    def save(cls, session_id: str, warehouseman: Warehouseman) -> None:
        cache.set(
            cls._key(session_id),
            json.dumps(warehouseman.to_dict()),
            timeout=settings.STOCK_SYSTEM.get('SESSION_TTL'),
        )

    @classmethod
    def load(cls, session_id: str) -> Optional[Warehouseman]:
        raw = cache.get(cls._key(session_id))
        if not raw:
            return None

        try:
            return Warehouseman.from_dict(json.loads(raw))
        except (ValueError, TypeError, KeyError) as e:
            logger.warning(f"Discarding unreadable session {session_id}: {e}")
            return None

    @classmethod
    def clear(cls, session_id: str) -> None:
        cache.delete(cls._key(session_id))
