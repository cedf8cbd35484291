"""
Local ledger counting product deletions.
"""
from typing import List, Optional
from urllib.parse import quote

from django.core.cache import cache
from apps.inventory.entities import DeletionCount, now_iso


class DeletionLedger:
    """
    Deletion counts kept in the local cache.

    Entries are keyed by product name, so two products sharing a name, or a
    product renamed after a deletion, share one counter.

    Counts are bumped with ``cache.incr``, which is atomic on Redis, so
    concurrent deletions never lose an increment. The name index used by
    ``all()`` is a read-modify-write and is best-effort: a name first
    deleted by two workers at the same instant may be listed late, but its
    count stays reachable through ``get()``.
    """

    INDEX_KEY = 'deletion-ledger:index'
    KEY_PREFIX = 'deletion-ledger'

    @classmethod
    def _key(cls, product_name: str, part: str) -> str:
        # Names may hold spaces or other characters cache backends reject
        return f"{cls.KEY_PREFIX}:{quote(product_name, safe='')}:{part}"

    @classmethod
    def record(cls, product_name: str) -> DeletionCount:
        """Increment the count for a product name and stamp the time."""
        count_key = cls._key(product_name, 'count')
        cache.add(count_key, 0, timeout=None)
        count = cache.incr(count_key)

        last_deleted = now_iso()
        cache.set(cls._key(product_name, 'last'), last_deleted, timeout=None)

        names = cache.get(cls.INDEX_KEY) or []
        if product_name not in names:
            cache.set(cls.INDEX_KEY, names + [product_name], timeout=None)

        return DeletionCount(product_name=product_name, count=count, last_deleted=last_deleted)

    @classmethod
    def get(cls, product_name: str) -> Optional[DeletionCount]:
        count = cache.get(cls._key(product_name, 'count'))
        if not count:
            return None
        return DeletionCount(
            product_name=product_name,
            count=int(count),
            last_deleted=cache.get(cls._key(product_name, 'last')) or "",
        )

    @classmethod
    def all(cls) -> List[DeletionCount]:
        """All entries, most deleted first."""
        entries = [cls.get(name) for name in cache.get(cls.INDEX_KEY) or []]
        return sorted((e for e in entries if e), key=lambda e: e.count, reverse=True)
