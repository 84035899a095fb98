"""Client-side query cache keyed by query name and filter parameters."""

import logging
from collections import defaultdict
from typing import Any, Callable, Hashable, Optional

logger = logging.getLogger(__name__)

TRANSACTIONS = "transactions"
CATEGORIES = "categories"
BANK_ACCOUNTS = "bank_accounts"
ASSETS = "assets"
DASHBOARD = "dashboard"

CacheKey = tuple[Hashable, ...]


class QueryCache:
    """Cache of fetched lists and derived view models.

    Every fetch for a key takes a generation ticket with ``begin``. A result
    is only stored if no newer ``begin`` or ``invalidate`` happened for the
    same key in the meantime, so a superseded fetch never overwrites a newer
    one. Entries can always be dropped and recomputed from a fresh fetch.
    """

    def __init__(self) -> None:
        self._entries: dict[CacheKey, Any] = {}
        self._generations: dict[CacheKey, int] = defaultdict(int)

    @staticmethod
    def key(name: str, **params: Hashable) -> CacheKey:
        """Build a cache key from a query name and its filter parameters."""
        return (name, *sorted(params.items()))

    def get(self, key: CacheKey, default: Optional[Any] = None) -> Any:
        return self._entries.get(key, default)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def begin(self, key: CacheKey) -> int:
        """Start a fetch for ``key`` and return its ticket."""
        self._generations[key] += 1
        return self._generations[key]

    def store(self, key: CacheKey, ticket: int, value: Any) -> bool:
        """Store a fetch result unless the ticket has been superseded.

        Returns:
            True if the value was stored
        """
        if ticket != self._generations[key]:
            logger.debug("Dropping stale result for %s (ticket %s)", key, ticket)
            return False
        self._entries[key] = value
        return True

    def fetch(self, key: CacheKey, loader: Callable[[], Any]) -> Any:
        """Return the cached value for ``key``, loading it on a miss."""
        if key in self._entries:
            return self._entries[key]
        ticket = self.begin(key)
        value = loader()
        self.store(key, ticket, value)
        return value

    def invalidate(self, *names: str) -> None:
        """Drop every entry whose query name is one of ``names``.

        In-flight fetches for those names are superseded as well.
        """
        for key in list(self._generations):
            if key[0] in names:
                self._generations[key] += 1
        for key in [key for key in self._entries if key[0] in names]:
            del self._entries[key]
        logger.debug("Invalidated cache entries for %s", ", ".join(names))

    def clear(self) -> None:
        self.invalidate(*{key[0] for key in self._generations})
