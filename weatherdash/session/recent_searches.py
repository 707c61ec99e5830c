"""Most-recent-first list of successfully looked-up location names."""

import logging

from weatherdash.storage import recent_repo
from weatherdash.storage.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

MAX_RECENT = 5
RECENT_KEY = "recent_searches"


def push_recent(names: list[str], name: str, limit: int = MAX_RECENT) -> list[str]:
    """Return ``names`` with ``name`` moved (or added) to the front, capped at ``limit``."""
    return [name, *(n for n in names if n != name)][:limit]


class RecentSearches:
    """Loaded once from the store; every mutation is written straight back."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str = RECENT_KEY,
        limit: int = MAX_RECENT,
    ):
        self.store = store
        self.key = key
        self.limit = limit
        self._names = recent_repo.load_recent(store, key, limit)

    @property
    def items(self) -> list[str]:
        return list(self._names)

    def record(self, name: str) -> list[str]:
        """Persist first; the in-memory list only changes once the write succeeds."""
        names = push_recent(self._names, name, self.limit)
        recent_repo.save_recent(self.store, self.key, names)
        self._names = names
        return self.items

    def clear(self) -> None:
        recent_repo.delete_recent(self.store, self.key)
        self._names = []
        logger.info("Recent searches cleared")

    def __len__(self) -> int:
        return len(self._names)
