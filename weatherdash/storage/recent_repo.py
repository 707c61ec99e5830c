"""Repository for the persisted recent-search record (a JSON array of names)."""

import json
import logging

from weatherdash.storage.kv_store import KeyValueStore

logger = logging.getLogger(__name__)


def load_recent(store: KeyValueStore, key: str, limit: int) -> list[str]:
    """Load the recent-search list. Absent or malformed records load as empty."""
    raw = store.get(key)
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Discarding unparseable recent-search record %r", key)
        return []
    if not isinstance(data, list):
        logger.warning("Discarding non-list recent-search record %r", key)
        return []

    names: list[str] = []
    for item in data:
        if isinstance(item, str) and item not in names:
            names.append(item)
    return names[:limit]


def save_recent(store: KeyValueStore, key: str, names: list[str]) -> None:
    store.set(key, json.dumps(names))


def delete_recent(store: KeyValueStore, key: str) -> None:
    store.delete(key)
