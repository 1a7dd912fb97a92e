"""Client-local storage and the genre table cache.

``LocalStorage`` is a small string key/value store persisted as one JSON
file. ``GenreCache`` keeps the serialized genre table under a fixed key,
with no expiry: an entry stays until it is overwritten or invalidated.
"""

import json
from pathlib import Path
from typing import Dict, Optional

import structlog

logger = structlog.get_logger(__name__)

GENRE_CACHE_KEY = "tmdb_genres"

GenreTable = Dict[int, str]


class LocalStorage:
    """String key/value storage backed by a JSON file."""

    def __init__(self, path: Path) -> None:
        """Initialize storage.

        Args:
            path: JSON file holding the stored items. Created on first write.
        """
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Unreadable client storage, starting empty", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value for a key, or None when absent."""
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one.

        Args:
            key: Item key.
            value: Serialized value.
        """
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        """Remove a key. Removing an absent key is a no-op."""
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)


class GenreCache:
    """Genre table cache over client-local storage."""

    def __init__(self, storage: LocalStorage, key: str = GENRE_CACHE_KEY) -> None:
        self.storage = storage
        self.key = key

    def get(self) -> Optional[GenreTable]:
        """Return the cached table, or None on a miss.

        A stored value that does not parse as a genre table counts as a miss.
        """
        raw = self.storage.get_item(self.key)
        if raw is None:
            return None
        try:
            parsed = json.loads(raw)
            return {int(genre_id): str(name) for genre_id, name in parsed.items()}
        except (ValueError, TypeError, AttributeError):
            logger.info("Discarding corrupt genre cache entry", key=self.key)
            return None

    def set(self, table: GenreTable) -> None:
        """Store the genre table, replacing any cached one.

        Args:
            table: Genre id to name mapping.
        """
        self.storage.set_item(self.key, json.dumps({str(k): v for k, v in table.items()}))

    def invalidate(self) -> None:
        """Drop the cached table so the next lookup misses."""
        self.storage.remove_item(self.key)
