# local.py
# ------------------------------------------------------------
# Device-local persistent state for the directory core.
# It:
#   - keeps a JSON key-value file on disk (LocalStorage)
#   - stores the last searches, most recent first (SearchHistory)
#   - stores viewed/favorited providers per kind (InteractionLog)
#   - stores provider ids dismissed from suggestions (DismissalSet)
# ------------------------------------------------------------

import json
import logging
import time
from pathlib import Path
from typing import List, Optional

from cityhealth.core.config import settings

logger = logging.getLogger(__name__)

SEARCH_HISTORY_KEY = "searchHistory"
DISMISSED_KEY = "dismissedSuggestions"
INTERACTIONS_KEY = "userInteractions"


class LocalStorage:
    """
    Small JSON-file key-value store.

    A missing or unreadable file behaves like an empty store; the file is
    rewritten whole on every change.
    """

    def __init__(self, path=None):
        self.path = Path(path or settings.LOCAL_STORAGE_PATH)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading local storage {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def get(self, key: str, default=None):
        return self._load().get(key, default)

    def set(self, key: str, value) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


class SearchHistory:
    def __init__(self, storage: LocalStorage, max_entries: int = None):
        self.storage = storage
        self.max_entries = max_entries or settings.HISTORY_MAX_ENTRIES

    def all(self) -> List[dict]:
        return self.storage.get(SEARCH_HISTORY_KEY, [])

    def latest(self) -> Optional[dict]:
        history = self.all()
        return history[0] if history else None

    def add(self, query: str = "", category=None, location=None) -> None:
        history = self.all()
        history.insert(
            0,
            {
                "query": query,
                "category": category,
                "location": location,
                "timestamp": time.time(),
            },
        )
        self.storage.set(SEARCH_HISTORY_KEY, history[: self.max_entries])

    def clear(self) -> None:
        self.storage.remove(SEARCH_HISTORY_KEY)


class InteractionLog:
    def __init__(self, storage: LocalStorage, max_per_kind: int = None):
        self.storage = storage
        self.max_per_kind = max_per_kind or settings.INTERACTIONS_MAX_ENTRIES

    def _load(self) -> dict:
        return self.storage.get(INTERACTIONS_KEY, {"viewed": [], "favorited": []})

    def recent(self, kind: str = "viewed") -> List[dict]:
        return self._load().get(kind, [])

    def track(self, provider_id: str, kind: str = "viewed", category=None) -> None:
        interactions = self._load()
        entries = interactions.get(kind, [])
        entries.insert(
            0, {"id": provider_id, "type": category, "timestamp": time.time()}
        )
        interactions[kind] = entries[: self.max_per_kind]
        self.storage.set(INTERACTIONS_KEY, interactions)


class DismissalSet:
    """Provider ids the user removed from suggestions. Only grows until cleared."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def ids(self) -> List[str]:
        return self.storage.get(DISMISSED_KEY, [])

    def is_dismissed(self, provider_id: str) -> bool:
        return provider_id in self.ids()

    def dismiss(self, provider_id: str) -> None:
        dismissed = self.ids()
        if provider_id not in dismissed:
            dismissed.append(provider_id)
            self.storage.set(DISMISSED_KEY, dismissed)

    def clear(self) -> None:
        self.storage.set(DISMISSED_KEY, [])
