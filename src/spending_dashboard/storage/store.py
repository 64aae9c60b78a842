import json
import os
from abc import ABC, abstractmethod
from typing import Any

from spending_dashboard.logger import get_logger

logger = get_logger(__name__)


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the stored value, or None when the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Drop the key. Removing an absent key is not an error."""
        pass


class InMemoryStore(KeyValueStore):
    def __init__(self, initial: dict[str, Any] | None = None):
        self.data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        return self.data.get(key)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """All keys live in a single JSON object on disk, rewritten on every change."""

    def __init__(self, data_path: str = "dashboard.json"):
        self.data_path = data_path
        self.data: dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        self.data = {}
        if not os.path.exists(self.data_path):
            return
        try:
            with open(self.data_path, encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("[STORE] Could not read %s (%s); starting empty.", self.data_path, exc)
            return
        if not isinstance(loaded, dict):
            logger.warning("[STORE] %s does not hold a JSON object; starting empty.", self.data_path)
            return
        self.data = loaded

    def save(self) -> None:
        tmp_path = f"{self.data_path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self.data, f, indent=2)
        os.replace(tmp_path, self.data_path)

    def get(self, key: str) -> Any | None:
        return self.data.get(key)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value
        self.save()

    def remove(self, key: str) -> None:
        if key in self.data:
            del self.data[key]
            self.save()
