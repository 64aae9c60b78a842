from typing import Any

from pydantic import TypeAdapter, ValidationError

from spending_dashboard.domain.categories import normalize_category_list
from spending_dashboard.logger import get_logger
from spending_dashboard.models import TransactionRecord
from spending_dashboard.storage.store import KeyValueStore

logger = get_logger(__name__)

TX_KEY = "transactions"
IGNORED_KEY = "ignoredCategories"

_transactions_adapter = TypeAdapter(list[TransactionRecord])


class DashboardRepository:
    """The two durable collections on top of a key-value store.

    Reads never raise: a missing, unreadable or malformed value comes back as
    an empty list. Write failures are logged and the caller carries on.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _read(self, key: str) -> Any | None:
        try:
            return self.store.get(key)
        except Exception:
            logger.exception("[STORE] Failed to read '%s'.", key)
            return None

    def _write(self, key: str, value: Any) -> None:
        try:
            self.store.set(key, value)
        except Exception:
            logger.exception("[STORE] Failed to write '%s'.", key)

    def _remove(self, key: str) -> None:
        try:
            self.store.remove(key)
        except Exception:
            logger.exception("[STORE] Failed to remove '%s'.", key)

    # Transactions

    def get_transactions(self) -> list[TransactionRecord]:
        raw = self._read(TX_KEY)
        if raw is None:
            return []
        try:
            return _transactions_adapter.validate_python(raw)
        except ValidationError as exc:
            logger.warning("[STORE] Stored transactions are malformed (%d error(s)); ignoring them.", exc.error_count())
            return []

    def set_transactions(self, records: list[TransactionRecord]) -> None:
        self._write(TX_KEY, _transactions_adapter.dump_python(records, by_alias=True))

    def clear_transactions(self) -> None:
        self._remove(TX_KEY)

    # Ignored categories

    def get_ignored(self) -> list[str]:
        return normalize_category_list(self._read(IGNORED_KEY))

    def set_ignored(self, categories: list[str]) -> None:
        self._write(IGNORED_KEY, list(categories))

    def clear_ignored(self) -> None:
        self._remove(IGNORED_KEY)

    # Everything

    def clear_all(self) -> None:
        self.clear_transactions()
        self.clear_ignored()
