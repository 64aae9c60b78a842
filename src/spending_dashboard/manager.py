import threading

from spending_dashboard.domain.categories import add_category, remove_category
from spending_dashboard.ingest.importer import parse_transactions
from spending_dashboard.logger import get_logger
from spending_dashboard.models import DashboardView, TransactionRecord
from spending_dashboard.services.aggregation import DEFAULT_TOP_CATEGORIES, DashboardState, build_view
from spending_dashboard.storage.repository import DashboardRepository

logger = get_logger(__name__)


class DashboardService:
    def __init__(self,
                 repository: DashboardRepository,
                 top_categories: int = DEFAULT_TOP_CATEGORIES):
        self.repository = repository
        self.top_categories = top_categories
        self._lock = threading.Lock()
        self.state = DashboardState(
            transactions=tuple(repository.get_transactions()),
            ignored_categories=tuple(repository.get_ignored()),
        )
        logger.info(
            "Loaded %d transaction(s), %d ignored category name(s).",
            len(self.state.transactions),
            len(self.state.ignored_categories),
        )

    def import_csv(self, text: str) -> list[TransactionRecord]:
        """
        Replace the transaction list with the contents of an export.
        Parsing happens before the lock is taken, so a rejected file leaves
        the current state alone.
        """
        records = parse_transactions(text)
        with self._lock:
            self.state = DashboardState(
                transactions=tuple(records),
                ignored_categories=self.state.ignored_categories,
            )
            self.repository.set_transactions(records)
        logger.info("[IMPORT] Replaced transactions with %d record(s).", len(records))
        return records

    def add_ignored_category(self, category: str) -> bool:
        with self._lock:
            current = list(self.state.ignored_categories)
            updated = add_category(current, category)
            if updated is current:
                return False
            self.state = DashboardState(self.state.transactions, tuple(updated))
            self.repository.set_ignored(updated)
        logger.info("[IGNORE] Hiding category '%s'.", category)
        return True

    def remove_ignored_category(self, category: str) -> bool:
        with self._lock:
            current = list(self.state.ignored_categories)
            updated = remove_category(current, category)
            if updated is current:
                return False
            self.state = DashboardState(self.state.transactions, tuple(updated))
            self.repository.set_ignored(updated)
        logger.info("[IGNORE] Showing category '%s' again.", category)
        return True

    def clear_all(self) -> None:
        with self._lock:
            self.state = DashboardState()
            self.repository.clear_all()
        logger.info("All transactions and ignored categories cleared.")

    def view(self) -> DashboardView:
        return build_view(self.state, top_categories=self.top_categories)
