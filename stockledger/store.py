"""Process-wide in-memory store owning every ledger collection."""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator

from stockledger.models.customer import Customer
from stockledger.models.product import Product
from stockledger.models.product_return import Return
from stockledger.models.sale import Sale
from stockledger.models.serial_number import SerialNumber
from stockledger.models.stock_movement import StockMovement

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InventoryStore:
    """Owns the six collections, keyed by identifier in insertion order.

    Service functions in ``stockledger.services`` are the only writers. Each
    of them runs inside ``transaction()``, which holds a re-entrant lock so
    composite operations (product creation, sales) can call each other while
    staying indivisible for concurrent callers.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._lock = threading.RLock()
        self._clock = clock
        self.products: dict[str, Product] = {}
        self.customers: dict[str, Customer] = {}
        self.sales: dict[str, Sale] = {}
        self.stock_movements: dict[str, StockMovement] = {}
        self.serial_numbers: dict[str, SerialNumber] = {}
        self.returns: dict[str, Return] = {}

    def now(self) -> datetime:
        return self._clock()

    @contextmanager
    def transaction(self) -> Iterator["InventoryStore"]:
        with self._lock:
            yield self

    def clear(self) -> None:
        with self._lock:
            self.products.clear()
            self.customers.clear()
            self.sales.clear()
            self.stock_movements.clear()
            self.serial_numbers.clear()
            self.returns.clear()


_store: InventoryStore | None = None


def init_store(clock: Callable[[], datetime] = utcnow) -> InventoryStore:
    global _store
    if _store is None:
        _store = InventoryStore(clock=clock)
        logger.info("Inventory store initialised")
    return _store


def close_store() -> None:
    global _store
    if _store is not None:
        _store.clear()
        _store = None
        logger.info("Inventory store closed")


def get_store() -> InventoryStore:
    """FastAPI dependency returning the process store."""
    if _store is None:
        raise RuntimeError("Inventory store is not initialised; call init_store() first")
    return _store
