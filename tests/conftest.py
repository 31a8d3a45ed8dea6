# Shared fixtures for the stock ledger test suite
#
# - A fresh InventoryStore per test, driven by a controllable clock
# - Factories for products and customers
# - A TestClient bound to the same store through dependency overrides

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from stockledger.main import app
from stockledger.schemas.customer import CustomerCreate
from stockledger.schemas.product import ProductCreate
from stockledger.services import customer_service, product_service
from stockledger.store import InventoryStore, get_store


class FrozenClock:
    """Clock that only moves when a test advances it."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(clock) -> InventoryStore:
    return InventoryStore(clock=clock)


@pytest.fixture
def make_product(store):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        fields = {
            "stock_code": f"SKU{counter['n']}",
            "product_name": f"Product {counter['n']}",
            "quantity": 0,
            "entry_price": Decimal("4.00"),
            "sale_price": Decimal("10.00"),
        }
        fields.update(overrides)
        return product_service.create_product(store, ProductCreate(**fields))

    return _make


@pytest.fixture
def make_customer(store):
    def _make(name: str = "Acme Ltd", **overrides):
        return customer_service.create_customer(store, CustomerCreate(customer_name=name, **overrides))

    return _make


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
