"""Returns are recorded, not applied.

Creating a return never restocks the product, touches a serial's status or
writes a stock movement. Restocking is an explicit ``in`` movement plus a
serial update issued by the caller once the return is approved.
"""

import logging

from stockledger.config import settings
from stockledger.errors import InvalidTransition, ReferentialGap
from stockledger.models.product_return import CLOSED_STATUSES, RETURN_TRANSITIONS, Return
from stockledger.schemas.product_return import ReturnCreate, ReturnStatusUpdate
from stockledger.store import InventoryStore

logger = logging.getLogger(__name__)


def _missing_references(store: InventoryStore, data: ReturnCreate) -> list[str]:
    missing = []
    if data.sale_id not in store.sales:
        missing.append(f"sale {data.sale_id}")
    if data.product_id not in store.products:
        missing.append(f"product {data.product_id}")
    if data.customer_id not in store.customers:
        missing.append(f"customer {data.customer_id}")
    return missing


def create_return(store: InventoryStore, data: ReturnCreate) -> Return:
    with store.transaction():
        missing = _missing_references(store, data)
        if missing:
            if settings.STRICT_REFERENCES:
                raise ReferentialGap(f"Return references unknown {', '.join(missing)}")
            logger.warning("Recording return with unknown %s", ", ".join(missing))

        item = Return(**data.model_dump(), return_date=store.now())
        store.returns[item.id] = item

    logger.info("Return %s recorded for sale %s", item.id, item.sale_id)
    return item.model_copy()


def get_return(store: InventoryStore, return_id: str) -> Return | None:
    with store.transaction():
        item = store.returns.get(return_id)
        return item.model_copy() if item else None


def list_returns(store: InventoryStore) -> list[Return]:
    with store.transaction():
        items = [r.model_copy() for r in store.returns.values()]
    return sorted(items, key=lambda r: r.return_date, reverse=True)


def list_returns_by_customer(store: InventoryStore, customer_id: str) -> list[Return]:
    with store.transaction():
        return [r.model_copy() for r in store.returns.values() if r.customer_id == customer_id]


def update_return_status(
    store: InventoryStore, return_id: str, data: ReturnStatusUpdate
) -> Return | None:
    with store.transaction():
        item = store.returns.get(return_id)
        if not item:
            return None
        if data.status != item.status and data.status not in RETURN_TRANSITIONS[item.status]:
            raise InvalidTransition(
                f"Return cannot go from {item.status.value} to {data.status.value}"
            )

        update_data = {"status": data.status}
        if data.notes is not None:
            update_data["notes"] = data.notes
        if data.status in CLOSED_STATUSES and item.resolution_date is None:
            update_data["resolution_date"] = store.now()
        item = item.model_copy(update=update_data)
        store.returns[return_id] = item

    return item.model_copy()
