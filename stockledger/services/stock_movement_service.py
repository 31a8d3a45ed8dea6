import logging

from stockledger.config import settings
from stockledger.errors import InvalidMovement, InvalidQuantity, NotFound
from stockledger.models.stock_movement import MovementType, StockMovement
from stockledger.schemas.stock_movement import StockMovementCreate
from stockledger.store import InventoryStore

logger = logging.getLogger(__name__)


def resolve_actor(actor: str | None) -> str:
    return actor or settings.SYSTEM_ACTOR


def append_movement(
    store: InventoryStore,
    product_id: str,
    movement_type: MovementType,
    quantity: int,
    reason: str | None,
    actor: str | None = None,
) -> StockMovement:
    """Append an audit row. The caller has already applied its quantity effect."""
    movement = StockMovement(
        product_id=product_id,
        type=movement_type,
        quantity=quantity,
        reason=reason,
        user_id=resolve_actor(actor),
        created_at=store.now(),
    )
    store.stock_movements[movement.id] = movement
    return movement


def create_stock_movement(
    store: InventoryStore, data: StockMovementCreate, actor: str | None = None
) -> StockMovement:
    if data.type == MovementType.SALE:
        raise InvalidMovement("Sale movements are recorded by the sale processor only")
    if data.type in (MovementType.IN, MovementType.OUT) and data.quantity <= 0:
        raise InvalidQuantity(f"Quantity for an '{data.type.value}' movement must be positive")
    if data.type == MovementType.ADJUSTMENT and data.quantity == 0:
        raise InvalidQuantity("Adjustment quantity must be non-zero")

    with store.transaction():
        product = store.products.get(data.product_id)
        if not product:
            raise NotFound(f"Product {data.product_id} not found")

        delta = -data.quantity if data.type == MovementType.OUT else data.quantity
        new_qty = product.quantity + delta
        if new_qty < 0:
            raise InvalidQuantity(
                f"Insufficient stock. Current: {product.quantity}, requested change: {delta}"
            )
        store.products[product.id] = product.model_copy(
            update={"quantity": new_qty, "updated_at": store.now()}
        )
        movement = append_movement(
            store, product.id, data.type, data.quantity, data.reason, data.user_id or actor
        )

    logger.info(
        "Stock movement %s on %s: %+d -> %d", data.type.value, product.stock_code, delta, new_qty
    )
    return movement.model_copy()


def list_stock_movements(store: InventoryStore) -> list[StockMovement]:
    with store.transaction():
        movements = [m.model_copy() for m in store.stock_movements.values()]
    return sorted(movements, key=lambda m: m.created_at, reverse=True)


def list_stock_movements_by_product(store: InventoryStore, product_id: str) -> list[StockMovement]:
    with store.transaction():
        movements = [m.model_copy() for m in store.stock_movements.values() if m.product_id == product_id]
    return sorted(movements, key=lambda m: m.created_at, reverse=True)


def ledger_quantity(store: InventoryStore, product_id: str) -> int:
    """Signed sum of every movement recorded for a product."""
    with store.transaction():
        return sum(m.delta for m in store.stock_movements.values() if m.product_id == product_id)
