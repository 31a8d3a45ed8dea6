import logging

from stockledger.config import settings
from stockledger.errors import DuplicateKey, InvalidQuantity, NotFound
from stockledger.models.product import Product
from stockledger.models.serial_number import SerialNumber
from stockledger.models.stock_movement import MovementType
from stockledger.schemas.product import ProductCreate, ProductUpdate, ReconcileOut
from stockledger.services.stock_movement_service import append_movement, ledger_quantity
from stockledger.store import InventoryStore

logger = logging.getLogger(__name__)

INITIAL_STOCK_REASON = "initial stock entry"
QUANTITY_EDIT_REASON = "quantity edited"
REQUIRED_FIELDS = ("stock_code", "product_name", "entry_price", "sale_price")


def _unit_serials(stock_code: str, quantity: int) -> list[str]:
    width = settings.SERIAL_PAD_WIDTH
    return [f"{stock_code}-{i:0{width}d}" for i in range(1, quantity + 1)]


def _find_by_stock_code(store: InventoryStore, stock_code: str) -> Product | None:
    return next((p for p in store.products.values() if p.stock_code == stock_code), None)


def create_product(store: InventoryStore, data: ProductCreate, actor: str | None = None) -> Product:
    with store.transaction():
        if _find_by_stock_code(store, data.stock_code):
            raise DuplicateKey(f"Stock code {data.stock_code} is already in use")

        serials = _unit_serials(data.stock_code, data.quantity) if data.quantity > 1 else []
        taken = {s.serial_number for s in store.serial_numbers.values()}
        clashes = [s for s in serials if s in taken]
        if clashes:
            raise DuplicateKey(f"Serial number {clashes[0]} is already in use")

        now = store.now()
        product = Product(**data.model_dump(), created_at=now, updated_at=now)
        product.qr_code = f"QR-{product.id}"
        store.products[product.id] = product

        if product.quantity > 0:
            append_movement(
                store, product.id, MovementType.IN, product.quantity, INITIAL_STOCK_REASON, actor
            )

        for value in serials:
            unit = SerialNumber(product_id=product.id, serial_number=value, created_at=now)
            store.serial_numbers[unit.id] = unit

    logger.info(
        "Created product %s (%s) with %d units, %d serials",
        product.stock_code, product.id, product.quantity, len(serials),
    )
    return product.model_copy()


def get_product(store: InventoryStore, product_id: str) -> Product | None:
    with store.transaction():
        product = store.products.get(product_id)
        return product.model_copy() if product else None


def get_product_by_stock_code(store: InventoryStore, stock_code: str) -> Product | None:
    with store.transaction():
        product = _find_by_stock_code(store, stock_code)
        return product.model_copy() if product else None


def get_product_by_serial_number(store: InventoryStore, serial_number: str) -> Product | None:
    """Lookup by the legacy single-serial field on the product itself."""
    with store.transaction():
        product = next(
            (p for p in store.products.values() if p.serial_number == serial_number), None
        )
        return product.model_copy() if product else None


def list_products(store: InventoryStore) -> list[Product]:
    with store.transaction():
        products = [p.model_copy() for p in store.products.values()]
    return sorted(products, key=lambda p: p.created_at, reverse=True)


def search_products(store: InventoryStore, query: str) -> list[Product]:
    q = query.lower()
    return [
        p for p in list_products(store)
        if q in p.product_name.lower()
        or q in p.stock_code.lower()
        or (p.serial_number and q in p.serial_number.lower())
    ]


def update_product(
    store: InventoryStore, product_id: str, data: ProductUpdate, actor: str | None = None
) -> Product | None:
    update_data = data.model_dump(exclude_unset=True)
    target_qty = update_data.pop("quantity", None)
    # Required fields cannot be cleared
    for field in REQUIRED_FIELDS:
        if field in update_data and update_data[field] is None:
            del update_data[field]

    with store.transaction():
        product = store.products.get(product_id)
        if not product:
            return None

        stock_code = update_data.get("stock_code")
        if stock_code is not None and stock_code != product.stock_code:
            holder = _find_by_stock_code(store, stock_code)
            if holder and holder.id != product.id:
                raise DuplicateKey(f"Stock code {stock_code} is already in use")

        if target_qty is not None:
            if target_qty < 0:
                raise InvalidQuantity("Quantity cannot be negative")
            delta = target_qty - product.quantity
            if delta:
                append_movement(
                    store, product.id, MovementType.ADJUSTMENT, delta, QUANTITY_EDIT_REASON, actor
                )
                update_data["quantity"] = target_qty

        update_data["updated_at"] = store.now()
        product = product.model_copy(update=update_data)
        store.products[product_id] = product

    return product.model_copy()


def delete_product(store: InventoryStore, product_id: str) -> bool:
    # Sales, movements, serials and returns keep their product_id
    with store.transaction():
        product = store.products.pop(product_id, None)
    if product:
        logger.info("Deleted product %s (%s)", product.stock_code, product.id)
    return product is not None


def get_low_stock_products(store: InventoryStore) -> list[Product]:
    default = settings.DEFAULT_LOW_STOCK_THRESHOLD
    with store.transaction():
        return [
            p.model_copy() for p in store.products.values()
            if p.quantity <= p.effective_threshold(default)
        ]


def reconcile_product(store: InventoryStore, product_id: str) -> ReconcileOut:
    """Compare a product's quantity against the signed sum of its movements."""
    with store.transaction():
        product = store.products.get(product_id)
        if not product:
            raise NotFound(f"Product {product_id} not found")
        ledger = ledger_quantity(store, product_id)
    return ReconcileOut(
        product_id=product_id,
        quantity=product.quantity,
        ledger_quantity=ledger,
        consistent=ledger == product.quantity,
    )
