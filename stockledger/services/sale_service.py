import logging
from decimal import Decimal

from stockledger.config import settings
from stockledger.errors import Conflict, InvalidQuantity, InvalidTransition, NotFound, ReferentialGap
from stockledger.models.sale import Sale
from stockledger.models.serial_number import SerialNumber, SerialStatus
from stockledger.models.stock_movement import MovementType
from stockledger.schemas.sale import SaleCreate, StatsOut
from stockledger.services.product_service import get_low_stock_products
from stockledger.services.stock_movement_service import append_movement
from stockledger.store import InventoryStore

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _allocate_serials(
    store: InventoryStore, product_id: str, requested: list[str], quantity: int
) -> list[SerialNumber]:
    """Pick the unit serials a sale consumes.

    Explicit serials must be available units of the product. Any shortfall
    up to the quantity sold is filled with the oldest other available units;
    products whose stock has no serial rows simply sell untracked units.
    """
    if len(set(requested)) != len(requested):
        raise InvalidQuantity("Serial numbers in a sale must be distinct")
    if len(requested) > quantity:
        raise InvalidQuantity(
            f"{len(requested)} serial numbers given for a sale of {quantity} units"
        )

    units = []
    for value in requested:
        unit = next((s for s in store.serial_numbers.values() if s.serial_number == value), None)
        if not unit:
            raise NotFound(f"Serial number {value} not found")
        if unit.product_id != product_id:
            raise Conflict(f"Serial number {value} belongs to another product")
        if unit.status != SerialStatus.AVAILABLE:
            raise InvalidTransition(f"Serial number {value} is {unit.status.value}, not available")
        units.append(unit)

    chosen = {u.id for u in units}
    available = [
        s for s in store.serial_numbers.values()
        if s.product_id == product_id and s.status == SerialStatus.AVAILABLE and s.id not in chosen
    ]
    return units + available[:quantity - len(units)]


def create_sale(store: InventoryStore, data: SaleCreate, actor: str | None = None) -> Sale:
    """Record a sale, decrement stock and append the sale movement as one unit.

    Validation happens before the first write, so a rejected sale leaves the
    store untouched.
    """
    if data.quantity_sold <= 0:
        raise InvalidQuantity("Quantity sold must be positive")

    with store.transaction():
        product = store.products.get(data.product_id)
        if not product:
            raise NotFound(f"Product {data.product_id} not found")

        if data.customer_id and data.customer_id not in store.customers:
            if settings.STRICT_REFERENCES:
                raise ReferentialGap(f"Customer {data.customer_id} not found")
            logger.warning("Recording sale for unknown customer %s", data.customer_id)

        if product.quantity < data.quantity_sold:
            raise InvalidQuantity(
                f"Insufficient stock for {product.stock_code}. Available: {product.quantity}"
            )

        units = _allocate_serials(store, product.id, data.serial_numbers, data.quantity_sold)

        now = store.now()
        sale = Sale(
            product_id=product.id,
            customer_id=data.customer_id,
            quantity_sold=data.quantity_sold,
            sale_price=data.sale_price,
            total_amount=(data.sale_price * data.quantity_sold).quantize(CENTS),
            sale_date=now,
            notes=data.notes,
            serial_numbers=[u.serial_number for u in units],
        )
        store.sales[sale.id] = sale

        store.products[product.id] = product.model_copy(
            update={"quantity": product.quantity - data.quantity_sold, "updated_at": now}
        )
        append_movement(
            store,
            product.id,
            MovementType.SALE,
            data.quantity_sold,
            f"Sale - customer: {data.customer_id or '-'}",
            actor,
        )
        for unit in units:
            store.serial_numbers[unit.id] = unit.model_copy(
                update={"status": SerialStatus.SOLD, "sale_id": sale.id}
            )

    logger.info(
        "Sale %s: %d x %s for %s", sale.id, sale.quantity_sold, product.stock_code, sale.total_amount
    )
    return sale.model_copy(deep=True)


def get_sale(store: InventoryStore, sale_id: str) -> Sale | None:
    with store.transaction():
        sale = store.sales.get(sale_id)
        return sale.model_copy(deep=True) if sale else None


def list_sales(store: InventoryStore) -> list[Sale]:
    with store.transaction():
        sales = [s.model_copy(deep=True) for s in store.sales.values()]
    return sorted(sales, key=lambda s: s.sale_date, reverse=True)


def list_sales_by_product(store: InventoryStore, product_id: str) -> list[Sale]:
    return [s for s in list_sales(store) if s.product_id == product_id]


def list_sales_by_customer(store: InventoryStore, customer_id: str) -> list[Sale]:
    return [s for s in list_sales(store) if s.customer_id == customer_id]


def get_today_sales(store: InventoryStore) -> list[Sale]:
    """Sales dated on the current calendar day in the server's local time."""
    with store.transaction():
        today = store.now().astimezone().date()
        return [
            s.model_copy(deep=True) for s in store.sales.values()
            if s.sale_date.astimezone().date() == today
        ]


def get_sales_stats(store: InventoryStore) -> StatsOut:
    with store.transaction():
        today_total = sum((s.total_amount for s in get_today_sales(store)), Decimal("0.00"))
        return StatsOut(
            total_products=len(store.products),
            low_stock=len(get_low_stock_products(store)),
            today_sales=today_total,
            active_customers=len(store.customers),
        )
