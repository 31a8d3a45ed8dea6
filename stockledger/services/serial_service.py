import logging

from stockledger.config import settings
from stockledger.errors import DuplicateKey, InvalidTransition, ReferentialGap
from stockledger.models.serial_number import SerialNumber
from stockledger.schemas.serial_number import SerialNumberCreate, SerialNumberUpdate
from stockledger.store import InventoryStore

logger = logging.getLogger(__name__)


def _find(store: InventoryStore, value: str) -> SerialNumber | None:
    return next((s for s in store.serial_numbers.values() if s.serial_number == value), None)


def create_serial_number(store: InventoryStore, data: SerialNumberCreate) -> SerialNumber:
    with store.transaction():
        if _find(store, data.serial_number):
            raise DuplicateKey(f"Serial number {data.serial_number} is already in use")
        if data.product_id not in store.products:
            if settings.STRICT_REFERENCES:
                raise ReferentialGap(f"Product {data.product_id} not found")
            logger.warning("Serial %s registered for unknown product %s", data.serial_number, data.product_id)
        serial = SerialNumber(**data.model_dump(), created_at=store.now())
        store.serial_numbers[serial.id] = serial
    return serial.model_copy()


def get_serial_number(store: InventoryStore, value: str) -> SerialNumber | None:
    with store.transaction():
        serial = _find(store, value)
        return serial.model_copy() if serial else None


def list_serial_numbers(store: InventoryStore) -> list[SerialNumber]:
    with store.transaction():
        return [s.model_copy() for s in store.serial_numbers.values()]


def list_serial_numbers_by_product(store: InventoryStore, product_id: str) -> list[SerialNumber]:
    with store.transaction():
        return [s.model_copy() for s in store.serial_numbers.values() if s.product_id == product_id]


def update_serial_number(
    store: InventoryStore, serial_id: str, data: SerialNumberUpdate
) -> SerialNumber | None:
    update_data = data.model_dump(exclude_unset=True)
    # sale_id may be cleared, the others may not
    for field in ("serial_number", "status"):
        if field in update_data and update_data[field] is None:
            del update_data[field]

    with store.transaction():
        serial = store.serial_numbers.get(serial_id)
        if not serial:
            return None

        value = update_data.get("serial_number")
        if value and value != serial.serial_number and _find(store, value):
            raise DuplicateKey(f"Serial number {value} is already in use")

        status = update_data.get("status")
        if status is not None and not serial.can_transition(status):
            raise InvalidTransition(
                f"Serial {serial.serial_number} cannot go from {serial.status.value} to {status.value}"
            )

        serial = serial.model_copy(update=update_data)
        store.serial_numbers[serial_id] = serial

    if status is not None:
        logger.info("Serial %s is now %s", serial.serial_number, serial.status.value)
    return serial.model_copy()
