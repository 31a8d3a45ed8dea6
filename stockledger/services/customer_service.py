from stockledger.models.customer import Customer
from stockledger.schemas.customer import CustomerCreate, CustomerUpdate
from stockledger.store import InventoryStore


def create_customer(store: InventoryStore, data: CustomerCreate) -> Customer:
    with store.transaction():
        customer = Customer(**data.model_dump(), created_at=store.now())
        store.customers[customer.id] = customer
    return customer.model_copy()


def get_customer(store: InventoryStore, customer_id: str) -> Customer | None:
    with store.transaction():
        customer = store.customers.get(customer_id)
        return customer.model_copy() if customer else None


def list_customers(store: InventoryStore) -> list[Customer]:
    with store.transaction():
        return [c.model_copy() for c in store.customers.values()]


def update_customer(store: InventoryStore, customer_id: str, data: CustomerUpdate) -> Customer | None:
    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("customer_name", "") is None:
        del update_data["customer_name"]
    with store.transaction():
        customer = store.customers.get(customer_id)
        if not customer:
            return None
        customer = customer.model_copy(update=update_data)
        store.customers[customer_id] = customer
    return customer.model_copy()
