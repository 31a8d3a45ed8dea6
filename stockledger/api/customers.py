from fastapi import APIRouter, Depends, HTTPException

from stockledger.schemas.customer import CustomerCreate, CustomerOut, CustomerUpdate
from stockledger.services import customer_service
from stockledger.store import InventoryStore, get_store

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("", response_model=list[CustomerOut])
def list_customers(store: InventoryStore = Depends(get_store)):
    return customer_service.list_customers(store)


@router.post("", response_model=CustomerOut, status_code=201)
def create_customer(data: CustomerCreate, store: InventoryStore = Depends(get_store)):
    return customer_service.create_customer(store, data)


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(customer_id: str, store: InventoryStore = Depends(get_store)):
    customer = customer_service.get_customer(store, customer_id)
    if not customer:
        raise HTTPException(404, "Customer not found")
    return customer


@router.patch("/{customer_id}", response_model=CustomerOut)
def update_customer(customer_id: str, data: CustomerUpdate, store: InventoryStore = Depends(get_store)):
    customer = customer_service.update_customer(store, customer_id, data)
    if not customer:
        raise HTTPException(404, "Customer not found")
    return customer
