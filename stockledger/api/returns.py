from fastapi import APIRouter, Depends, HTTPException

from stockledger.schemas.product_return import ReturnCreate, ReturnOut, ReturnStatusUpdate
from stockledger.services import return_service
from stockledger.store import InventoryStore, get_store

router = APIRouter(prefix="/returns", tags=["Returns"])


@router.get("", response_model=list[ReturnOut])
def list_returns(store: InventoryStore = Depends(get_store)):
    return return_service.list_returns(store)


@router.post("", response_model=ReturnOut, status_code=201)
def create_return(data: ReturnCreate, store: InventoryStore = Depends(get_store)):
    return return_service.create_return(store, data)


@router.get("/customer/{customer_id}", response_model=list[ReturnOut])
def returns_by_customer(customer_id: str, store: InventoryStore = Depends(get_store)):
    return return_service.list_returns_by_customer(store, customer_id)


@router.get("/{return_id}", response_model=ReturnOut)
def get_return(return_id: str, store: InventoryStore = Depends(get_store)):
    item = return_service.get_return(store, return_id)
    if not item:
        raise HTTPException(404, "Return not found")
    return item


@router.patch("/{return_id}/status", response_model=ReturnOut)
def update_return_status(return_id: str, data: ReturnStatusUpdate, store: InventoryStore = Depends(get_store)):
    item = return_service.update_return_status(store, return_id, data)
    if not item:
        raise HTTPException(404, "Return not found")
    return item
