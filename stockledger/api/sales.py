from fastapi import APIRouter, Depends, HTTPException

from stockledger.api.deps import get_actor
from stockledger.schemas.sale import SaleCreate, SaleOut
from stockledger.services import sale_service
from stockledger.store import InventoryStore, get_store

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.get("", response_model=list[SaleOut])
def list_sales(store: InventoryStore = Depends(get_store)):
    return sale_service.list_sales(store)


@router.post("", response_model=SaleOut, status_code=201)
def create_sale(
    data: SaleCreate,
    store: InventoryStore = Depends(get_store),
    actor: str | None = Depends(get_actor),
):
    return sale_service.create_sale(store, data, actor=actor)


@router.get("/today", response_model=list[SaleOut])
def today_sales(store: InventoryStore = Depends(get_store)):
    return sale_service.get_today_sales(store)


@router.get("/product/{product_id}", response_model=list[SaleOut])
def sales_by_product(product_id: str, store: InventoryStore = Depends(get_store)):
    return sale_service.list_sales_by_product(store, product_id)


@router.get("/customer/{customer_id}", response_model=list[SaleOut])
def sales_by_customer(customer_id: str, store: InventoryStore = Depends(get_store)):
    return sale_service.list_sales_by_customer(store, customer_id)


@router.get("/{sale_id}", response_model=SaleOut)
def get_sale(sale_id: str, store: InventoryStore = Depends(get_store)):
    sale = sale_service.get_sale(store, sale_id)
    if not sale:
        raise HTTPException(404, "Sale not found")
    return sale
