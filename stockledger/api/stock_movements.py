from fastapi import APIRouter, Depends

from stockledger.api.deps import get_actor
from stockledger.schemas.stock_movement import StockMovementCreate, StockMovementOut
from stockledger.services import stock_movement_service
from stockledger.store import InventoryStore, get_store

router = APIRouter(prefix="/stock-movements", tags=["Stock Movements"])


@router.get("", response_model=list[StockMovementOut])
def list_movements(store: InventoryStore = Depends(get_store)):
    return stock_movement_service.list_stock_movements(store)


@router.get("/product/{product_id}", response_model=list[StockMovementOut])
def movements_by_product(product_id: str, store: InventoryStore = Depends(get_store)):
    return stock_movement_service.list_stock_movements_by_product(store, product_id)


@router.post("", response_model=StockMovementOut, status_code=201)
def create_movement(
    data: StockMovementCreate,
    store: InventoryStore = Depends(get_store),
    actor: str | None = Depends(get_actor),
):
    return stock_movement_service.create_stock_movement(store, data, actor=actor)
