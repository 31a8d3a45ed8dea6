from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from stockledger.api.deps import get_actor
from stockledger.schemas.product import ProductCreate, ProductOut, ProductUpdate, ReconcileOut
from stockledger.services import product_service
from stockledger.services.qr_service import generate_product_label
from stockledger.store import InventoryStore, get_store

router = APIRouter(prefix="/products", tags=["Products"])


@router.post("", response_model=ProductOut, status_code=201)
def create_product(
    data: ProductCreate,
    store: InventoryStore = Depends(get_store),
    actor: str | None = Depends(get_actor),
):
    return product_service.create_product(store, data, actor=actor)


@router.get("", response_model=list[ProductOut])
def list_products(store: InventoryStore = Depends(get_store)):
    return product_service.list_products(store)


@router.get("/low-stock", response_model=list[ProductOut])
def low_stock(store: InventoryStore = Depends(get_store)):
    return product_service.get_low_stock_products(store)


@router.get("/search/{query}", response_model=list[ProductOut])
def search_products(query: str, store: InventoryStore = Depends(get_store)):
    return product_service.search_products(store, query)


@router.get("/stock-code/{stock_code}", response_model=ProductOut)
def get_by_stock_code(stock_code: str, store: InventoryStore = Depends(get_store)):
    product = product_service.get_product_by_stock_code(store, stock_code)
    if not product:
        raise HTTPException(404, "Product not found")
    return product


@router.get("/serial/{serial_number}", response_model=ProductOut)
def get_by_serial_number(serial_number: str, store: InventoryStore = Depends(get_store)):
    product = product_service.get_product_by_serial_number(store, serial_number)
    if not product:
        raise HTTPException(404, "Product not found")
    return product


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, store: InventoryStore = Depends(get_store)):
    product = product_service.get_product(store, product_id)
    if not product:
        raise HTTPException(404, "Product not found")
    return product


@router.patch("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: str,
    data: ProductUpdate,
    store: InventoryStore = Depends(get_store),
    actor: str | None = Depends(get_actor),
):
    product = product_service.update_product(store, product_id, data, actor=actor)
    if not product:
        raise HTTPException(404, "Product not found")
    return product


@router.delete("/{product_id}")
def delete_product(product_id: str, store: InventoryStore = Depends(get_store)):
    if not product_service.delete_product(store, product_id):
        raise HTTPException(404, "Product not found")
    return {"detail": "Product deleted"}


@router.get("/{product_id}/reconcile", response_model=ReconcileOut)
def reconcile(product_id: str, store: InventoryStore = Depends(get_store)):
    return product_service.reconcile_product(store, product_id)


@router.get("/{product_id}/qrcode")
def get_qrcode(product_id: str, store: InventoryStore = Depends(get_store)):
    """Printable QR label for a product, rendered on the fly."""
    product = product_service.get_product(store, product_id)
    if not product:
        raise HTTPException(404, "Product not found")
    return Response(content=generate_product_label(product), media_type="image/png")
