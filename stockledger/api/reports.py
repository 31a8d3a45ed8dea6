from fastapi import APIRouter, Depends, HTTPException

from stockledger.schemas.sale import StatsOut
from stockledger.services import product_service, sale_service
from stockledger.services.qr_service import generate_qr_data_url
from stockledger.store import InventoryStore, get_store

router = APIRouter(tags=["Reports"])


@router.get("/stats", response_model=StatsOut)
def stats(store: InventoryStore = Depends(get_store)):
    return sale_service.get_sales_stats(store)


@router.get("/qr/{product_id}")
def product_qr(product_id: str, store: InventoryStore = Depends(get_store)):
    """QR code of the product payload as a data URL, for embedding in pages."""
    product = product_service.get_product(store, product_id)
    if not product:
        raise HTTPException(404, "Product not found")
    return {"qr_code": generate_qr_data_url(product)}
