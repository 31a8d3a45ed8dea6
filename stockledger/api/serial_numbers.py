from fastapi import APIRouter, Depends, HTTPException

from stockledger.schemas.serial_number import SerialNumberCreate, SerialNumberOut, SerialNumberUpdate
from stockledger.services import serial_service
from stockledger.store import InventoryStore, get_store

router = APIRouter(prefix="/serial-numbers", tags=["Serial Numbers"])


@router.get("", response_model=list[SerialNumberOut])
def list_serial_numbers(store: InventoryStore = Depends(get_store)):
    return serial_service.list_serial_numbers(store)


@router.get("/product/{product_id}", response_model=list[SerialNumberOut])
def serial_numbers_by_product(product_id: str, store: InventoryStore = Depends(get_store)):
    return serial_service.list_serial_numbers_by_product(store, product_id)


@router.get("/{serial_number}", response_model=SerialNumberOut)
def get_serial_number(serial_number: str, store: InventoryStore = Depends(get_store)):
    serial = serial_service.get_serial_number(store, serial_number)
    if not serial:
        raise HTTPException(404, "Serial number not found")
    return serial


@router.post("", response_model=SerialNumberOut, status_code=201)
def create_serial_number(data: SerialNumberCreate, store: InventoryStore = Depends(get_store)):
    return serial_service.create_serial_number(store, data)


@router.patch("/{serial_id}", response_model=SerialNumberOut)
def update_serial_number(serial_id: str, data: SerialNumberUpdate, store: InventoryStore = Depends(get_store)):
    serial = serial_service.update_serial_number(store, serial_id, data)
    if not serial:
        raise HTTPException(404, "Serial number not found")
    return serial
