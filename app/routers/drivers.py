# app/routers/drivers.py
"""Drivers page — list, search, add and delete drivers."""

from fastapi import APIRouter, Depends
from app.backend_client import get_backend
from app.schemas.driver import DriverCreate, DriverOut
from app.services import driver_service

router = APIRouter()


@router.get("/drivers", response_model=list[DriverOut], summary="Drivers — list drivers")
def list_drivers(search: str = None, backend=Depends(get_backend)):
    """Search matches name or license number, case-insensitive."""
    return driver_service.list_drivers(backend, search=search)


@router.get("/drivers/available", response_model=list[DriverOut], summary="Drivers — not on a trip")
def list_available_drivers(backend=Depends(get_backend)):
    return driver_service.list_available_drivers(backend)


@router.post("/drivers", response_model=DriverOut, status_code=201, summary="Drivers — add a driver")
def add_driver(body: DriverCreate, backend=Depends(get_backend)):
    return driver_service.create_driver(backend, body.model_dump())


@router.delete("/drivers/{driver_id}", summary="Drivers — delete a driver")
def remove_driver(driver_id: int, backend=Depends(get_backend)):
    driver = driver_service.delete_driver(backend, driver_id)
    return {"status": "deleted", "id": driver_id, "name": driver.get("name")}
