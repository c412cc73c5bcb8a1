# app/routers/maintenance.py
"""Maintenance page — service logs, scheduling and next scheduled service per vehicle."""

from fastapi import APIRouter, Depends
from app.backend_client import get_backend
from app.schemas.maintenance import MaintenanceCreate, MaintenanceSchedule, MaintenanceOut
from app.services import maintenance_service

router = APIRouter()


@router.get("/maintenance", response_model=list[MaintenanceOut], summary="Maintenance — all records")
def list_records(backend=Depends(get_backend)):
    return maintenance_service.list_records(backend)


@router.get("/maintenance/next-services", summary="Maintenance — next scheduled service per plate")
def get_next_services(backend=Depends(get_backend)):
    return maintenance_service.fetch_next_services(backend)


@router.get("/maintenance/scheduled-vehicles", response_model=list[str],
            summary="Maintenance — plates with a service scheduled today or later")
def get_scheduled_vehicles(backend=Depends(get_backend)):
    return maintenance_service.scheduled_vehicles(backend)


@router.post("/maintenance", response_model=MaintenanceOut, status_code=201, summary="Maintenance — log a service")
def log_service(body: MaintenanceCreate, backend=Depends(get_backend)):
    return maintenance_service.log_service(backend, body.model_dump())


@router.post("/maintenance/schedule", response_model=MaintenanceOut, status_code=201,
             summary="Maintenance — schedule a service")
def schedule_service(body: MaintenanceSchedule, backend=Depends(get_backend)):
    """Scheduled services are stored with cost 0 and no provider."""
    return maintenance_service.schedule_service(backend, body.model_dump())
