# app/routers/vehicles.py
"""Fleet page — list, register, inspect and change status of fleet vehicles."""

from fastapi import APIRouter, Depends
from app.backend_client import get_backend
from app.schemas.vehicle import VehicleCreate, VehicleOut, VehicleStatusUpdate, VehicleDetailOut
from app.schemas.maintenance import MaintenanceOut
from app.services import vehicle_service

router = APIRouter()


@router.get("/vehicles", response_model=list[VehicleOut], summary="Fleet — list vehicles")
def list_vehicles(search: str = None, status: str = None, backend=Depends(get_backend)):
    """Search matches plate, make or model; status=all (or omitted) disables the status filter."""
    return vehicle_service.list_vehicles(backend, search=search, status=status)


@router.post("/vehicles", response_model=VehicleOut, status_code=201, summary="Fleet — register a vehicle")
def register_vehicle(body: VehicleCreate, backend=Depends(get_backend)):
    return vehicle_service.create_vehicle(backend, body.model_dump())


@router.get("/vehicles/{plate}", response_model=VehicleDetailOut, summary="Fleet — vehicle details")
def get_vehicle(plate: str, backend=Depends(get_backend)):
    """Vehicle row plus next scheduled service, maintenance history and last destination."""
    return vehicle_service.get_vehicle_detail(backend, plate)


@router.get("/vehicles/{plate}/maintenance", response_model=list[MaintenanceOut],
            summary="Fleet — maintenance log for one vehicle")
def get_vehicle_maintenance(plate: str, backend=Depends(get_backend)):
    return vehicle_service.vehicle_maintenance_logs(backend, plate)


@router.put("/vehicles/{vehicle_id}/status", response_model=VehicleOut, summary="Fleet — set vehicle status")
def update_vehicle_status(vehicle_id: int, body: VehicleStatusUpdate, backend=Depends(get_backend)):
    return vehicle_service.set_vehicle_status(backend, vehicle_id, body.status)


@router.delete("/vehicles/{vehicle_id}", summary="Fleet — remove a vehicle")
def remove_vehicle(vehicle_id: int, backend=Depends(get_backend)):
    vehicle = vehicle_service.delete_vehicle(backend, vehicle_id)
    return {"status": "removed", "plate": vehicle.get("plate")}
