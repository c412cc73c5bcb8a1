# app/schemas/vehicle.py
from pydantic import BaseModel
from datetime import date as date_type
from typing import Optional, Literal

VehicleStatus = Literal["available", "in-use", "maintenance"]


class VehicleCreate(BaseModel):
    plate: str
    make: str = ""
    model: str = ""
    year: Optional[int] = None          # defaults to the current year
    status: VehicleStatus = "available"
    registration_date: Optional[date_type] = None
    location: Optional[str] = None


class VehicleStatusUpdate(BaseModel):
    status: VehicleStatus


class VehicleOut(BaseModel):
    id: int
    plate: str
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    status: str
    registration_date: Optional[date_type] = None
    location: Optional[str] = None
    last_destination: str = ""


class NextService(BaseModel):
    date: date_type
    service: Optional[str] = None


class VehicleDetailOut(BaseModel):
    vehicle: VehicleOut
    next_service: Optional[NextService] = None
    maintenance_logs: list[dict]
