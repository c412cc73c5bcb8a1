# app/schemas/trip.py
from pydantic import BaseModel
from datetime import date as date_type
from typing import Optional, Literal

TripStatus = Literal["active", "completed"]


class TripCreate(BaseModel):
    vehicle: str = ""
    driver_id: Optional[int] = None
    origin: str = ""
    destination: str = ""
    date: Optional[date_type] = None
    status: TripStatus = "active"


class TripOut(BaseModel):
    id: int
    vehicle: str
    driver_id: Optional[int] = None
    driver_name: str = "Unassigned"
    origin: str
    destination: str
    date: date_type
    status: str


class TripSummaryOut(BaseModel):
    active: int
    completed: int
    total: int


class TripWriteResult(BaseModel):
    """Outcome of a trip insert/completion plus its dependent status writes."""
    trip: dict
    driver_updated: bool
    vehicle_updated: bool
    warnings: list[str] = []
