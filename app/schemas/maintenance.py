# app/schemas/maintenance.py
from pydantic import BaseModel
from datetime import date as date_type
from typing import Optional


class MaintenanceCreate(BaseModel):
    vehicle: str = ""
    service: str = ""
    date: Optional[date_type] = None
    cost: float = 0
    provider: str = ""


class MaintenanceSchedule(BaseModel):
    vehicle: str = ""
    service: str = ""
    date: Optional[date_type] = None


class MaintenanceOut(BaseModel):
    id: int
    vehicle: str
    service: Optional[str] = None
    date: Optional[date_type] = None
    cost: float = 0
    provider: Optional[str] = None
