# app/schemas/driver.py
from pydantic import BaseModel
from typing import Optional, Literal

DriverStatus = Literal["available", "in-use"]


class DriverCreate(BaseModel):
    name: str
    email: str = ""
    license: str
    contact: str
    status: DriverStatus = "available"


class DriverOut(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    license: str
    contact: Optional[str] = None
    status: str              # "assigned" rows from older data pass through unchanged
    initials: str = ""
