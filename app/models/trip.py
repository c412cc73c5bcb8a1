# app/models/trip.py
"""
Trips table: a vehicle + driver assignment between two locations on a date.
Lifecycle: active → completed.
vehicle holds the plate and driver_id the driver row id; neither is a foreign key,
so historic trips survive driver/vehicle deletion.
"""

from sqlalchemy import Column, Integer, String, Date
from app.database import Base


class Trip(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle = Column(String(20), nullable=False, index=True)
    driver_id = Column(Integer, index=True)
    origin = Column(String(200), nullable=False)
    destination = Column(String(200), nullable=False)
    date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="active")   # active | completed

    def __repr__(self):
        return f"<Trip {self.id} {self.vehicle} {self.origin}→{self.destination} status={self.status}>"
