# app/models/vehicle.py
"""
Vehicles table: one row per managed fleet vehicle.
Plates are stored normalised (uppercase alphanumeric) and referenced by trips and maintenance.
"""

from sqlalchemy import Column, Integer, String, Date
from app.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    plate = Column(String(20), unique=True, nullable=False, index=True)
    make = Column(String(100), nullable=False, default="")
    model = Column(String(100), nullable=False, default="")
    year = Column(Integer)
    status = Column(String(20), nullable=False, default="available", index=True)  # available | in-use | maintenance
    registration_date = Column(Date)
    location = Column(String(200))

    def __repr__(self):
        return f"<Vehicle {self.plate} {self.make} {self.model} status={self.status}>"
