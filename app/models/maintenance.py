# app/models/maintenance.py
"""
Maintenance table: logged and scheduled service events per vehicle plate.
Rows dated today or later count as scheduled; scheduling inserts cost 0 and an empty provider.
"""

from sqlalchemy import Column, Integer, String, Date, Float
from app.database import Base


class MaintenanceRecord(Base):
    __tablename__ = "maintenance"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle = Column(String(20), nullable=False, index=True)
    service = Column(String(200), nullable=False)
    date = Column(Date, index=True)
    cost = Column(Float, nullable=False, default=0)
    provider = Column(String(200), nullable=False, default="")

    def __repr__(self):
        return f"<MaintenanceRecord {self.id} {self.vehicle} {self.service} on {self.date}>"
