# app/models/driver.py
from sqlalchemy import Column, Integer, String
from app.database import Base


class Driver(Base):
    __tablename__ = "drivers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(200))
    license = Column(String(20), unique=True, nullable=False, index=True)   # SA + 7 digits
    contact = Column(String(20))                                            # exactly 10 digits
    status = Column(String(20), nullable=False, default="available")        # available | in-use

    def __repr__(self):
        return f"<Driver {self.id} {self.name} license={self.license} status={self.status}>"
