# app/models/user.py
"""
Admin accounts for the local backend.
Password sign-in requires a confirmed account; the legacy verify_user_password
RPC checks the hash only.
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean
from app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(200), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(200))
    is_confirmed = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<User {self.email} confirmed={self.is_confirmed}>"
