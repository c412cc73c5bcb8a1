# app/schemas/auth.py
from pydantic import BaseModel
from typing import Optional


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    success: bool
    message: str
    legacy: bool = False
    access_token: Optional[str] = None
