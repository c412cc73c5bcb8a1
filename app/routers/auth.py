# app/routers/auth.py
"""Login page — password sign-in and demo account sign-in."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from app.backend_client import get_backend
from app.config import settings
from app.schemas.auth import LoginRequest, LoginResponse
from app.services.auth_service import login, demo_login, LoginResult

router = APIRouter()


def _respond(result: LoginResult):
    body = LoginResponse(
        success=result.success,
        message=result.message,
        legacy=result.legacy,
        access_token=result.access_token,
    )
    if not result.success:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content=body.model_dump())
    return body


@router.post("/auth/login", response_model=LoginResponse, summary="Sign in with email and password")
def sign_in(body: LoginRequest, backend=Depends(get_backend)):
    return _respond(login(backend, body.email, body.password))


@router.post("/auth/demo", response_model=LoginResponse, summary="Sign in with the demo account")
def sign_in_demo(backend=Depends(get_backend)):
    """Only available when DEMO_EMAIL is configured."""
    return _respond(demo_login(backend, settings.DEMO_EMAIL, settings.DEMO_PASSWORD))
