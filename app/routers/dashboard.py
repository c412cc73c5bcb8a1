# app/routers/dashboard.py
from fastapi import APIRouter, Depends
from app.backend_client import get_backend
from app.config import settings
from app.services.dashboard_service import build_dashboard

router = APIRouter()


@router.get("/dashboard", summary="Dashboard — KPIs, costs, utilisation, upcoming services")
def get_dashboard(backend=Depends(get_backend)):
    return build_dashboard(backend, limit=settings.UPCOMING_SERVICES_LIMIT)
