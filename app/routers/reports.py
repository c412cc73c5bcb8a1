# app/routers/reports.py
"""Reports page — summary figures, utilisation, monthly trends and CSV downloads."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from app.backend_client import get_backend
from app.services import report_service

router = APIRouter()


@router.get("/reports/summary", summary="Reports — totals")
def get_summary(backend=Depends(get_backend)):
    return report_service.report_summary(backend)


@router.get("/reports/utilization", summary="Reports — trips and maintenance cost per vehicle")
def get_utilization(backend=Depends(get_backend)):
    return report_service.vehicle_utilization(backend)


@router.get("/reports/monthly-trends", summary="Reports — trips and maintenance cost per month")
def get_monthly_trends(months: int = Query(6, ge=1, le=24), backend=Depends(get_backend)):
    return report_service.monthly_trends(backend, months=months)


@router.get("/reports/export/{dataset}", summary="Reports — download a dataset as CSV")
def export_dataset(dataset: str, backend=Depends(get_backend)):
    """dataset: utilization | vehicles | drivers | trips | maintenance"""
    filename, content = report_service.export_csv(backend, dataset)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
