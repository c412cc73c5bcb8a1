# app/routers/trips.py
"""Trips page — trip log, assignment and completion."""

from fastapi import APIRouter, Depends
from app.backend_client import get_backend
from app.schemas.trip import TripCreate, TripOut, TripSummaryOut, TripWriteResult
from app.services import trip_service, driver_service

router = APIRouter()


@router.get("/trips", response_model=list[TripOut], summary="Trips — trip log")
def list_trips(backend=Depends(get_backend)):
    return trip_service.list_trips(backend)


@router.get("/trips/summary", response_model=TripSummaryOut, summary="Trips — active/completed counts")
def get_trip_summary(backend=Depends(get_backend)):
    trips = backend.table("trips").select("id,status").execute()
    return trip_service.trip_summary(trips)


@router.get("/trips/assignable", summary="Trips — vehicles and drivers free for a new trip")
def get_assignable(backend=Depends(get_backend)):
    return {
        "vehicles": trip_service.assignable_vehicles(backend),
        "drivers": driver_service.list_available_drivers(backend),
    }


@router.post("/trips", response_model=TripWriteResult, status_code=201, summary="Trips — assign a new trip")
def assign_trip(body: TripCreate, backend=Depends(get_backend)):
    """
    Inserts the trip, then marks its driver and vehicle in-use.
    A failed status update is reported in `warnings`; the trip stays assigned.
    """
    return trip_service.create_trip(backend, body.model_dump())


@router.post("/trips/{trip_id}/complete", response_model=TripWriteResult, summary="Trips — complete a trip")
def complete_trip(trip_id: int, backend=Depends(get_backend)):
    """Marks the trip completed, then releases its driver and vehicle."""
    return trip_service.complete_trip(backend, trip_id)
