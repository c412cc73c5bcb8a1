# app/services/vehicle_service.py
"""
Fleet page: vehicle listing, registration and status changes.

Plate uniqueness is a check-then-act lookup over normalised plates; the backend
is expected to hold the real unique constraint.
"""

from datetime import date
from typing import Optional

from app.errors import DuplicateError, NotFoundError, BackendError, ValidationError
from app.services.validation import normalize_plate, parse_iso_date
from app.services.maintenance_service import fetch_next_services
from app.utils.logger import get_logger

logger = get_logger(__name__)

VEHICLE_STATUSES = ("available", "in-use", "maintenance")


def last_destinations(backend) -> dict:
    """Destination of the most recent trip per plate."""
    rows = (
        backend.table("trips")
        .select("vehicle,destination,date")
        .order("date", ascending=False)
        .execute()
    )
    result = {}
    for trip in rows:
        plate = trip.get("vehicle")
        if plate and plate not in result:
            result[plate] = trip.get("destination") or ""
    return result


def _matches(vehicle: dict, search: str) -> bool:
    term = search.lower()
    return any(term in (vehicle.get(key) or "").lower() for key in ("plate", "make", "model"))


def list_vehicles(backend, search: Optional[str] = None, status: Optional[str] = None) -> list:
    vehicles = backend.table("vehicles").select("*").execute()
    if search:
        vehicles = [v for v in vehicles if _matches(v, search)]
    if status and status != "all":
        vehicles = [v for v in vehicles if v.get("status") == status]

    try:
        destinations = last_destinations(backend)
    except BackendError as e:
        logger.error(f"Could not load last destinations: {e.message}")
        destinations = {}
    for v in vehicles:
        v["last_destination"] = destinations.get(v.get("plate"), "")
    return vehicles


def plate_exists(backend, plate: str) -> bool:
    """Compare against every stored plate after normalising both sides."""
    rows = backend.table("vehicles").select("plate").execute()
    return any(normalize_plate(str(r.get("plate") or "")) == plate for r in rows)


def create_vehicle(backend, data: dict, today: Optional[date] = None) -> dict:
    today = today or date.today()
    plate = normalize_plate(data.get("plate"))
    if not plate:
        raise ValidationError("License plate is required.", field="plate")

    try:
        if plate_exists(backend, plate):
            raise DuplicateError("Vehicle already exists", field="plate")
    except BackendError as e:
        # Let the backend's own constraint catch duplicates
        logger.error(f"Plate lookup failed, continuing with insert: {e.message}")

    row = {
        "plate": plate,
        "make": data.get("make") or "",
        "model": data.get("model") or "",
        "year": data.get("year") or today.year,
        "status": data.get("status") or "available",
        "registration_date": parse_iso_date(data.get("registration_date")),
        "location": data.get("location"),
    }
    inserted = backend.table("vehicles").insert([row]).execute()
    logger.info(f"[FLEET] Vehicle {plate} registered")
    return inserted[0] if inserted else row


def set_vehicle_status(backend, vehicle_id: int, status: str) -> dict:
    if status not in VEHICLE_STATUSES:
        raise ValidationError(f"Unknown vehicle status: {status}", field="status")
    updated = backend.table("vehicles").update({"status": status}).eq("id", vehicle_id).execute()
    if not updated:
        raise NotFoundError(f"Vehicle {vehicle_id} not found")
    logger.info(f"[FLEET] {updated[0].get('plate')} set to {status}")
    return updated[0]


def delete_vehicle(backend, vehicle_id: int) -> dict:
    deleted = backend.table("vehicles").delete().eq("id", vehicle_id).execute()
    if not deleted:
        raise NotFoundError(f"Vehicle {vehicle_id} not found")
    logger.info(f"[FLEET] Vehicle {deleted[0].get('plate')} removed")
    return deleted[0]


def vehicle_maintenance_logs(backend, plate: str) -> list:
    """All maintenance records for one plate, newest first."""
    return (
        backend.table("maintenance")
        .select("*")
        .eq("vehicle", normalize_plate(plate))
        .order("date", ascending=False)
        .execute()
    )


def get_vehicle_detail(backend, plate: str, today: Optional[date] = None) -> dict:
    plate = normalize_plate(plate)
    rows = backend.table("vehicles").select("*").eq("plate", plate).execute()
    if not rows:
        raise NotFoundError(f"Vehicle {plate} not found")
    vehicle = rows[0]

    try:
        vehicle["last_destination"] = last_destinations(backend).get(plate, "")
    except BackendError as e:
        logger.error(f"Could not load last destination for {plate}: {e.message}")
        vehicle["last_destination"] = ""

    try:
        logs = vehicle_maintenance_logs(backend, plate)
    except BackendError as e:
        logger.error(f"Failed fetching maintenance logs for {plate}: {e.message}")
        logs = []

    return {
        "vehicle": vehicle,
        "next_service": fetch_next_services(backend, today).get(plate),
        "maintenance_logs": logs,
    }
