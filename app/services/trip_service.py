# app/services/trip_service.py
"""
Trips page: trip log, assignment and completion.

Assigning a trip inserts the trip, then marks the driver and the vehicle in-use.
Completing a trip marks the trip completed, then releases the driver and the vehicle.
The follow-up status writes run one after another with no transaction around them:
a failure is logged and reported back, never retried or rolled back.
"""

from datetime import date
from typing import Optional

from app.errors import BackendError, NotFoundError, ValidationError
from app.services.validation import parse_iso_date, require
from app.utils.logger import get_logger

logger = get_logger(__name__)


def driver_name(driver_id: Optional[int], drivers: list) -> str:
    if driver_id is None:
        return "Unassigned"
    for d in drivers:
        if d.get("id") == driver_id:
            return d.get("name") or f"ID {driver_id}"
    return f"ID {driver_id}"


def list_trips(backend) -> list:
    trips = backend.table("trips").select("*").order("id", ascending=True).execute()
    try:
        drivers = backend.table("drivers").select("id,name").execute()
    except BackendError as e:
        logger.error(f"Could not load drivers for trip log: {e.message}")
        drivers = []
    for trip in trips:
        trip["driver_name"] = driver_name(trip.get("driver_id"), drivers)
    return trips


def assignable_vehicles(backend) -> list:
    vehicles = backend.table("vehicles").select("*").execute()
    return [v for v in vehicles if v.get("status") == "available"]


def trip_summary(trips: list) -> dict:
    return {
        "active": sum(1 for t in trips if t.get("status") == "active"),
        "completed": sum(1 for t in trips if t.get("status") == "completed"),
        "total": len(trips),
    }


def _set_status(backend, table: str, column: str, value, status: str, warnings: list) -> bool:
    """One dependent status write. Returns False (and records a warning) when it fails."""
    try:
        updated = backend.table(table).update({"status": status}).eq(column, value).execute()
    except BackendError as e:
        message = f"Failed to set {table} {value} to {status}: {e.message}"
        logger.error(f"[TRIPS] {message}")
        warnings.append(message)
        return False
    if not updated:
        message = f"No {table} row matched {column}={value}"
        logger.warning(f"[TRIPS] {message}")
        warnings.append(message)
        return False
    return True


def create_trip(backend, data: dict) -> dict:
    when = parse_iso_date(data.get("date"))
    if not when:
        raise ValidationError("Date is required.", field="date")

    driver_id = data.get("driver_id")
    row = {
        "vehicle": require(data.get("vehicle"), "Vehicle is required.", field="vehicle"),
        "driver_id": int(driver_id) if driver_id not in (None, "") else None,
        "origin": require(data.get("origin"), "Origin is required.", field="origin"),
        "destination": require(data.get("destination"), "Destination is required.", field="destination"),
        "date": when,
        "status": data.get("status") or "active",
    }
    inserted = backend.table("trips").insert([row]).execute()
    trip = inserted[0] if inserted else row
    logger.info(f"[TRIPS] Trip {row['origin']} → {row['destination']} assigned to {row['vehicle']}")

    warnings = []
    driver_updated = False
    if row["driver_id"] is not None:
        driver_updated = _set_status(backend, "drivers", "id", row["driver_id"], "in-use", warnings)
    vehicle_updated = _set_status(backend, "vehicles", "plate", row["vehicle"], "in-use", warnings)

    return {
        "trip": trip,
        "driver_updated": driver_updated,
        "vehicle_updated": vehicle_updated,
        "warnings": warnings,
    }


def complete_trip(backend, trip_id: int) -> dict:
    rows = backend.table("trips").select("*").eq("id", trip_id).execute()
    if not rows:
        raise NotFoundError(f"Trip {trip_id} not found")
    trip = rows[0]
    if trip.get("status") == "completed":
        raise ValidationError(f"Trip {trip_id} is already completed.", field="status")

    updated = backend.table("trips").update({"status": "completed"}).eq("id", trip_id).execute()
    trip = updated[0] if updated else {**trip, "status": "completed"}
    logger.info(f"[TRIPS] Trip {trip_id} completed")

    warnings = []
    driver_updated = False
    vehicle_updated = False
    if trip.get("driver_id") is not None:
        driver_updated = _set_status(backend, "drivers", "id", trip["driver_id"], "available", warnings)
    if trip.get("vehicle"):
        vehicle_updated = _set_status(backend, "vehicles", "plate", trip["vehicle"], "available", warnings)

    return {
        "trip": trip,
        "driver_updated": driver_updated,
        "vehicle_updated": vehicle_updated,
        "warnings": warnings,
    }
