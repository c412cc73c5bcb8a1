# app/services/maintenance_service.py
"""
Maintenance page: service logs, scheduling, and the "next scheduled service" per vehicle.

A record dated today or later counts as scheduled. The next service for a plate is
the earliest such record, computed with one pass over the rows on every request.
"""

from datetime import date
from typing import Optional

from app.errors import BackendError, ValidationError
from app.services.validation import parse_iso_date, ensure_not_past, require
from app.utils.logger import get_logger

logger = get_logger(__name__)


def list_records(backend) -> list:
    return backend.table("maintenance").select("*").execute()


def next_service_map(records: list, today: Optional[date] = None) -> dict:
    """
    plate → {"date": ..., "service": ...} for the earliest record dated today or later.
    Rows without a plate or a date are skipped.
    """
    today_str = (today or date.today()).isoformat()
    result = {}
    for record in records:
        if not record:
            continue
        plate, when = record.get("vehicle"), record.get("date")
        if not plate or not when or when < today_str:
            continue
        if plate not in result or when < result[plate]["date"]:
            result[plate] = {"date": when, "service": record.get("service")}
    return result


def fetch_next_services(backend, today: Optional[date] = None) -> dict:
    """Server-side date filter, then next_service_map. Degrades to {} on backend failure."""
    today = today or date.today()
    try:
        rows = (
            backend.table("maintenance")
            .select("vehicle,date,service")
            .gte("date", today.isoformat())
            .order("date", ascending=True)
            .execute()
        )
    except BackendError as e:
        logger.error(f"Failed to fetch next services: {e.message}")
        return {}
    return next_service_map(rows, today)


def scheduled_vehicles(backend, today: Optional[date] = None) -> list:
    """Unique plates with a service dated today or later, in first-seen order."""
    today = today or date.today()
    rows = (
        backend.table("maintenance")
        .select("vehicle,date")
        .gte("date", today.isoformat())
        .execute()
    )
    return list(dict.fromkeys(r["vehicle"] for r in rows if r.get("vehicle")))


def log_service(backend, data: dict, today: Optional[date] = None) -> dict:
    today = today or date.today()
    when = parse_iso_date(data.get("date"))
    if not when:
        raise ValidationError("Date is required.", field="date")
    ensure_not_past(when, today, "Cannot log a service with a past date.")

    row = {
        "vehicle": require(data.get("vehicle"), "Vehicle is required.", field="vehicle"),
        "service": require(data.get("service"), "Service type is required.", field="service"),
        "date": when,
        "cost": float(data.get("cost") or 0),
        "provider": data.get("provider") or "",
    }
    inserted = backend.table("maintenance").insert([row]).execute()
    logger.info(f"[MAINT] Logged {row['service']} for {row['vehicle']} on {when}")
    return inserted[0] if inserted else row


def schedule_service(backend, data: dict, today: Optional[date] = None) -> dict:
    today = today or date.today()
    vehicle = (data.get("vehicle") or "").strip()
    service = (data.get("service") or "").strip()
    when = parse_iso_date(data.get("date"))
    if not vehicle or not service or not when:
        raise ValidationError("All fields are required.")
    ensure_not_past(when, today, "Cannot schedule a service on a past date.")

    row = {"vehicle": vehicle, "service": service, "date": when, "cost": 0, "provider": ""}
    inserted = backend.table("maintenance").insert([row]).execute()
    logger.info(f"[MAINT] Scheduled {service} for {vehicle} on {when}")
    return inserted[0] if inserted else row
