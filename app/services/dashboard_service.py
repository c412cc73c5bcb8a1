# app/services/dashboard_service.py
"""
Dashboard: fleet KPIs, maintenance cost per vehicle, utilisation split and
the next few upcoming services. Everything is derived in memory from three
full-table fetches.
"""

from datetime import date
from typing import Optional

from app.errors import BackendError, BackendNotInitializedError
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _fetch(backend, table: str) -> list:
    """A failed fetch shows up as an empty table; a missing backend still raises."""
    try:
        return backend.table(table).select("*").execute()
    except BackendNotInitializedError:
        raise
    except BackendError as e:
        logger.error(f"[DASHBOARD] Could not load {table}: {e.message}")
        return []


def _count(vehicles: list, status: str) -> int:
    return sum(1 for v in vehicles if v.get("status") == status)


def service_priority(due: str, today: date) -> str:
    days = (date.fromisoformat(due[:10]) - today).days
    if days <= 7:
        return "high"
    if days <= 30:
        return "medium"
    return "low"


def upcoming_services(records: list, today: date, limit: int = 3) -> list:
    """Records dated strictly after today, soonest first."""
    today_str = today.isoformat()
    upcoming = sorted(
        (m for m in records if m.get("date") and m["date"] > today_str),
        key=lambda m: m["date"],
    )
    return [
        {
            "vehicle": m.get("vehicle"),
            "service": m.get("service"),
            "due": m["date"],
            "priority": service_priority(m["date"], today),
        }
        for m in upcoming[:limit]
    ]


def maintenance_cost_by_vehicle(vehicles: list, records: list) -> list:
    return [
        {
            "vehicle": v.get("plate"),
            "cost": round(sum(float(m.get("cost") or 0) for m in records if m.get("vehicle") == v.get("plate")), 2),
        }
        for v in vehicles
    ]


def build_dashboard(backend, today: Optional[date] = None, limit: int = 3) -> dict:
    today = today or date.today()
    vehicles = _fetch(backend, "vehicles")
    drivers = _fetch(backend, "drivers")
    records = _fetch(backend, "maintenance")

    available = _count(vehicles, "available")
    in_maintenance = _count(vehicles, "maintenance")
    in_use = _count(vehicles, "in-use")

    return {
        "kpis": {
            "total_vehicles": len(vehicles),
            "available_vehicles": available,
            "in_maintenance": in_maintenance,
            "in_use": in_use,
            "active_drivers": len(drivers),
        },
        "maintenance_cost_by_vehicle": maintenance_cost_by_vehicle(vehicles, records),
        "utilization": [
            {"name": "In Use", "value": in_use},
            {"name": "Available", "value": available},
            {"name": "Maintenance", "value": in_maintenance},
        ],
        "upcoming_services": upcoming_services(records, today, limit),
    }
