# app/services/report_service.py
"""
Reports page: maintenance totals, per-vehicle utilisation, monthly trends and CSV export.
"""

import calendar
import csv
import io
from datetime import date
from typing import Optional

from app.errors import NotFoundError
from app.utils.logger import get_logger

logger = get_logger(__name__)

UTILIZATION_COLUMNS = ["vehicle", "trips", "completed_trips", "maintenance_cost"]


def _cell(value):
    if value is None:
        return ""
    # 150.0 is written as 150
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def to_csv(rows: list, columns: list) -> str:
    """
    Header line plus one line per row, '\\n'-separated, no trailing newline.
    Strings are quoted, numbers are bare, missing values become "".
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    buffer.write(",".join(columns) + "\n")
    for row in rows:
        writer.writerow([_cell(row.get(col)) for col in columns])
    return buffer.getvalue().rstrip("\n")


def _cost(record: dict) -> float:
    return float(record.get("cost") or 0)


def maintenance_total(backend) -> float:
    rows = backend.table("maintenance").select("cost").execute()
    return round(sum(_cost(r) for r in rows), 2)


def vehicle_utilization(backend) -> list:
    vehicles = backend.table("vehicles").select("plate").execute()
    trips = backend.table("trips").select("vehicle,status").execute()
    records = backend.table("maintenance").select("vehicle,cost").execute()

    report = []
    for v in vehicles:
        plate = v.get("plate")
        vehicle_trips = [t for t in trips if t.get("vehicle") == plate]
        report.append({
            "vehicle": plate,
            "trips": len(vehicle_trips),
            "completed_trips": sum(1 for t in vehicle_trips if t.get("status") == "completed"),
            "maintenance_cost": round(sum(_cost(m) for m in records if m.get("vehicle") == plate), 2),
        })
    return report


def _last_months(today: date, months: int) -> list:
    """(year, month) pairs for the last `months` calendar months, oldest first."""
    result = []
    year, month = today.year, today.month
    for _ in range(months):
        result.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(result))


def monthly_trends(backend, months: int = 6, today: Optional[date] = None) -> list:
    today = today or date.today()
    trips = backend.table("trips").select("date").execute()
    records = backend.table("maintenance").select("date,cost").execute()

    buckets = {f"{y:04d}-{m:02d}": {"trips": 0, "maintenance": 0.0} for y, m in _last_months(today, months)}
    for t in trips:
        period = (t.get("date") or "")[:7]
        if period in buckets:
            buckets[period]["trips"] += 1
    for r in records:
        period = (r.get("date") or "")[:7]
        if period in buckets:
            buckets[period]["maintenance"] += _cost(r)

    return [
        {
            "month": calendar.month_abbr[int(period[5:])],
            "period": period,
            "trips": values["trips"],
            "maintenance": round(values["maintenance"], 2),
        }
        for period, values in buckets.items()
    ]


def report_summary(backend) -> dict:
    vehicles = backend.table("vehicles").select("id").execute()
    trips = backend.table("trips").select("id").execute()
    return {
        "total_trips": len(trips),
        "maintenance_total": maintenance_total(backend),
        "avg_trips_per_vehicle": round(len(trips) / len(vehicles), 1) if vehicles else 0,
    }


def _table_rows(table: str):
    def fetch(backend) -> list:
        return backend.table(table).select("*").order("id", ascending=True).execute()
    return fetch


# dataset → (download filename, fixed columns, row loader)
EXPORTS = {
    "utilization": ("vehicle-utilization-report.csv", UTILIZATION_COLUMNS, vehicle_utilization),
    "vehicles": ("vehicles.csv",
                 ["plate", "make", "model", "year", "status", "registration_date", "location"],
                 _table_rows("vehicles")),
    "drivers": ("drivers.csv", ["name", "email", "license", "contact", "status"], _table_rows("drivers")),
    "trips": ("trips.csv",
              ["id", "vehicle", "driver_id", "origin", "destination", "date", "status"],
              _table_rows("trips")),
    "maintenance": ("maintenance.csv", ["vehicle", "service", "date", "cost", "provider"],
                    _table_rows("maintenance")),
}


def export_csv(backend, dataset: str) -> tuple:
    """Returns (filename, csv_text) for one of the EXPORTS datasets."""
    if dataset not in EXPORTS:
        raise NotFoundError(f"Unknown export '{dataset}'. Available: {', '.join(EXPORTS)}")
    filename, columns, loader = EXPORTS[dataset]
    rows = loader(backend)
    logger.info(f"[REPORTS] Exporting {len(rows)} {dataset} rows to {filename}")
    return filename, to_csv(rows, columns)
