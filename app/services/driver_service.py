# app/services/driver_service.py
"""
Drivers page: listing, search and registration.
Checks run in form order: license format → license uniqueness → contact digits.
"""

from typing import Optional

from app.errors import DuplicateError, NotFoundError, BackendError
from app.services.validation import validate_license, validate_contact, require
from app.utils.logger import get_logger

logger = get_logger(__name__)


def initials(name: str) -> str:
    """'jane van doe' → 'JVD'"""
    return "".join(part[0] for part in (name or "").split() if part).upper()


def _decorate(driver: dict) -> dict:
    driver["initials"] = initials(driver.get("name") or "")
    return driver


def list_drivers(backend, search: Optional[str] = None) -> list:
    drivers = backend.table("drivers").select("*").execute()
    if search:
        term = search.lower()
        drivers = [
            d for d in drivers
            if term in (d.get("name") or "").lower() or term in (d.get("license") or "").lower()
        ]
    return [_decorate(d) for d in drivers]


def list_available_drivers(backend) -> list:
    """Drivers not currently on a trip."""
    drivers = backend.table("drivers").select("*").eq("status", "available").execute()
    return [_decorate(d) for d in drivers]


def license_exists(backend, license_number: str) -> bool:
    try:
        rows = backend.table("drivers").select("id").eq("license", license_number).execute()
    except BackendError as e:
        logger.error(f"License uniqueness lookup failed: {e.message}")
        raise BackendError("Could not validate license number uniqueness.", e.backend_status) from e
    return len(rows) > 0


def create_driver(backend, data: dict) -> dict:
    name = require(data.get("name"), "Name is required.", field="name")
    license_number = validate_license(data.get("license"))
    if license_exists(backend, license_number):
        raise DuplicateError("License number already exists. It must be unique.", field="license")
    contact = validate_contact(data.get("contact"))

    row = {
        "name": name,
        "email": (data.get("email") or "").strip(),
        "license": license_number,
        "contact": contact,
        "status": data.get("status") or "available",
    }
    inserted = backend.table("drivers").insert([row]).execute()
    logger.info(f"[DRIVERS] Driver {name} added with license {license_number}")
    return _decorate(inserted[0] if inserted else row)


def delete_driver(backend, driver_id: int) -> dict:
    deleted = backend.table("drivers").delete().eq("id", driver_id).execute()
    if not deleted:
        raise NotFoundError(f"Driver {driver_id} not found")
    logger.info(f"[DRIVERS] Driver {deleted[0].get('name')} deleted")
    return deleted[0]
