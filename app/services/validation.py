# app/services/validation.py
"""
Form-field normalisation and validation shared by the Fleet, Drivers, Trips and
Maintenance services. Pure string transforms; nothing here touches the backend.
"""

import re
from datetime import date, datetime
from typing import Optional, Union

from app.errors import ValidationError

LICENSE_PATTERN = re.compile(r"^SA\d{7}$")
CONTACT_PATTERN = re.compile(r"^\d{10}$")
_NON_ALNUM = re.compile(r"[^A-Z0-9]")
_NON_DIGIT = re.compile(r"\D")

LICENSE_FORMAT_MESSAGE = "License number must begin with 'SA' followed by 7 digits (e.g. SA1000005)."
CONTACT_FORMAT_MESSAGE = "Contact number must be exactly 10 digits (numbers only)."


def normalize_plate(value: Optional[str]) -> str:
    """'ab-12 cd' → 'AB12CD'"""
    return _NON_ALNUM.sub("", (value or "").upper())


def normalize_license(value: Optional[str]) -> str:
    return _NON_ALNUM.sub("", (value or "").upper())


def is_valid_license(value: str) -> bool:
    return bool(LICENSE_PATTERN.match(value or ""))


def validate_license(value: Optional[str]) -> str:
    """Normalise a license number and return it, or raise ValidationError."""
    license_number = normalize_license(value)
    if not is_valid_license(license_number):
        raise ValidationError(LICENSE_FORMAT_MESSAGE, field="license")
    return license_number


def normalize_contact(value: Optional[str]) -> str:
    return _NON_DIGIT.sub("", str(value or ""))


def is_valid_contact(value: str) -> bool:
    return bool(CONTACT_PATTERN.match(value or ""))


def validate_contact(value: Optional[str]) -> str:
    contact = normalize_contact(value)
    if not is_valid_contact(contact):
        raise ValidationError(CONTACT_FORMAT_MESSAGE, field="contact")
    return contact


def parse_iso_date(value: Union[date, datetime, str, None]) -> Optional[str]:
    """
    Return value as a 'YYYY-MM-DD' string, or None when it is empty.
    Raises ValidationError for strings that are not ISO dates.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    try:
        return date.fromisoformat(str(value).strip()[:10]).isoformat()
    except ValueError:
        raise ValidationError(f"Invalid date: {value}", field="date")


def ensure_not_past(date_str: str, today: date, message: str) -> None:
    # ISO strings compare in calendar order
    if date_str < today.isoformat():
        raise ValidationError(message, field="date")


def require(value, message: str, field: Optional[str] = None) -> str:
    """Stripped string form of value; blank or missing raises ValidationError."""
    if value is None or not str(value).strip():
        raise ValidationError(message, field=field)
    return str(value).strip()
