# tests/conftest.py
"""Shared fixtures: a LocalBackend on a private in-memory SQLite database."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.database import create_tables
from app.local_backend import LocalBackend

TODAY = date(2026, 10, 17)


@pytest.fixture
def backend():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield LocalBackend(sessionmaker(autoflush=False, bind=engine))
    engine.dispose()


def add_vehicle(backend, plate="AB12CD", status="available", make="Toyota", model="Hilux", **extra):
    row = {"plate": plate, "make": make, "model": model, "year": 2022, "status": status, **extra}
    return backend.table("vehicles").insert([row]).execute()[0]


def add_driver(backend, name="Thandi Nkosi", license="SA1000005", status="available", **extra):
    row = {"name": name, "email": "driver@example.com", "license": license,
           "contact": "0821234567", "status": status, **extra}
    return backend.table("drivers").insert([row]).execute()[0]


def add_maintenance(backend, vehicle="AB12CD", service="Oil change", when="2026-10-20", cost=0, provider=""):
    row = {"vehicle": vehicle, "service": service, "date": when, "cost": cost, "provider": provider}
    return backend.table("maintenance").insert([row]).execute()[0]


def add_trip(backend, vehicle="AB12CD", driver_id=None, when="2026-10-17", status="active",
             origin="Johannesburg", destination="Pretoria"):
    row = {"vehicle": vehicle, "driver_id": driver_id, "origin": origin,
           "destination": destination, "date": when, "status": status}
    return backend.table("trips").insert([row]).execute()[0]
