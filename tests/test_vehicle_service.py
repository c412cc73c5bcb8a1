# tests/test_vehicle_service.py
"""Unit tests for the Fleet page service."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import date
from unittest.mock import MagicMock
from app.errors import DuplicateError, NotFoundError, ValidationError, BackendError
from app.services import vehicle_service
from conftest import TODAY, add_vehicle, add_trip, add_maintenance


class TestCreateVehicle:
    def test_plate_is_normalised_and_defaults_applied(self, backend):
        row = vehicle_service.create_vehicle(
            backend, {"plate": "ab-12 cd", "make": "Toyota", "model": "Hilux"}, today=TODAY
        )
        assert row["plate"] == "AB12CD"
        assert row["year"] == 2026
        assert row["status"] == "available"
        assert row["registration_date"] is None

    def test_registration_date_stored_as_iso(self, backend):
        row = vehicle_service.create_vehicle(
            backend, {"plate": "XY99", "registration_date": date(2025, 3, 1)}, today=TODAY
        )
        assert row["registration_date"] == "2025-03-01"

    def test_duplicate_detected_after_normalising(self, backend):
        add_vehicle(backend, plate="AB12CD")
        with pytest.raises(DuplicateError) as exc:
            vehicle_service.create_vehicle(backend, {"plate": "ab 12-cd"}, today=TODAY)
        assert exc.value.message == "Vehicle already exists"
        assert len(backend.table("vehicles").select().execute()) == 1

    def test_empty_plate_rejected(self, backend):
        with pytest.raises(ValidationError):
            vehicle_service.create_vehicle(backend, {"plate": "--"}, today=TODAY)

    def test_failed_duplicate_lookup_still_inserts(self):
        backend = MagicMock()
        backend.table.return_value.select.return_value.execute.side_effect = BackendError("timeout")
        backend.table.return_value.insert.return_value.execute.return_value = [{"id": 7, "plate": "AB12CD"}]

        row = vehicle_service.create_vehicle(backend, {"plate": "AB12CD"}, today=TODAY)

        assert row["id"] == 7
        backend.table.return_value.insert.assert_called_once()


class TestListVehicles:
    def test_search_matches_plate_make_or_model(self, backend):
        add_vehicle(backend, plate="AB12CD", make="Toyota", model="Hilux")
        add_vehicle(backend, plate="ZZ99ZZ", make="Ford", model="Ranger")

        assert [v["plate"] for v in vehicle_service.list_vehicles(backend, search="hilux")] == ["AB12CD"]
        assert [v["plate"] for v in vehicle_service.list_vehicles(backend, search="FORD")] == ["ZZ99ZZ"]
        assert [v["plate"] for v in vehicle_service.list_vehicles(backend, search="zz9")] == ["ZZ99ZZ"]

    def test_status_filter(self, backend):
        add_vehicle(backend, plate="AB12CD", status="maintenance")
        add_vehicle(backend, plate="ZZ99ZZ", status="available")

        assert len(vehicle_service.list_vehicles(backend, status="all")) == 2
        assert [v["plate"] for v in vehicle_service.list_vehicles(backend, status="maintenance")] == ["AB12CD"]

    def test_last_destination_is_from_latest_trip(self, backend):
        add_vehicle(backend, plate="AB12CD")
        add_vehicle(backend, plate="ZZ99ZZ")
        add_trip(backend, vehicle="AB12CD", when="2026-10-01", destination="Durban")
        add_trip(backend, vehicle="AB12CD", when="2026-10-10", destination="Cape Town")

        by_plate = {v["plate"]: v for v in vehicle_service.list_vehicles(backend)}
        assert by_plate["AB12CD"]["last_destination"] == "Cape Town"
        assert by_plate["ZZ99ZZ"]["last_destination"] == ""


class TestStatusAndDelete:
    def test_set_maintenance_then_available(self, backend):
        vehicle = add_vehicle(backend)
        assert vehicle_service.set_vehicle_status(backend, vehicle["id"], "maintenance")["status"] == "maintenance"
        assert vehicle_service.set_vehicle_status(backend, vehicle["id"], "available")["status"] == "available"

    def test_unknown_status(self, backend):
        vehicle = add_vehicle(backend)
        with pytest.raises(ValidationError):
            vehicle_service.set_vehicle_status(backend, vehicle["id"], "scrapped")

    def test_missing_vehicle(self, backend):
        with pytest.raises(NotFoundError):
            vehicle_service.set_vehicle_status(backend, 404, "maintenance")
        with pytest.raises(NotFoundError):
            vehicle_service.delete_vehicle(backend, 404)

    def test_delete(self, backend):
        vehicle = add_vehicle(backend)
        assert vehicle_service.delete_vehicle(backend, vehicle["id"])["plate"] == "AB12CD"
        assert backend.table("vehicles").select().execute() == []


class TestVehicleDetail:
    def test_detail_includes_next_service_and_logs(self, backend):
        add_vehicle(backend, plate="AB12CD")
        add_maintenance(backend, vehicle="AB12CD", service="Brakes", when="2026-09-01", cost=1200)
        add_maintenance(backend, vehicle="AB12CD", service="Tyres", when="2026-11-02")
        add_maintenance(backend, vehicle="AB12CD", service="Oil change", when="2026-10-20")
        add_trip(backend, vehicle="AB12CD", destination="Polokwane")

        detail = vehicle_service.get_vehicle_detail(backend, "ab-12cd", today=TODAY)

        assert detail["vehicle"]["plate"] == "AB12CD"
        assert detail["vehicle"]["last_destination"] == "Polokwane"
        assert detail["next_service"] == {"date": "2026-10-20", "service": "Oil change"}
        assert [m["date"] for m in detail["maintenance_logs"]] == ["2026-11-02", "2026-10-20", "2026-09-01"]

    def test_maintenance_logs_normalise_plate(self, backend):
        add_maintenance(backend, vehicle="AB12CD", when="2026-09-01")
        add_maintenance(backend, vehicle="AB12CD", when="2026-10-01")
        logs = vehicle_service.vehicle_maintenance_logs(backend, "ab 12-cd")
        assert [m["date"] for m in logs] == ["2026-10-01", "2026-09-01"]

    def test_no_scheduled_service(self, backend):
        add_vehicle(backend, plate="AB12CD")
        assert vehicle_service.get_vehicle_detail(backend, "AB12CD", today=TODAY)["next_service"] is None

    def test_unknown_plate(self, backend):
        with pytest.raises(NotFoundError):
            vehicle_service.get_vehicle_detail(backend, "NOPE1", today=TODAY)
