# tests/test_maintenance_service.py
"""Unit tests for the Maintenance page service."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock
from app.errors import BackendError, ValidationError
from app.services import maintenance_service
from conftest import TODAY, add_maintenance


class TestNextServiceMap:
    def test_earliest_future_record_per_plate(self):
        records = [
            {"vehicle": "AB12CD", "date": "2026-11-30", "service": "Tyres"},
            {"vehicle": "AB12CD", "date": "2026-10-20", "service": "Oil change"},
            {"vehicle": "AB12CD", "date": "2026-09-01", "service": "Brakes"},
            {"vehicle": "ZZ99ZZ", "date": "2026-10-17", "service": "Inspection"},
        ]
        assert maintenance_service.next_service_map(records, TODAY) == {
            "AB12CD": {"date": "2026-10-20", "service": "Oil change"},
            "ZZ99ZZ": {"date": "2026-10-17", "service": "Inspection"},
        }

    def test_incomplete_rows_skipped(self):
        records = [
            None,
            {"vehicle": None, "date": "2026-11-01", "service": "Tyres"},
            {"vehicle": "AB12CD", "date": None, "service": "Tyres"},
        ]
        assert maintenance_service.next_service_map(records, TODAY) == {}

    def test_past_only_plate_absent(self):
        records = [{"vehicle": "AB12CD", "date": "2026-10-16", "service": "Tyres"}]
        assert maintenance_service.next_service_map(records, TODAY) == {}


class TestFetchNextServices:
    def test_from_database(self, backend):
        add_maintenance(backend, vehicle="AB12CD", service="Tyres", when="2026-12-01")
        add_maintenance(backend, vehicle="AB12CD", service="Oil change", when="2026-10-18")
        add_maintenance(backend, vehicle="ZZ99ZZ", service="Brakes", when="2026-01-01")

        result = maintenance_service.fetch_next_services(backend, today=TODAY)
        assert result == {"AB12CD": {"date": "2026-10-18", "service": "Oil change"}}

    def test_backend_failure_gives_empty_map(self):
        backend = MagicMock()
        backend.table.return_value.select.return_value.gte.return_value.order.return_value.execute.side_effect = \
            BackendError("timeout")
        assert maintenance_service.fetch_next_services(backend, today=TODAY) == {}

    def test_scheduled_vehicles_unique_in_order(self, backend):
        add_maintenance(backend, vehicle="ZZ99ZZ", when="2026-10-25")
        add_maintenance(backend, vehicle="AB12CD", when="2026-10-19")
        add_maintenance(backend, vehicle="ZZ99ZZ", when="2026-11-25")
        add_maintenance(backend, vehicle="MM11MM", when="2026-10-01")
        assert maintenance_service.scheduled_vehicles(backend, today=TODAY) == ["ZZ99ZZ", "AB12CD"]


class TestLogService:
    def test_logs_with_cost(self, backend):
        row = maintenance_service.log_service(
            backend,
            {"vehicle": "AB12CD", "service": "Brakes", "date": "2026-10-17", "cost": "1250.50", "provider": "AutoFix"},
            today=TODAY,
        )
        assert row["cost"] == 1250.5
        assert row["provider"] == "AutoFix"
        assert row["date"] == "2026-10-17"

    def test_past_date_rejected(self, backend):
        with pytest.raises(ValidationError) as exc:
            maintenance_service.log_service(
                backend, {"vehicle": "AB12CD", "service": "Brakes", "date": "2026-10-16"}, today=TODAY
            )
        assert exc.value.message == "Cannot log a service with a past date."
        assert backend.table("maintenance").select().execute() == []

    def test_missing_date(self, backend):
        with pytest.raises(ValidationError) as exc:
            maintenance_service.log_service(backend, {"vehicle": "AB12CD", "service": "Brakes"}, today=TODAY)
        assert exc.value.field == "date"


class TestScheduleService:
    def test_scheduled_with_zero_cost(self, backend):
        row = maintenance_service.schedule_service(
            backend, {"vehicle": "AB12CD", "service": "Tyres", "date": "2026-11-01"}, today=TODAY
        )
        assert row["cost"] == 0
        assert row["provider"] == ""

    def test_all_fields_required(self, backend):
        with pytest.raises(ValidationError) as exc:
            maintenance_service.schedule_service(backend, {"vehicle": "AB12CD", "date": "2026-11-01"}, today=TODAY)
        assert exc.value.message == "All fields are required."

    def test_past_date_rejected(self, backend):
        with pytest.raises(ValidationError) as exc:
            maintenance_service.schedule_service(
                backend, {"vehicle": "AB12CD", "service": "Tyres", "date": "2025-01-01"}, today=TODAY
            )
        assert exc.value.message == "Cannot schedule a service on a past date."
