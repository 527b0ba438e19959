import pytest
from datetime import date, timedelta

from dental_clinic.core.config import settings
from dental_clinic.domain.appointments.availability import (
    is_valid_time,
    weekday_name,
    resolve_working_window,
    generate_slot_grid,
    subtract_booked,
)

MONDAY = date(2026, 10, 19)
TUESDAY = MONDAY + timedelta(days=1)


def next_weekday(weekday: int) -> date:
    """First future date falling on weekday (0 = monday)."""
    today = date.today()
    return today + timedelta(days=(weekday - today.weekday()) % 7 or 7)


@pytest.mark.unit
@pytest.mark.appointments
class TestSlotGrid:
    """Test the slot grid and free slot helpers."""

    def test_half_hour_grid(self) -> None:
        assert generate_slot_grid("09:00", "11:00") == ["09:00", "09:30", "10:00", "10:30"]

    def test_last_slot_starts_before_end(self) -> None:
        """A slot is only offered when it starts before closing time."""
        assert generate_slot_grid("09:00", "10:15") == ["09:00", "09:30", "10:00"]

    def test_empty_window(self) -> None:
        assert generate_slot_grid("10:00", "10:00") == []

    def test_custom_slot_length(self) -> None:
        assert generate_slot_grid("09:00", "10:00", 20) == ["09:00", "09:20", "09:40"]

    def test_subtract_booked_keeps_order(self) -> None:
        grid = generate_slot_grid("09:00", "11:00")

        assert subtract_booked(grid, ["10:00", "09:00"]) == ["09:30", "10:30"]

    def test_booked_time_outside_grid_is_ignored(self) -> None:
        grid = ["09:00", "09:30"]

        assert subtract_booked(grid, ["12:00"]) == grid

    def test_time_format(self) -> None:
        assert is_valid_time("08:30")
        assert is_valid_time("23:59")
        assert not is_valid_time("8:30")
        assert not is_valid_time("24:00")
        assert not is_valid_time("10:60")
        assert not is_valid_time("")


@pytest.mark.unit
@pytest.mark.appointments
class TestWorkingWindow:
    """Test resolution of a doctor's working window for a date."""

    def test_weekday_name(self) -> None:
        assert weekday_name(MONDAY) == "monday"
        assert weekday_name(TUESDAY) == "tuesday"

    def test_day_off(self) -> None:
        window = resolve_working_window(
            TUESDAY, ["monday"], {"start": "08:00", "end": "12:00"}, None, "09:00", "17:00"
        )

        assert window is None

    def test_no_working_days_means_every_day(self) -> None:
        window = resolve_working_window(
            TUESDAY, [], {"start": "08:00", "end": "12:00"}, None, "09:00", "17:00"
        )

        assert window == ("08:00", "12:00")

    def test_daily_schedule_overrides_working_hours(self) -> None:
        window = resolve_working_window(
            MONDAY,
            ["monday"],
            {"start": "08:00", "end": "18:00"},
            {"monday": {"start": "14:00", "end": "16:00", "is_active": True}},
            "09:00",
            "17:00",
        )

        assert window == ("14:00", "16:00")

    def test_inactive_daily_schedule_falls_back(self) -> None:
        window = resolve_working_window(
            MONDAY,
            None,
            {"start": "08:00", "end": "18:00"},
            {"monday": {"start": "14:00", "end": "16:00", "is_active": False}},
            "09:00",
            "17:00",
        )

        assert window == ("08:00", "18:00")

    def test_clinic_default(self) -> None:
        assert resolve_working_window(MONDAY, None, None, None, "09:00", "17:00") == ("09:00", "17:00")


@pytest.mark.integration
@pytest.mark.appointments
class TestAvailabilityEndpoint:
    """Test the doctor availability endpoint."""

    def test_full_grid_when_nothing_booked(
        self, client, employee_headers, doctor_user, booking_date
    ) -> None:
        """A doctor without hours of their own gets the clinic opening hours."""
        response = client.get(
            f"/api/doctors/{doctor_user.id}/availability",
            params={"date": booking_date.isoformat()},
            headers=employee_headers,
        )

        assert response.status_code == 200
        slots = response.json()
        assert slots[0] == settings.CLINIC_OPENING_TIME
        assert slots == generate_slot_grid(settings.CLINIC_OPENING_TIME, settings.CLINIC_CLOSING_TIME)

    def test_doctor_created_through_api_uses_clinic_hours(
        self, client, admin_headers, employee_headers, booking_date
    ) -> None:
        created = client.post(
            "/api/users",
            json={
                "email": "ortodontista@clinic.pt",
                "first_name": "Sofia",
                "last_name": "Lima",
                "password": "secret1",
                "user_type": "doctor",
            },
            headers=admin_headers,
        )
        assert created.status_code == 201

        response = client.get(
            f"/api/doctors/{created.json()['id']}/availability",
            params={"date": booking_date.isoformat()},
            headers=employee_headers,
        )

        slots = response.json()
        assert slots[0] == "09:00"
        assert slots[-1] == "16:30"
        assert len(slots) == 16

    def test_booked_slots_removed(
        self, client, employee_headers, doctor_user, booking_date, appointment_payload
    ) -> None:
        """Availability is the grid minus booked times."""
        client.post("/api/appointments", json=appointment_payload, headers=employee_headers)

        response = client.get(
            f"/api/doctors/{doctor_user.id}/availability",
            params={"date": booking_date.isoformat()},
            headers=employee_headers,
        )

        grid = generate_slot_grid(settings.CLINIC_OPENING_TIME, settings.CLINIC_CLOSING_TIME)
        expected = subtract_booked(grid, ["10:00"])
        assert response.json() == expected

    def test_cancelled_appointment_frees_slot(
        self, client, employee_headers, doctor_user, booking_date, appointment_payload
    ) -> None:
        created = client.post("/api/appointments", json=appointment_payload, headers=employee_headers)
        client.put(
            f"/api/appointments/{created.json()['id']}",
            json={"status": "cancelled"},
            headers=employee_headers,
        )

        response = client.get(
            f"/api/doctors/{doctor_user.id}/availability",
            params={"date": booking_date.isoformat()},
            headers=employee_headers,
        )

        assert "10:00" in response.json()

    def test_schedule_restricts_days_and_hours(
        self, client, admin_headers, employee_headers, doctor_user
    ) -> None:
        schedule = {
            "working_days": ["monday", "tuesday"],
            "working_hours": {"start": "09:00", "end": "12:00"},
            "daily_schedules": {"tuesday": {"start": "14:00", "end": "15:00"}},
        }
        update = client.put(
            f"/api/doctors/{doctor_user.id}/schedule", json=schedule, headers=admin_headers
        )
        assert update.status_code == 200

        def slots_on(day: date):
            return client.get(
                f"/api/doctors/{doctor_user.id}/availability",
                params={"date": day.isoformat()},
                headers=employee_headers,
            ).json()

        assert slots_on(next_weekday(0)) == generate_slot_grid("09:00", "12:00")
        assert slots_on(next_weekday(1)) == ["14:00", "14:30"]
        assert slots_on(next_weekday(2)) == []

    def test_missing_date_is_rejected(self, client, employee_headers, doctor_user) -> None:
        response = client.get(
            f"/api/doctors/{doctor_user.id}/availability", headers=employee_headers
        )

        assert response.status_code == 400
        fields = [error["field"] for error in response.json()["validation_errors"]]
        assert "date" in fields

    def test_unknown_doctor(self, client, employee_headers, employee_user, booking_date) -> None:
        """Non-doctor accounts have no availability."""
        response = client.get(
            f"/api/doctors/{employee_user.id}/availability",
            params={"date": booking_date.isoformat()},
            headers=employee_headers,
        )

        assert response.status_code == 404
