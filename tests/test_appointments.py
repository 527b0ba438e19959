import pytest
from datetime import timedelta
from uuid import UUID, uuid4

from dental_clinic.core.config import settings
from dental_clinic.domain.finance.models import Transaction, TransactionStatus
from dental_clinic.domain.users.models import UserTypeConfig


@pytest.mark.appointments
@pytest.mark.integration
class TestAppointmentBooking:
    """Test booking and availability checks."""

    def test_create_appointment(self, client, employee_headers, appointment_payload, patient, doctor_user) -> None:
        response = client.post("/api/appointments", json=appointment_payload, headers=employee_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "scheduled"
        assert data["time"] == "10:00"
        assert data["patient"]["name"] == patient.name
        assert data["doctor"]["full_name"] == doctor_user.full_name
        assert data["consultation_type"]["price"] == 50

    def test_status_is_always_scheduled_on_create(self, client, employee_headers, appointment_payload) -> None:
        payload = dict(appointment_payload, status="completed")

        response = client.post("/api/appointments", json=payload, headers=employee_headers)

        assert response.json()["status"] == "scheduled"

    def test_double_booking_rejected(self, client, employee_headers, appointment_payload, other_patient) -> None:
        client.post("/api/appointments", json=appointment_payload, headers=employee_headers)
        payload = dict(appointment_payload, patient_id=str(other_patient.id))

        response = client.post("/api/appointments", json=payload, headers=employee_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Doctor is not available at the selected time"
        assert body["error_code"] == "SLOT_UNAVAILABLE"

    def test_time_outside_working_hours(self, client, employee_headers, appointment_payload) -> None:
        payload = dict(appointment_payload, time="19:00")

        response = client.post("/api/appointments", json=payload, headers=employee_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "SLOT_UNAVAILABLE"

    def test_time_off_grid(self, client, employee_headers, appointment_payload) -> None:
        payload = dict(appointment_payload, time="10:15")

        response = client.post("/api/appointments", json=payload, headers=employee_headers)

        assert response.status_code == 400

    def test_malformed_time(self, client, employee_headers, appointment_payload) -> None:
        payload = dict(appointment_payload, time="10h00")

        response = client.post("/api/appointments", json=payload, headers=employee_headers)

        assert response.status_code == 400
        assert response.json()["validation_errors"][0]["field"] == "time"

    def test_unknown_patient(self, client, employee_headers, appointment_payload) -> None:
        payload = dict(appointment_payload, patient_id=str(uuid4()))

        response = client.post("/api/appointments", json=payload, headers=employee_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Patient not found"

    def test_doctor_must_be_a_doctor(self, client, employee_headers, employee_user, appointment_payload) -> None:
        payload = dict(appointment_payload, doctor_id=str(employee_user.id))

        response = client.post("/api/appointments", json=payload, headers=employee_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Doctor not found"

    def test_inactive_consultation_type(
        self, client, admin_headers, appointment_payload, consultation_type
    ) -> None:
        client.delete(f"/api/consultation-types/{consultation_type.id}", headers=admin_headers)

        response = client.post("/api/appointments", json=appointment_payload, headers=admin_headers)

        assert response.status_code == 404

    def test_requires_permission(self, client, headers_for, make_user, appointment_payload, db_session) -> None:
        """Users whose type has no active config are refused."""
        for config in db_session.query(UserTypeConfig).all():
            config.is_active = False
        db_session.commit()
        clerk = make_user("clerk@clinic.pt")

        response = client.post("/api/appointments", json=appointment_payload, headers=headers_for(clerk))

        assert response.status_code == 403


@pytest.mark.appointments
@pytest.mark.integration
class TestAppointmentUpdates:
    """Test rescheduling, cancellation and completion."""

    def book(self, client, headers, payload) -> dict:
        response = client.post("/api/appointments", json=payload, headers=headers)
        assert response.status_code == 201
        return response.json()

    def test_reschedule_to_free_slot(self, client, employee_headers, appointment_payload) -> None:
        appointment = self.book(client, employee_headers, appointment_payload)

        response = client.put(
            f"/api/appointments/{appointment['id']}",
            json={"time": "11:30", "notes": "Paciente pediu mais tarde"},
            headers=employee_headers,
        )

        assert response.status_code == 200
        assert response.json()["time"] == "11:30"
        assert response.json()["notes"] == "Paciente pediu mais tarde"

    def test_reschedule_to_own_slot_is_allowed(self, client, employee_headers, appointment_payload) -> None:
        """The appointment's own booking does not block it."""
        appointment = self.book(client, employee_headers, appointment_payload)

        response = client.put(
            f"/api/appointments/{appointment['id']}",
            json={"time": "10:00", "date": appointment_payload["date"]},
            headers=employee_headers,
        )

        assert response.status_code == 200

    def test_reschedule_into_taken_slot(
        self, client, employee_headers, appointment_payload, other_patient
    ) -> None:
        self.book(client, employee_headers, appointment_payload)
        second = self.book(
            client, employee_headers, dict(appointment_payload, patient_id=str(other_patient.id), time="11:00")
        )

        response = client.put(
            f"/api/appointments/{second['id']}",
            json={"time": "10:00"},
            headers=employee_headers,
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "SLOT_UNAVAILABLE"

    def test_reopening_cancelled_needs_free_slot(
        self, client, employee_headers, appointment_payload, other_patient
    ) -> None:
        first = self.book(client, employee_headers, appointment_payload)
        client.put(f"/api/appointments/{first['id']}", json={"status": "cancelled"}, headers=employee_headers)
        self.book(client, employee_headers, dict(appointment_payload, patient_id=str(other_patient.id)))

        response = client.put(
            f"/api/appointments/{first['id']}",
            json={"status": "scheduled"},
            headers=employee_headers,
        )

        assert response.status_code == 400

    def test_clear_notes_with_null(self, client, employee_headers, appointment_payload) -> None:
        appointment = self.book(client, employee_headers, dict(appointment_payload, notes="Trazer exames"))

        response = client.put(
            f"/api/appointments/{appointment['id']}",
            json={"notes": None},
            headers=employee_headers,
        )

        assert response.status_code == 200
        assert response.json()["notes"] is None
        assert response.json()["time"] == "10:00"

    def test_null_required_field_rejected(self, client, employee_headers, appointment_payload) -> None:
        appointment = self.book(client, employee_headers, appointment_payload)

        response = client.put(
            f"/api/appointments/{appointment['id']}",
            json={"time": None},
            headers=employee_headers,
        )

        assert response.status_code == 400
        assert response.json()["validation_errors"][0]["field"] == "time"

    def test_unknown_appointment(self, client, employee_headers) -> None:
        response = client.put(
            f"/api/appointments/{uuid4()}",
            json={"notes": "x"},
            headers=employee_headers,
        )

        assert response.status_code == 404


@pytest.mark.appointments
@pytest.mark.finance
@pytest.mark.integration
class TestAppointmentCompletion:
    """Completing an appointment bills the consultation exactly once."""

    def complete(self, client, headers, appointment_id):
        return client.put(
            f"/api/appointments/{appointment_id}",
            json={"status": "completed"},
            headers=headers,
        )

    def charges_for(self, db_session, appointment_id):
        db_session.expire_all()
        return db_session.query(Transaction).filter(
            Transaction.appointment_id == UUID(str(appointment_id))
        ).all()

    def test_completion_creates_pending_charge(
        self, client, db_session, employee_headers, appointment_payload, patient
    ) -> None:
        appointment = client.post("/api/appointments", json=appointment_payload, headers=employee_headers).json()

        response = self.complete(client, employee_headers, appointment["id"])

        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        charges = self.charges_for(db_session, appointment["id"])
        assert len(charges) == 1
        charge = charges[0]
        assert charge.status == TransactionStatus.PENDING
        assert float(charge.amount) == 50
        assert charge.patient_id == patient.id
        assert charge.transaction_type.name == settings.CONSULTATION_TRANSACTION_TYPE_NAME
        assert charge.transaction_type.category.value == "income"

    def test_recompletion_does_not_duplicate(
        self, client, db_session, employee_headers, appointment_payload
    ) -> None:
        appointment = client.post("/api/appointments", json=appointment_payload, headers=employee_headers).json()

        self.complete(client, employee_headers, appointment["id"])
        self.complete(client, employee_headers, appointment["id"])
        client.put(
            f"/api/appointments/{appointment['id']}",
            json={"status": "scheduled"},
            headers=employee_headers,
        )
        self.complete(client, employee_headers, appointment["id"])

        assert len(self.charges_for(db_session, appointment["id"])) == 1

    def test_other_linked_transactions_do_not_count_as_the_charge(
        self, client, db_session, admin_headers, appointment_payload, patient, income_type
    ) -> None:
        appointment = client.post("/api/appointments", json=appointment_payload, headers=admin_headers).json()
        deposit = client.post(
            "/api/transactions",
            json={
                "patient_id": str(patient.id),
                "appointment_id": appointment["id"],
                "transaction_type_id": str(income_type.id),
                "amount": 10,
                "status": "paid",
            },
            headers=admin_headers,
        )
        assert deposit.status_code == 201

        self.complete(client, admin_headers, appointment["id"])

        linked = self.charges_for(db_session, appointment["id"])
        pending = [t for t in linked if t.status == TransactionStatus.PENDING]
        assert len(linked) == 2
        assert len(pending) == 1
        assert pending[0].transaction_type.name == settings.CONSULTATION_TRANSACTION_TYPE_NAME
        assert float(pending[0].amount) == 50

    def test_completing_again_bills_when_charge_is_missing(
        self, client, db_session, admin_headers, appointment_payload
    ) -> None:
        appointment = client.post("/api/appointments", json=appointment_payload, headers=admin_headers).json()
        self.complete(client, admin_headers, appointment["id"])
        charge = self.charges_for(db_session, appointment["id"])[0]
        client.delete(f"/api/transactions/{charge.id}", headers=admin_headers)
        assert self.charges_for(db_session, appointment["id"]) == []

        response = self.complete(client, admin_headers, appointment["id"])

        assert response.status_code == 200
        charges = self.charges_for(db_session, appointment["id"])
        assert len(charges) == 1
        assert charges[0].status == TransactionStatus.PENDING

    def test_completion_reuses_existing_income_type(
        self, client, db_session, admin_headers, appointment_payload
    ) -> None:
        existing = client.post(
            "/api/transaction-types",
            json={"name": settings.CONSULTATION_TRANSACTION_TYPE_NAME, "category": "income"},
            headers=admin_headers,
        ).json()
        appointment = client.post("/api/appointments", json=appointment_payload, headers=admin_headers).json()

        self.complete(client, admin_headers, appointment["id"])

        charge = self.charges_for(db_session, appointment["id"])[0]
        assert str(charge.transaction_type_id) == existing["id"]

    def test_cancelling_does_not_bill(self, client, db_session, employee_headers, appointment_payload) -> None:
        appointment = client.post("/api/appointments", json=appointment_payload, headers=employee_headers).json()

        client.put(
            f"/api/appointments/{appointment['id']}",
            json={"status": "cancelled"},
            headers=employee_headers,
        )

        assert self.charges_for(db_session, appointment["id"]) == []


@pytest.mark.appointments
@pytest.mark.integration
class TestAppointmentListing:
    """Test filtering and pagination."""

    @pytest.fixture
    def appointments(self, client, admin_headers, appointment_payload, other_patient, booking_date):
        later = booking_date + timedelta(days=1)
        payloads = [
            appointment_payload,
            dict(appointment_payload, time="09:00"),
            dict(appointment_payload, patient_id=str(other_patient.id), date=later.isoformat(), time="09:00"),
        ]
        return [
            client.post("/api/appointments", json=payload, headers=admin_headers).json()
            for payload in payloads
        ]

    def test_ordering_and_pagination(self, client, admin_headers, appointments, booking_date) -> None:
        response = client.get("/api/appointments", params={"limit": 2}, headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["pages"] == 2
        assert data["page"] == 1
        # Latest date first, earliest time first within a date
        assert [(a["date"], a["time"]) for a in data["items"]] == [
            ((booking_date + timedelta(days=1)).isoformat(), "09:00"),
            (booking_date.isoformat(), "09:00"),
        ]

        second_page = client.get("/api/appointments", params={"limit": 2, "page": 2}, headers=admin_headers)
        assert [a["time"] for a in second_page.json()["items"]] == ["10:00"]

    def test_filter_by_date(self, client, admin_headers, appointments, booking_date) -> None:
        response = client.get(
            "/api/appointments", params={"date": booking_date.isoformat()}, headers=admin_headers
        )

        assert response.json()["total"] == 2

    def test_filter_by_range_and_patient(
        self, client, admin_headers, appointments, booking_date, other_patient
    ) -> None:
        by_range = client.get(
            "/api/appointments",
            params={"date_from": (booking_date + timedelta(days=1)).isoformat()},
            headers=admin_headers,
        )
        by_patient = client.get(
            "/api/appointments", params={"patient_id": str(other_patient.id)}, headers=admin_headers
        )

        assert by_range.json()["total"] == 1
        assert by_patient.json()["total"] == 1

    def test_search(self, client, admin_headers, appointments) -> None:
        by_patient = client.get("/api/appointments", params={"search": "pedro"}, headers=admin_headers)
        by_doctor = client.get("/api/appointments", params={"search": "silva"}, headers=admin_headers)
        by_type = client.get("/api/appointments", params={"search": "rotina"}, headers=admin_headers)

        assert by_patient.json()["total"] == 1
        assert by_doctor.json()["total"] == 3
        assert by_type.json()["total"] == 3

    def test_filter_by_status(self, client, admin_headers, appointments) -> None:
        client.put(
            f"/api/appointments/{appointments[0]['id']}",
            json={"status": "cancelled"},
            headers=admin_headers,
        )

        cancelled = client.get("/api/appointments", params={"status": "cancelled"}, headers=admin_headers)
        by_search = client.get("/api/appointments", params={"search": "cancel"}, headers=admin_headers)

        assert cancelled.json()["total"] == 1
        assert by_search.json()["total"] == 1

    def test_empty_list(self, client, admin_headers) -> None:
        data = client.get("/api/appointments", headers=admin_headers).json()

        assert data == {"items": [], "total": 0, "page": 1, "limit": 10, "pages": 1}


@pytest.mark.appointments
@pytest.mark.integration
class TestAppointmentDeletion:

    def test_delete(self, client, admin_headers, appointment_payload) -> None:
        appointment = client.post("/api/appointments", json=appointment_payload, headers=admin_headers).json()

        response = client.delete(f"/api/appointments/{appointment['id']}", headers=admin_headers)

        assert response.status_code == 204
        assert client.get(f"/api/appointments/{appointment['id']}", headers=admin_headers).status_code == 404

    def test_delete_billed_appointment_refused(self, client, admin_headers, appointment_payload) -> None:
        appointment = client.post("/api/appointments", json=appointment_payload, headers=admin_headers).json()
        client.put(
            f"/api/appointments/{appointment['id']}",
            json={"status": "completed"},
            headers=admin_headers,
        )

        response = client.delete(f"/api/appointments/{appointment['id']}", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "APPOINTMENT_HAS_TRANSACTIONS"

    def test_delete_requires_permission(self, client, employee_headers, appointment_payload) -> None:
        appointment = client.post("/api/appointments", json=appointment_payload, headers=employee_headers).json()

        response = client.delete(f"/api/appointments/{appointment['id']}", headers=employee_headers)

        assert response.status_code == 403
