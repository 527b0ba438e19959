import pytest
from uuid import uuid4


@pytest.mark.patients
@pytest.mark.integration
class TestPatientManagement:
    """Test patient management endpoints and functionality."""

    def test_create_patient_success(self, client, employee_headers) -> None:
        response = client.post(
            "/api/patients",
            json={"name": "Joana Ferreira", "di": "11223344", "nif": "198765432", "email": "joana@mail.pt"},
            headers=employee_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Joana Ferreira"
        assert data["di"] == "11223344"
        assert "id" in data

    def test_create_patient_validation_error(self, client, employee_headers) -> None:
        """Invalid payloads answer 400 with one entry per field."""
        response = client.post(
            "/api/patients",
            json={"email": "not-an-email"},
            headers=employee_headers,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        errors = {error["field"]: error for error in body["validation_errors"]}
        assert errors["name"]["type"] == "missing"
        assert "email" in errors
        assert all(error["message"] for error in body["validation_errors"])

    def test_duplicate_di(self, client, employee_headers, patient) -> None:
        response = client.post(
            "/api/patients",
            json={"name": "Outra Maria", "di": patient.di},
            headers=employee_headers,
        )

        assert response.status_code == 409
        assert response.json()["details"] == {"field": "di"}

    def test_duplicate_nif(self, client, employee_headers, patient) -> None:
        response = client.post(
            "/api/patients",
            json={"name": "Outra Maria", "nif": patient.nif},
            headers=employee_headers,
        )

        assert response.status_code == 409

    def test_blank_identifiers_do_not_collide(self, client, employee_headers) -> None:
        first = client.post("/api/patients", json={"name": "Sem DI", "di": "  "}, headers=employee_headers)
        second = client.post("/api/patients", json={"name": "Sem DI Dois", "di": ""}, headers=employee_headers)

        assert first.status_code == second.status_code == 201
        assert first.json()["di"] is None

    def test_get_patient(self, client, employee_headers, patient) -> None:
        response = client.get(f"/api/patients/{patient.id}", headers=employee_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Maria Costa"

    def test_get_patient_not_found(self, client, employee_headers) -> None:
        response = client.get(f"/api/patients/{uuid4()}", headers=employee_headers)

        assert response.status_code == 404

    def test_invalid_patient_id(self, client, employee_headers) -> None:
        response = client.get("/api/patients/not-a-uuid", headers=employee_headers)

        assert response.status_code == 400

    def test_search_patients(self, client, employee_headers, patient, other_patient) -> None:
        by_name = client.get("/api/patients", params={"search": "maria"}, headers=employee_headers)
        by_phone = client.get("/api/patients", params={"search": "93654"}, headers=employee_headers)
        everyone = client.get("/api/patients", headers=employee_headers)

        assert [p["name"] for p in by_name.json()] == ["Maria Costa"]
        assert [p["name"] for p in by_phone.json()] == ["Pedro Nunes"]
        assert [p["name"] for p in everyone.json()] == ["Maria Costa", "Pedro Nunes"]

    def test_update_patient(self, client, employee_headers, patient) -> None:
        response = client.put(
            f"/api/patients/{patient.id}",
            json={"phone": "919999999", "notes": "Alergia a latex"},
            headers=employee_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["phone"] == "919999999"
        assert data["notes"] == "Alergia a latex"
        assert data["name"] == "Maria Costa"

    def test_update_patient_keeps_own_di(self, client, employee_headers, patient) -> None:
        response = client.put(
            f"/api/patients/{patient.id}",
            json={"di": patient.di},
            headers=employee_headers,
        )

        assert response.status_code == 200

    def test_update_patient_di_taken(self, client, employee_headers, patient, other_patient) -> None:
        response = client.put(
            f"/api/patients/{other_patient.id}",
            json={"di": patient.di},
            headers=employee_headers,
        )

        assert response.status_code == 409

    def test_update_patient_null_name(self, client, employee_headers, patient) -> None:
        response = client.put(
            f"/api/patients/{patient.id}",
            json={"name": None},
            headers=employee_headers,
        )

        assert response.status_code == 400

    def test_delete_patient(self, client, admin_headers, other_patient) -> None:
        response = client.delete(f"/api/patients/{other_patient.id}", headers=admin_headers)

        assert response.status_code == 204
        assert client.get(f"/api/patients/{other_patient.id}", headers=admin_headers).status_code == 404

    def test_delete_patient_with_appointments(
        self, client, admin_headers, patient, appointment_payload
    ) -> None:
        client.post("/api/appointments", json=appointment_payload, headers=admin_headers)

        response = client.delete(f"/api/patients/{patient.id}", headers=admin_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "PATIENT_HAS_DEPENDENTS"
        assert body["details"]["appointments"] == 1


@pytest.mark.patients
@pytest.mark.integration
class TestPatientHistory:

    def test_history(self, client, admin_headers, patient, appointment_payload) -> None:
        created = client.post("/api/appointments", json=appointment_payload, headers=admin_headers)
        client.put(
            f"/api/appointments/{created.json()['id']}",
            json={"status": "completed"},
            headers=admin_headers,
        )

        response = client.get(f"/api/patients/{patient.id}/history", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["patient"]["id"] == str(patient.id)
        assert len(data["appointments"]) == 1
        assert data["appointments"][0]["status"] == "completed"
        assert data["procedures"] == []
        assert len(data["transactions"]) == 1
        assert data["transactions"][0]["status"] == "pending"

    def test_history_unknown_patient(self, client, admin_headers) -> None:
        response = client.get(f"/api/patients/{uuid4()}/history", headers=admin_headers)

        assert response.status_code == 404
