"""
Patients Service Layer
"""

from typing import Optional, List, Dict, Any
import uuid
from loguru import logger

from dental_clinic.core.exceptions import BusinessLogicError, ConflictError, NotFoundError
from dental_clinic.domain.patients.models import Patient
from dental_clinic.domain.patients.repository import PatientRepository
from dental_clinic.domain.appointments.repository import AppointmentRepository
from dental_clinic.domain.procedures.repository import ProcedureRepository
from dental_clinic.domain.finance.repository import TransactionRepository


class PatientService:
    """Service layer for patient records"""

    def __init__(self, db):
        self.db = db
        self.patient_repo = PatientRepository(db)

    def _clean_identifiers(self, data: Dict[str, Any]) -> None:
        # Blank di/nif are stored as NULL so the unique index ignores them
        for key in ("di", "nif"):
            if key in data and isinstance(data[key], str):
                data[key] = data[key].strip() or None

    def _check_unique(self, data: Dict[str, Any], exclude_id: Optional[uuid.UUID] = None) -> None:
        if data.get("di"):
            existing = self.patient_repo.get_by_di(data["di"])
            if existing and existing.id != exclude_id:
                raise ConflictError("A patient with this DI already exists", details={"field": "di"})
        if data.get("nif"):
            existing = self.patient_repo.get_by_nif(data["nif"])
            if existing and existing.id != exclude_id:
                raise ConflictError("A patient with this NIF already exists", details={"field": "nif"})

    def list_patients(self, search: Optional[str] = None) -> List[Patient]:
        return self.patient_repo.search(search)

    def get_patient(self, patient_id: uuid.UUID) -> Patient:
        patient = self.patient_repo.get_by_id(patient_id)
        if not patient:
            raise NotFoundError("Patient not found")
        return patient

    def create_patient(self, patient_data: Dict[str, Any]) -> Patient:
        data = dict(patient_data)
        self._clean_identifiers(data)
        self._check_unique(data)
        patient = self.patient_repo.create(data)
        logger.info(f"Created patient {patient.id}")
        return patient

    def update_patient(self, patient_id: uuid.UUID, update_data: Dict[str, Any]) -> Patient:
        patient = self.get_patient(patient_id)
        data = dict(update_data)
        self._clean_identifiers(data)
        self._check_unique(data, exclude_id=patient.id)
        return self.patient_repo.update(patient, data)

    def delete_patient(self, patient_id: uuid.UUID) -> None:
        """Hard delete, refused while anything still references the patient"""
        patient = self.get_patient(patient_id)
        dependents = self.patient_repo.count_dependents(patient.id)
        if any(dependents.values()):
            raise BusinessLogicError(
                "Cannot delete patient with existing appointments, procedures or transactions",
                details=dependents,
                error_code="PATIENT_HAS_DEPENDENTS"
            )
        self.patient_repo.delete(patient)
        logger.info(f"Deleted patient {patient_id}")

    def get_history(self, patient_id: uuid.UUID) -> Dict[str, Any]:
        """Patient with every appointment, procedure and transaction on record"""
        patient = self.get_patient(patient_id)
        return {
            "patient": patient,
            "appointments": AppointmentRepository(self.db).get_by_patient(patient.id),
            "procedures": ProcedureRepository(self.db).get_by_patient(patient.id),
            "transactions": TransactionRepository(self.db).get_by_patient(patient.id),
        }
