"""
Procedures Service Layer
"""

from typing import Optional, List, Dict, Any, Tuple
import uuid
from loguru import logger

from dental_clinic.core.exceptions import NotFoundError, ValidationError
from dental_clinic.domain.appointments.repository import AppointmentRepository
from dental_clinic.domain.catalog.service import ProcedureTypeService
from dental_clinic.domain.patients.repository import PatientRepository
from dental_clinic.domain.procedures.models import Procedure, ProcedureStatus
from dental_clinic.domain.procedures.repository import ProcedureRepository
from dental_clinic.domain.users.service import DoctorService


class ProcedureService:
    """Service layer for clinical procedures; cost always follows the type price"""

    def __init__(self, db):
        self.db = db
        self.procedure_repo = ProcedureRepository(db)
        self.type_service = ProcedureTypeService(db)

    def _check_references(self, data: Dict[str, Any]) -> None:
        if data.get("patient_id") and not PatientRepository(self.db).get_by_id(data["patient_id"]):
            raise NotFoundError("Patient not found")
        if data.get("doctor_id"):
            DoctorService(self.db).get_doctor(data["doctor_id"])
        if data.get("appointment_id"):
            appointment = AppointmentRepository(self.db).get_by_id(data["appointment_id"])
            if not appointment:
                raise NotFoundError("Appointment not found")
            if data.get("patient_id") and appointment.patient_id != data["patient_id"]:
                raise ValidationError("Appointment belongs to a different patient")

    def get_procedures(
        self,
        skip: int = 0,
        limit: int = 10,
        patient_id: Optional[uuid.UUID] = None,
        doctor_id: Optional[uuid.UUID] = None,
        appointment_id: Optional[uuid.UUID] = None,
        procedure_type_id: Optional[uuid.UUID] = None,
        status: Optional[ProcedureStatus] = None,
        search: Optional[str] = None
    ) -> Tuple[List[Procedure], int]:
        return self.procedure_repo.get_all(
            skip=skip,
            limit=limit,
            patient_id=patient_id,
            doctor_id=doctor_id,
            appointment_id=appointment_id,
            procedure_type_id=procedure_type_id,
            status=status,
            search=search
        )

    def get_procedure(self, procedure_id: uuid.UUID) -> Procedure:
        procedure = self.procedure_repo.get_by_id(procedure_id)
        if not procedure:
            raise NotFoundError("Procedure not found")
        return procedure

    def create_procedure(self, procedure_data: Dict[str, Any]) -> Procedure:
        self._check_references(procedure_data)
        procedure_type = self.type_service.get_active(procedure_data["procedure_type_id"])

        data = dict(procedure_data)
        data["cost"] = procedure_type.price
        data.setdefault("status", ProcedureStatus.IN_PROGRESS)
        procedure = self.procedure_repo.create(data)
        logger.info(f"Logged procedure {procedure.id} ({procedure_type.name}) for patient {procedure.patient_id}")
        return self.get_procedure(procedure.id)

    def update_procedure(self, procedure_id: uuid.UUID, update_data: Dict[str, Any]) -> Procedure:
        procedure = self.get_procedure(procedure_id)
        data = dict(update_data)
        if "appointment_id" in data and "patient_id" not in data:
            data_for_check = {**data, "patient_id": procedure.patient_id}
        else:
            data_for_check = data
        self._check_references(data_for_check)

        type_id = data.get("procedure_type_id")
        if type_id and type_id != procedure.procedure_type_id:
            data["cost"] = self.type_service.get_active(type_id).price

        self.procedure_repo.update(procedure, data)
        return self.get_procedure(procedure.id)
