from typing import Optional, List, Tuple
from sqlalchemy import or_, func
from sqlalchemy.orm import joinedload
import uuid

from dental_clinic.domain.procedures.models import Procedure, ProcedureStatus
from dental_clinic.domain.patients.models import Patient
from dental_clinic.domain.catalog.models import ProcedureType


class ProcedureRepository:
    """Repository for procedure data access operations"""

    def __init__(self, db):
        self.db = db

    def create(self, procedure_data: dict) -> Procedure:
        procedure = Procedure(**procedure_data)
        self.db.add(procedure)
        self.db.commit()
        self.db.refresh(procedure)
        return procedure

    def get_by_id(self, procedure_id: uuid.UUID) -> Optional[Procedure]:
        return self.db.query(Procedure).options(
            joinedload(Procedure.patient),
            joinedload(Procedure.doctor),
            joinedload(Procedure.procedure_type)
        ).filter(Procedure.id == procedure_id).first()

    def get_by_appointment(self, appointment_id: uuid.UUID) -> List[Procedure]:
        return self.db.query(Procedure).filter(
            Procedure.appointment_id == appointment_id
        ).all()

    def get_by_patient(self, patient_id: uuid.UUID) -> List[Procedure]:
        return self.db.query(Procedure).options(
            joinedload(Procedure.doctor),
            joinedload(Procedure.procedure_type)
        ).filter(
            Procedure.patient_id == patient_id
        ).order_by(Procedure.date.desc()).all()

    def get_all(
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
        query = self.db.query(Procedure).join(
            Patient, Procedure.patient_id == Patient.id
        ).join(
            ProcedureType, Procedure.procedure_type_id == ProcedureType.id
        )

        if patient_id:
            query = query.filter(Procedure.patient_id == patient_id)
        if doctor_id:
            query = query.filter(Procedure.doctor_id == doctor_id)
        if appointment_id:
            query = query.filter(Procedure.appointment_id == appointment_id)
        if procedure_type_id:
            query = query.filter(Procedure.procedure_type_id == procedure_type_id)
        if status:
            query = query.filter(Procedure.status == status)
        if search:
            term = f"%{search.strip().lower()}%"
            query = query.filter(
                or_(
                    func.lower(Patient.name).like(term),
                    func.lower(ProcedureType.name).like(term),
                    func.lower(Procedure.notes).like(term),
                )
            )

        total = query.count()
        items = query.options(
            joinedload(Procedure.patient),
            joinedload(Procedure.doctor),
            joinedload(Procedure.procedure_type)
        ).order_by(Procedure.date.desc(), Procedure.created_at.desc()).offset(skip).limit(limit).all()
        return items, total

    def update(self, procedure: Procedure, update_data: dict) -> Procedure:
        for key, value in update_data.items():
            if hasattr(procedure, key):
                setattr(procedure, key, value)
        self.db.commit()
        self.db.refresh(procedure)
        return procedure
