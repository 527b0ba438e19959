from typing import Optional, List
from sqlalchemy import or_, func
import uuid

from dental_clinic.domain.patients.models import Patient
from dental_clinic.domain.appointments.models import Appointment
from dental_clinic.domain.procedures.models import Procedure
from dental_clinic.domain.finance.models import Transaction


class PatientRepository:
    """Repository for patient data access operations"""

    def __init__(self, db):
        self.db = db

    def create(self, patient_data: dict) -> Patient:
        patient = Patient(**patient_data)
        self.db.add(patient)
        self.db.commit()
        self.db.refresh(patient)
        return patient

    def get_by_id(self, patient_id: uuid.UUID) -> Optional[Patient]:
        return self.db.query(Patient).filter(Patient.id == patient_id).first()

    def get_by_di(self, di: str) -> Optional[Patient]:
        return self.db.query(Patient).filter(Patient.di == di).first()

    def get_by_nif(self, nif: str) -> Optional[Patient]:
        return self.db.query(Patient).filter(Patient.nif == nif).first()

    def search(self, search: Optional[str] = None) -> List[Patient]:
        """Case-insensitive match on name, di, email or phone"""
        query = self.db.query(Patient)
        if search:
            term = f"%{search.strip().lower()}%"
            query = query.filter(
                or_(
                    func.lower(Patient.name).like(term),
                    func.lower(Patient.di).like(term),
                    func.lower(Patient.email).like(term),
                    func.lower(Patient.phone).like(term),
                )
            )
        return query.order_by(Patient.name).all()

    def update(self, patient: Patient, update_data: dict) -> Patient:
        for key, value in update_data.items():
            if hasattr(patient, key):
                setattr(patient, key, value)
        self.db.commit()
        self.db.refresh(patient)
        return patient

    def delete(self, patient: Patient) -> None:
        self.db.delete(patient)
        self.db.commit()

    def count_dependents(self, patient_id: uuid.UUID) -> dict:
        """Rows in other tables that still reference the patient"""
        return {
            "appointments": self.db.query(Appointment).filter(
                Appointment.patient_id == patient_id
            ).count(),
            "procedures": self.db.query(Procedure).filter(
                Procedure.patient_id == patient_id
            ).count(),
            "transactions": self.db.query(Transaction).filter(
                Transaction.patient_id == patient_id
            ).count(),
        }
