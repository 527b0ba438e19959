"""
Appointments Repository Layer

Data access for the appointment book. Reads eager-load the patient,
doctor and consultation type because every response nests them.
"""

from typing import Optional, List, Tuple
from sqlalchemy import or_, func
from sqlalchemy.orm import joinedload
from datetime import date
import uuid

from dental_clinic.domain.appointments.models import Appointment, AppointmentStatus
from dental_clinic.domain.patients.models import Patient
from dental_clinic.domain.users.models import User
from dental_clinic.domain.catalog.models import ConsultationType

_SUMMARIES = (
    joinedload(Appointment.patient),
    joinedload(Appointment.doctor),
    joinedload(Appointment.consultation_type),
)


class AppointmentRepository:

    def __init__(self, db):
        self.db = db

    def _query(self):
        return self.db.query(Appointment).options(*_SUMMARIES)

    def _active_on(self, appointment_date: date):
        return (
            Appointment.date == appointment_date,
            Appointment.status != AppointmentStatus.CANCELLED,
        )

    def create(self, appointment_data: dict) -> Appointment:
        appointment = Appointment(**appointment_data)
        self.db.add(appointment)
        self.db.commit()
        self.db.refresh(appointment)
        return appointment

    def get_by_id(self, appointment_id: uuid.UUID) -> Optional[Appointment]:
        return self._query().filter(Appointment.id == appointment_id).first()

    def get_all(
        self,
        skip: int = 0,
        limit: int = 10,
        appointment_date: Optional[date] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        doctor_id: Optional[uuid.UUID] = None,
        patient_id: Optional[uuid.UUID] = None,
        status: Optional[AppointmentStatus] = None,
        search: Optional[str] = None
    ) -> Tuple[List[Appointment], int]:
        """Return one page of the book plus the total matching the filters.

        ``search`` matches patient name, doctor first/last name, consultation
        type name and any status whose value contains the term.
        """
        query = (
            self.db.query(Appointment)
            .join(Patient, Appointment.patient_id == Patient.id)
            .join(User, Appointment.doctor_id == User.id)
            .join(ConsultationType, Appointment.consultation_type_id == ConsultationType.id)
        )

        exact = (
            (Appointment.date, appointment_date),
            (Appointment.doctor_id, doctor_id),
            (Appointment.patient_id, patient_id),
            (Appointment.status, status),
        )
        for column, value in exact:
            if value is not None:
                query = query.filter(column == value)
        if date_from:
            query = query.filter(Appointment.date >= date_from)
        if date_to:
            query = query.filter(Appointment.date <= date_to)

        if search and search.strip():
            needle = search.strip().lower()
            pattern = f"%{needle}%"
            conditions = [
                func.lower(column).like(pattern)
                for column in (Patient.name, User.first_name, User.last_name, ConsultationType.name)
            ]
            statuses = [s for s in AppointmentStatus if needle in s.value]
            if statuses:
                conditions.append(Appointment.status.in_(statuses))
            query = query.filter(or_(*conditions))

        total = query.count()
        page = (
            query.options(*_SUMMARIES)
            .order_by(Appointment.date.desc(), Appointment.time.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return page, total

    def get_booked_times(
        self,
        doctor_id: uuid.UUID,
        appointment_date: date,
        exclude_id: Optional[uuid.UUID] = None
    ) -> List[str]:
        """Times held by the doctor's non-cancelled appointments that day"""
        query = self.db.query(Appointment.time).filter(
            Appointment.doctor_id == doctor_id, *self._active_on(appointment_date)
        )
        if exclude_id:
            query = query.filter(Appointment.id != exclude_id)
        return [booked for (booked,) in query]

    def get_by_patient(self, patient_id: uuid.UUID) -> List[Appointment]:
        return (
            self._query()
            .filter(Appointment.patient_id == patient_id)
            .order_by(Appointment.date.desc(), Appointment.time.desc())
            .all()
        )

    def get_recent(self, limit: int = 5) -> List[Appointment]:
        return self._query().order_by(Appointment.created_at.desc()).limit(limit).all()

    def count_for_date(self, appointment_date: date) -> int:
        return self.db.query(func.count(Appointment.id)).filter(
            *self._active_on(appointment_date)
        ).scalar()

    def count_distinct_patients_since(self, since: date) -> int:
        return self.db.query(func.count(func.distinct(Appointment.patient_id))).filter(
            Appointment.date >= since,
            Appointment.status != AppointmentStatus.CANCELLED
        ).scalar()

    def update(self, appointment: Appointment, update_data: dict) -> Appointment:
        for key, value in update_data.items():
            if hasattr(appointment, key):
                setattr(appointment, key, value)
        self.db.commit()
        self.db.refresh(appointment)
        return appointment

    def delete(self, appointment: Appointment) -> None:
        self.db.delete(appointment)
        self.db.commit()
