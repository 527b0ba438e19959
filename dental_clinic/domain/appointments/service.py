"""
Appointments Service Layer

Business logic for appointment booking, doctor availability and the
billing side effect of completing an appointment.
"""

from typing import Optional, List, Dict, Any, Tuple
from datetime import date
import uuid
from loguru import logger

from dental_clinic.core.config import settings
from dental_clinic.core.exceptions import BusinessLogicError, NotFoundError, ValidationError
from dental_clinic.domain.appointments.availability import (
    is_valid_time, resolve_working_window, generate_slot_grid, subtract_booked
)
from dental_clinic.domain.appointments.models import Appointment, AppointmentStatus
from dental_clinic.domain.appointments.repository import AppointmentRepository
from dental_clinic.domain.catalog.service import ConsultationTypeService
from dental_clinic.domain.finance.repository import TransactionRepository
from dental_clinic.domain.finance.service import TransactionService
from dental_clinic.domain.patients.repository import PatientRepository
from dental_clinic.domain.procedures.repository import ProcedureRepository
from dental_clinic.domain.users.models import User
from dental_clinic.domain.users.service import DoctorService

SCHEDULING_FIELDS = ("doctor_id", "date", "time")


class AppointmentService:
    """Service layer for appointment management"""

    def __init__(self, db):
        self.db = db
        self.appointment_repo = AppointmentRepository(db)
        self.doctor_service = DoctorService(db)

    # ==================== Availability ====================

    def available_slots_for(
        self,
        doctor: User,
        target_date: date,
        exclude_appointment_id: Optional[uuid.UUID] = None
    ) -> List[str]:
        window = resolve_working_window(
            target_date,
            working_days=doctor.working_days,
            working_hours=doctor.working_hours,
            daily_schedules=doctor.daily_schedules,
            default_start=settings.CLINIC_OPENING_TIME,
            default_end=settings.CLINIC_CLOSING_TIME,
        )
        if window is None:
            return []

        grid = generate_slot_grid(window[0], window[1], settings.SLOT_DURATION_MINUTES)
        booked = self.appointment_repo.get_booked_times(
            doctor.id, target_date, exclude_id=exclude_appointment_id
        )
        return subtract_booked(grid, booked)

    def get_available_slots(self, doctor_id: uuid.UUID, target_date: date) -> List[str]:
        """Free "HH:MM" slots of a doctor on a date"""
        doctor = self.doctor_service.get_doctor(doctor_id)
        return self.available_slots_for(doctor, target_date)

    def _ensure_available(
        self,
        doctor: User,
        target_date: date,
        slot: str,
        exclude_appointment_id: Optional[uuid.UUID] = None
    ) -> None:
        if not is_valid_time(slot):
            raise ValidationError("Time must use the HH:MM format", details={"field": "time"})
        if slot not in self.available_slots_for(doctor, target_date, exclude_appointment_id):
            raise BusinessLogicError(
                "Doctor is not available at the selected time",
                details={"doctor_id": str(doctor.id), "date": target_date.isoformat(), "time": slot},
                error_code="SLOT_UNAVAILABLE"
            )

    # ==================== Appointments ====================

    def _check_references(self, data: Dict[str, Any]) -> None:
        if data.get("patient_id") and not PatientRepository(self.db).get_by_id(data["patient_id"]):
            raise NotFoundError("Patient not found")
        if data.get("consultation_type_id"):
            ConsultationTypeService(self.db).get_active(data["consultation_type_id"])

    def get_appointments(
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
        """Get appointments with filtering"""
        return self.appointment_repo.get_all(
            skip=skip,
            limit=limit,
            appointment_date=appointment_date,
            date_from=date_from,
            date_to=date_to,
            doctor_id=doctor_id,
            patient_id=patient_id,
            status=status,
            search=search
        )

    def get_appointment(self, appointment_id: uuid.UUID) -> Appointment:
        appointment = self.appointment_repo.get_by_id(appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    def create_appointment(self, appointment_data: Dict[str, Any]) -> Appointment:
        """Book a new appointment in a free slot"""
        self._check_references(appointment_data)
        doctor = self.doctor_service.get_doctor(appointment_data["doctor_id"])
        if not doctor.is_active:
            raise BusinessLogicError("Doctor is not active")

        self._ensure_available(doctor, appointment_data["date"], appointment_data["time"])

        data = dict(appointment_data)
        data["status"] = AppointmentStatus.SCHEDULED
        appointment = self.appointment_repo.create(data)
        logger.info(
            f"Booked appointment {appointment.id} with doctor {doctor.email} "
            f"on {appointment.date} at {appointment.time}"
        )
        return self.get_appointment(appointment.id)

    def update_appointment(self, appointment_id: uuid.UUID, update_data: Dict[str, Any]) -> Appointment:
        """Partial update; rescheduling re-checks the slot and completion bills the visit"""
        appointment = self.get_appointment(appointment_id)
        self._check_references(update_data)

        previous_status = appointment.status
        new_status = update_data.get("status") or previous_status
        doctor_id = update_data.get("doctor_id") or appointment.doctor_id
        target_date = update_data.get("date") or appointment.date
        slot = update_data.get("time") or appointment.time

        rescheduled = any(
            key in update_data and update_data[key] != getattr(appointment, key)
            for key in SCHEDULING_FIELDS
        )
        reopened = (
            previous_status == AppointmentStatus.CANCELLED
            and new_status != AppointmentStatus.CANCELLED
        )
        if new_status != AppointmentStatus.CANCELLED and (rescheduled or reopened):
            doctor = self.doctor_service.get_doctor(doctor_id)
            self._ensure_available(doctor, target_date, slot, exclude_appointment_id=appointment.id)

        appointment = self.appointment_repo.update(appointment, update_data)

        # At most one charge; completing again bills an appointment still missing one
        if update_data.get("status") == AppointmentStatus.COMPLETED:
            TransactionService(self.db).create_consultation_charge(appointment)

        return self.get_appointment(appointment.id)

    def delete_appointment(self, appointment_id: uuid.UUID) -> None:
        appointment = self.get_appointment(appointment_id)
        if TransactionRepository(self.db).get_by_appointment(appointment.id):
            raise BusinessLogicError(
                "Cannot delete an appointment that has transactions; cancel it instead",
                error_code="APPOINTMENT_HAS_TRANSACTIONS"
            )
        if ProcedureRepository(self.db).get_by_appointment(appointment.id):
            raise BusinessLogicError(
                "Cannot delete an appointment that has procedures; cancel it instead",
                error_code="APPOINTMENT_HAS_PROCEDURES"
            )
        self.appointment_repo.delete(appointment)
        logger.info(f"Deleted appointment {appointment_id}")
