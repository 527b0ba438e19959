"""
Doctors API Routes

Doctor listing, availability lookup and admin schedule management.
"""

from fastapi import APIRouter, Depends, Query
from typing import List
from datetime import date
import uuid

from dental_clinic.infrastructure.database import get_db
from dental_clinic.core.permissions import require_password_changed, require_admin
from dental_clinic.domain.appointments.service import AppointmentService
from dental_clinic.domain.users.service import DoctorService
from dental_clinic.api.users.schemas import (
    UserResponse, DoctorScheduleUpdate, DoctorSpecialtiesUpdate
)

router = APIRouter()


@router.get("", response_model=List[UserResponse])
def list_doctors(
    db = Depends(get_db),
    current_user = Depends(require_password_changed)
):
    """List active doctors"""
    return DoctorService(db).list_doctors()


@router.get("/{doctor_id}/availability", response_model=List[str])
def get_doctor_availability(
    doctor_id: uuid.UUID,
    target_date: date = Query(..., alias="date"),
    db = Depends(get_db),
    current_user = Depends(require_password_changed)
):
    """Free HH:MM slots for the doctor on the given date"""
    return AppointmentService(db).get_available_slots(doctor_id, target_date)


@router.put("/{doctor_id}/schedule", response_model=UserResponse)
def update_doctor_schedule(
    doctor_id: uuid.UUID,
    schedule: DoctorScheduleUpdate,
    db = Depends(get_db),
    current_user = Depends(require_admin)
):
    """Replace working days, hours and per-day overrides"""
    return DoctorService(db).update_schedule(
        doctor_id, schedule.model_dump(exclude_unset=True, mode="json")
    )


@router.put("/{doctor_id}/specialties", response_model=UserResponse)
def update_doctor_specialties(
    doctor_id: uuid.UUID,
    specialties_data: DoctorSpecialtiesUpdate,
    db = Depends(get_db),
    current_user = Depends(require_admin)
):
    return DoctorService(db).update_specialties(doctor_id, specialties_data.specialties)
