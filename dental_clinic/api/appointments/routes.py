"""
Appointments API Routes

API endpoints for appointment scheduling.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from typing import Optional
from datetime import date
import uuid
import math

from dental_clinic.infrastructure.database import get_db
from dental_clinic.core.permissions import require_permissions, Permissions
from dental_clinic.domain.appointments.models import AppointmentStatus
from dental_clinic.domain.appointments.service import AppointmentService
from dental_clinic.api.appointments.schemas import (
    AppointmentCreate, AppointmentUpdate, AppointmentResponse, AppointmentListResponse
)

router = APIRouter()


@router.get("", response_model=AppointmentListResponse)
def list_appointments(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    appointment_date: Optional[date] = Query(None, alias="date"),
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    doctor_id: Optional[uuid.UUID] = None,
    patient_id: Optional[uuid.UUID] = None,
    status_filter: Optional[AppointmentStatus] = Query(None, alias="status"),
    search: Optional[str] = None,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.APPOINTMENTS_READ]))
):
    """List appointments with filtering and pagination"""
    service = AppointmentService(db)
    skip = (page - 1) * limit

    appointments, total = service.get_appointments(
        skip=skip,
        limit=limit,
        appointment_date=appointment_date,
        date_from=date_from,
        date_to=date_to,
        doctor_id=doctor_id,
        patient_id=patient_id,
        status=status_filter,
        search=search
    )

    return {
        "items": appointments,
        "total": total,
        "page": page,
        "limit": limit,
        "pages": math.ceil(total / limit) if total > 0 else 1
    }


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
    appointment_data: AppointmentCreate,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.APPOINTMENTS_WRITE]))
):
    """Book a new appointment"""
    service = AppointmentService(db)
    return service.create_appointment(appointment_data.model_dump())


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(
    appointment_id: uuid.UUID,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.APPOINTMENTS_READ]))
):
    """Get appointment by ID"""
    service = AppointmentService(db)
    return service.get_appointment(appointment_id)


@router.put("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(
    appointment_id: uuid.UUID,
    update_data: AppointmentUpdate,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.APPOINTMENTS_WRITE]))
):
    """Update appointment; completing it raises the consultation charge"""
    service = AppointmentService(db)
    return service.update_appointment(
        appointment_id, update_data.model_dump(exclude_unset=True)
    )


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_appointment(
    appointment_id: uuid.UUID,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.APPOINTMENTS_DELETE]))
):
    service = AppointmentService(db)
    service.delete_appointment(appointment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
