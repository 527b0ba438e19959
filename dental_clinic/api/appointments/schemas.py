"""
Appointments API Schemas

Pydantic models for appointment-related API requests and responses.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime, date
import uuid

from dental_clinic.domain.appointments.availability import is_valid_time
from dental_clinic.domain.appointments.models import AppointmentStatus
from dental_clinic.api.users.schemas import UserSummary

DateType = date


def check_time(v):
    if v is not None and not is_valid_time(v):
        raise ValueError("Time must use the HH:MM format")
    return v


class PatientSummary(BaseModel):
    id: uuid.UUID
    name: str

    class Config:
        from_attributes = True


class ConsultationTypeSummary(BaseModel):
    id: uuid.UUID
    name: str
    price: float

    class Config:
        from_attributes = True


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment"""
    patient_id: uuid.UUID
    doctor_id: uuid.UUID
    consultation_type_id: uuid.UUID
    date: DateType
    time: str
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        return check_time(v)


class AppointmentUpdate(BaseModel):
    """Schema for updating appointment; any subset of fields"""
    patient_id: Optional[uuid.UUID] = None
    doctor_id: Optional[uuid.UUID] = None
    consultation_type_id: Optional[uuid.UUID] = None
    date: Optional[DateType] = None
    time: Optional[str] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        return check_time(v)

    @field_validator("patient_id", "doctor_id", "consultation_type_id", "date", "time", "status")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class AppointmentResponse(BaseModel):
    id: uuid.UUID
    patient_id: uuid.UUID
    doctor_id: uuid.UUID
    consultation_type_id: uuid.UUID
    date: DateType
    time: str
    status: AppointmentStatus
    notes: Optional[str] = None
    patient: Optional[PatientSummary] = None
    doctor: Optional[UserSummary] = None
    consultation_type: Optional[ConsultationTypeSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AppointmentListResponse(BaseModel):
    items: List[AppointmentResponse]
    total: int
    page: int
    limit: int
    pages: int
