from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime, date
import uuid

from dental_clinic.domain.procedures.models import ProcedureStatus
from dental_clinic.api.users.schemas import UserSummary
from dental_clinic.api.appointments.schemas import PatientSummary

DateType = date


class ProcedureTypeSummary(BaseModel):
    id: uuid.UUID
    name: str
    category: Optional[str] = None

    class Config:
        from_attributes = True


class ProcedureCreate(BaseModel):
    """Cost is not accepted; it is copied from the procedure type"""
    appointment_id: Optional[uuid.UUID] = None
    patient_id: uuid.UUID
    doctor_id: uuid.UUID
    procedure_type_id: uuid.UUID
    date: DateType
    status: ProcedureStatus = ProcedureStatus.IN_PROGRESS
    notes: Optional[str] = Field(None, max_length=2000)


class ProcedureUpdate(BaseModel):
    appointment_id: Optional[uuid.UUID] = None
    patient_id: Optional[uuid.UUID] = None
    doctor_id: Optional[uuid.UUID] = None
    procedure_type_id: Optional[uuid.UUID] = None
    date: Optional[DateType] = None
    status: Optional[ProcedureStatus] = None
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("patient_id", "doctor_id", "procedure_type_id", "date", "status")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class ProcedureResponse(BaseModel):
    id: uuid.UUID
    appointment_id: Optional[uuid.UUID] = None
    patient_id: uuid.UUID
    doctor_id: uuid.UUID
    procedure_type_id: uuid.UUID
    date: DateType
    cost: float
    status: ProcedureStatus
    notes: Optional[str] = None
    patient: Optional[PatientSummary] = None
    doctor: Optional[UserSummary] = None
    procedure_type: Optional[ProcedureTypeSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProcedureListResponse(BaseModel):
    items: List[ProcedureResponse]
    total: int
    page: int
    limit: int
    pages: int
