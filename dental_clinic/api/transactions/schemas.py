"""
Transactions API Schemas
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
import uuid

from dental_clinic.domain.finance.models import TransactionStatus
from dental_clinic.api.appointments.schemas import PatientSummary
from dental_clinic.api.catalog.schemas import TransactionTypeResponse


class TransactionCreate(BaseModel):
    patient_id: Optional[uuid.UUID] = None
    appointment_id: Optional[uuid.UUID] = None
    procedure_id: Optional[uuid.UUID] = None
    transaction_type_id: uuid.UUID
    amount: float = Field(..., ge=0)
    status: TransactionStatus = TransactionStatus.PENDING
    description: Optional[str] = Field(None, max_length=1000)
    transaction_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    paid_date: Optional[datetime] = None


class TransactionUpdate(BaseModel):
    patient_id: Optional[uuid.UUID] = None
    appointment_id: Optional[uuid.UUID] = None
    procedure_id: Optional[uuid.UUID] = None
    transaction_type_id: Optional[uuid.UUID] = None
    amount: Optional[float] = Field(None, ge=0)
    status: Optional[TransactionStatus] = None
    description: Optional[str] = Field(None, max_length=1000)
    transaction_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    paid_date: Optional[datetime] = None

    @field_validator("transaction_type_id", "amount", "status", "transaction_date")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class TransactionCancel(BaseModel):
    cancellation_reason: str = Field(..., max_length=1000)

    @field_validator("cancellation_reason")
    @classmethod
    def reason_required(cls, v):
        if not v.strip():
            raise ValueError("Cancellation reason is required")
        return v


class TransactionResponse(BaseModel):
    id: uuid.UUID
    patient_id: Optional[uuid.UUID] = None
    appointment_id: Optional[uuid.UUID] = None
    procedure_id: Optional[uuid.UUID] = None
    transaction_type_id: uuid.UUID
    amount: float
    status: TransactionStatus
    description: Optional[str] = None
    transaction_date: datetime
    due_date: Optional[datetime] = None
    paid_date: Optional[datetime] = None
    cancelled_date: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    patient: Optional[PatientSummary] = None
    transaction_type: Optional[TransactionTypeResponse] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TransactionListResponse(BaseModel):
    items: List[TransactionResponse]
    total: int
    page: int
    limit: int
    pages: int
