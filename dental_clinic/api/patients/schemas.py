from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
import uuid

from dental_clinic.api.appointments.schemas import AppointmentResponse
from dental_clinic.api.procedures.schemas import ProcedureResponse
from dental_clinic.api.transactions.schemas import TransactionResponse


class PatientBase(BaseModel):
    """Base schema for patient data"""
    name: str = Field(..., min_length=1, max_length=200)
    di: Optional[str] = Field(None, max_length=50)
    nif: Optional[str] = Field(None, max_length=50)
    phone: Optional[str] = Field(None, max_length=30)
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    notes: Optional[str] = None


class PatientCreate(PatientBase):
    pass


class PatientUpdate(BaseModel):
    """Schema for updating patient information"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    di: Optional[str] = Field(None, max_length=50)
    nif: Optional[str] = Field(None, max_length=50)
    phone: Optional[str] = Field(None, max_length=30)
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v):
        if v is None:
            raise ValueError("Name cannot be empty")
        return v


class PatientResponse(BaseModel):
    id: uuid.UUID
    name: str
    di: Optional[str] = None
    nif: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PatientHistoryResponse(BaseModel):
    """Patient with their clinical and billing history"""
    patient: PatientResponse
    appointments: List[AppointmentResponse]
    procedures: List[ProcedureResponse]
    transactions: List[TransactionResponse]
