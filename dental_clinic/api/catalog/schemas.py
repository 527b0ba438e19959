"""
Catalog API Schemas

Pydantic models for consultation, procedure and transaction types.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
import uuid

from dental_clinic.domain.catalog.models import TransactionCategory


# ==================== Consultation Type Schemas ====================

class ConsultationTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    price: float = Field(..., gt=0)
    description: Optional[str] = None
    is_active: bool = True


class ConsultationTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    price: Optional[float] = Field(None, gt=0)
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "price", "is_active")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class ConsultationTypeResponse(BaseModel):
    id: uuid.UUID
    name: str
    price: float
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ==================== Procedure Type Schemas ====================

class ProcedureTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    price: float = Field(..., gt=0)
    category: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    specialty: Optional[str] = Field(None, max_length=100)
    is_active: bool = True


class ProcedureTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    price: Optional[float] = Field(None, gt=0)
    category: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    specialty: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None

    @field_validator("name", "price", "is_active")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class ProcedureTypeResponse(BaseModel):
    id: uuid.UUID
    name: str
    price: float
    category: Optional[str] = None
    description: Optional[str] = None
    specialty: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ==================== Transaction Type Schemas ====================

class TransactionTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    category: TransactionCategory
    description: Optional[str] = None
    is_active: bool = True


class TransactionTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    category: Optional[TransactionCategory] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "category", "is_active")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class TransactionTypeResponse(BaseModel):
    id: uuid.UUID
    name: str
    category: TransactionCategory
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
