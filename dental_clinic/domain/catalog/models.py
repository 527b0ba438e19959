"""
Catalog Domain Models

Billable consultation and procedure types, and the income/expense
categories used to classify transactions.
"""

from sqlalchemy import Column, String, Boolean, DateTime, Text, Numeric, Enum, Uuid
from sqlalchemy.sql import func
from dental_clinic.infrastructure.database import Base
import uuid
import enum


class TransactionCategory(str, enum.Enum):
    """Direction of money for a transaction type"""
    INCOME = "income"
    EXPENSE = "expense"


class ConsultationType(Base):
    __tablename__ = "consultation_types"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(150), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())


class ProcedureType(Base):
    __tablename__ = "procedure_types"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(150), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100))
    description = Column(Text)
    specialty = Column(String(100))
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())


class TransactionType(Base):
    __tablename__ = "transaction_types"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(150), nullable=False)
    category = Column(Enum(TransactionCategory), nullable=False)
    description = Column(Text)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
