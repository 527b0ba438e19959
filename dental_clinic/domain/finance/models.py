"""
Finance Domain Models

Billing records. A transaction may point at a patient, an appointment
and/or a procedure; its type decides whether it is income or expense.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Text, Numeric, Enum, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from dental_clinic.infrastructure.database import Base
import uuid
import enum


class TransactionStatus(str, enum.Enum):
    """Transaction status enumeration"""
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    patient_id = Column(Uuid, ForeignKey("patients.id"), index=True)
    appointment_id = Column(Uuid, ForeignKey("appointments.id"), index=True)
    procedure_id = Column(Uuid, ForeignKey("procedures.id"), index=True)
    transaction_type_id = Column(Uuid, ForeignKey("transaction_types.id"), nullable=False)

    amount = Column(Numeric(10, 2), nullable=False)
    status = Column(Enum(TransactionStatus), nullable=False, default=TransactionStatus.PENDING)
    description = Column(Text)

    transaction_date = Column(DateTime, nullable=False, default=func.now())
    due_date = Column(DateTime)
    paid_date = Column(DateTime)
    cancelled_date = Column(DateTime)
    cancellation_reason = Column(Text)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    patient = relationship("Patient", foreign_keys=[patient_id])
    appointment = relationship("Appointment", foreign_keys=[appointment_id])
    procedure = relationship("Procedure", foreign_keys=[procedure_id])
    transaction_type = relationship("TransactionType", foreign_keys=[transaction_type_id])

    def __repr__(self):
        return f"<Transaction(id={self.id}, amount={self.amount}, status={self.status})>"
