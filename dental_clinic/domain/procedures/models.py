from sqlalchemy import Column, Date, DateTime, ForeignKey, Text, Numeric, Enum, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from dental_clinic.infrastructure.database import Base
import uuid
import enum


class ProcedureStatus(str, enum.Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Procedure(Base):
    """Clinical procedure performed on a patient, priced from its type"""
    __tablename__ = "procedures"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    appointment_id = Column(Uuid, ForeignKey("appointments.id"), index=True)
    patient_id = Column(Uuid, ForeignKey("patients.id"), nullable=False, index=True)
    doctor_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    procedure_type_id = Column(Uuid, ForeignKey("procedure_types.id"), nullable=False)

    date = Column(Date, nullable=False)
    cost = Column(Numeric(10, 2), nullable=False)
    status = Column(Enum(ProcedureStatus), nullable=False, default=ProcedureStatus.IN_PROGRESS)
    notes = Column(Text)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    appointment = relationship("Appointment", foreign_keys=[appointment_id])
    patient = relationship("Patient", foreign_keys=[patient_id])
    doctor = relationship("User", foreign_keys=[doctor_id])
    procedure_type = relationship("ProcedureType", foreign_keys=[procedure_type_id])
