"""
Appointments Domain Models

A booking of a patient with a doctor for a consultation type at a
half-hour slot ("HH:MM") on a local date.
"""

from sqlalchemy import Column, String, Date, DateTime, ForeignKey, Text, Enum, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from dental_clinic.infrastructure.database import Base
import uuid
import enum


class AppointmentStatus(str, enum.Enum):
    """Appointment status enumeration"""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    patient_id = Column(Uuid, ForeignKey("patients.id"), nullable=False, index=True)
    doctor_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    consultation_type_id = Column(Uuid, ForeignKey("consultation_types.id"), nullable=False)

    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)
    status = Column(Enum(AppointmentStatus), nullable=False, default=AppointmentStatus.SCHEDULED)
    notes = Column(Text)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    patient = relationship("Patient", foreign_keys=[patient_id])
    doctor = relationship("User", foreign_keys=[doctor_id])
    consultation_type = relationship("ConsultationType", foreign_keys=[consultation_type_id])

    def __repr__(self):
        return f"<Appointment(id={self.id}, date={self.date}, time={self.time}, status={self.status})>"
