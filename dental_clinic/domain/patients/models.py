from sqlalchemy import Column, String, DateTime, Text, Uuid
from sqlalchemy.sql import func
from dental_clinic.infrastructure.database import Base
import uuid


class Patient(Base):
    """Patient record; di and nif are unique when present"""
    __tablename__ = "patients"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False, index=True)
    di = Column(String(50), unique=True, index=True)
    nif = Column(String(50), unique=True, index=True)
    phone = Column(String(30))
    email = Column(String(255))
    address = Column(Text)
    notes = Column(Text)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Patient(id={self.id}, name={self.name})>"
