"""
Users Domain Models

Staff accounts (admins, employees and doctors) and the per user-type
permission configuration.
"""

from sqlalchemy import Column, String, Boolean, DateTime, JSON, Enum, Text, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import validates
from dental_clinic.infrastructure.database import Base
import uuid
import enum


class UserType(str, enum.Enum):
    """Kinds of staff account"""
    ADMIN = "admin"
    EMPLOYEE = "employee"
    DOCTOR = "doctor"


WEEKDAYS = [
    "monday", "tuesday", "wednesday", "thursday",
    "friday", "saturday", "sunday",
]


class User(Base):
    """User model for authentication, authorization and doctor scheduling"""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(100))
    last_name = Column(String(100))
    profile_image_url = Column(String(500))
    user_type = Column(Enum(UserType), nullable=False, default=UserType.EMPLOYEE)
    specialties = Column(JSON, default=list)
    contact_info = Column(String(255))
    is_active = Column(Boolean, default=True, nullable=False)

    # Credentials
    password_hash = Column(String(255))
    must_change_password = Column(Boolean, default=False, nullable=False)
    password_reset_token = Column(Text)

    # Doctor scheduling
    working_days = Column(JSON, default=list)
    working_hours = Column(JSON)
    daily_schedules = Column(JSON)
    consultation_types = Column(JSON, default=list)
    procedure_types = Column(JSON, default=list)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
    last_login_at = Column(DateTime)

    @validates("email")
    def normalize_email(self, key, value):
        return value.strip().lower() if value else value

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def is_admin(self) -> bool:
        return self.user_type == UserType.ADMIN

    @property
    def is_doctor(self) -> bool:
        return self.user_type == UserType.DOCTOR

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, user_type={self.user_type})>"


class UserTypeConfig(Base):
    """Permission set granted to every user of a given type"""
    __tablename__ = "user_type_configs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), unique=True, nullable=False)
    user_type = Column(Enum(UserType), nullable=False, index=True)
    permissions = Column(JSON, default=dict, nullable=False)
    description = Column(Text)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def grants(self, permission: str) -> bool:
        return bool((self.permissions or {}).get(permission))
