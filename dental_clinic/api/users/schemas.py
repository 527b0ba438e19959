"""
Users API Schemas

Pydantic models for staff accounts, doctor schedules and user type configs.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional, List, Dict
from datetime import datetime
import uuid

from dental_clinic.core.permissions import Permissions
from dental_clinic.domain.appointments.availability import is_valid_time
from dental_clinic.domain.users.models import UserType, WEEKDAYS


# ==================== Schedule Schemas ====================

class WorkingHours(BaseModel):
    """Opening and closing time as HH:MM"""
    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, v):
        if not is_valid_time(v):
            raise ValueError("Time must use the HH:MM format")
        return v

    @model_validator(mode="after")
    def validate_order(self):
        if self.start >= self.end:
            raise ValueError("End time must be after start time")
        return self


class DailySchedule(WorkingHours):
    is_active: bool = True


def validate_weekdays(days: Optional[List[str]]) -> Optional[List[str]]:
    if days is None:
        return days
    cleaned = [d.strip().lower() for d in days]
    invalid = [d for d in cleaned if d not in WEEKDAYS]
    if invalid:
        raise ValueError(f"Unknown weekday(s): {', '.join(invalid)}")
    return cleaned


class DoctorScheduleUpdate(BaseModel):
    """Schema for replacing a doctor's schedule"""
    working_days: Optional[List[str]] = None
    working_hours: Optional[WorkingHours] = None
    daily_schedules: Optional[Dict[str, DailySchedule]] = None
    consultation_types: Optional[List[uuid.UUID]] = None
    procedure_types: Optional[List[uuid.UUID]] = None

    @field_validator("working_days")
    @classmethod
    def check_working_days(cls, v):
        return validate_weekdays(v)

    @field_validator("daily_schedules")
    @classmethod
    def check_schedule_days(cls, v):
        if v is not None:
            validate_weekdays(list(v.keys()))
            return {day.strip().lower(): schedule for day, schedule in v.items()}
        return v


class DoctorSpecialtiesUpdate(BaseModel):
    specialties: List[str]


# ==================== User Schemas ====================

class UserBase(BaseModel):
    """Base schema for user data"""
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field("", max_length=100)
    user_type: UserType = UserType.EMPLOYEE
    contact_info: Optional[str] = Field(None, max_length=255)
    profile_image_url: Optional[str] = Field(None, max_length=500)
    specialties: List[str] = []


class UserCreate(UserBase):
    """Schema for creating a new user"""
    password: str = Field(..., min_length=6, max_length=128)


class UserUpdate(BaseModel):
    """Schema for updating user information"""
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    contact_info: Optional[str] = Field(None, max_length=255)
    profile_image_url: Optional[str] = Field(None, max_length=500)
    specialties: Optional[List[str]] = None
    password: Optional[str] = Field(None, min_length=6, max_length=128)


class UserTypeUpdate(BaseModel):
    user_type: UserType


class UserStatusUpdate(BaseModel):
    is_active: bool = Field(..., strict=True)


class UserResponse(BaseModel):
    """Schema for user response data"""
    id: uuid.UUID
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: str = ""
    user_type: UserType
    contact_info: Optional[str] = None
    profile_image_url: Optional[str] = None
    specialties: Optional[List[str]] = None
    is_active: bool
    must_change_password: bool
    working_days: Optional[List[str]] = None
    working_hours: Optional[Dict[str, str]] = None
    daily_schedules: Optional[Dict[str, dict]] = None
    consultation_types: Optional[List[str]] = None
    procedure_types: Optional[List[str]] = None
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    """Compact user embedded in other responses"""
    id: uuid.UUID
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: str = ""

    class Config:
        from_attributes = True


# ==================== User Type Config Schemas ====================

def validate_permission_keys(permissions: Optional[Dict[str, bool]]) -> Optional[Dict[str, bool]]:
    if permissions is None:
        return permissions
    unknown = sorted(set(permissions) - set(Permissions.all()))
    if unknown:
        raise ValueError(f"Unknown permission(s): {', '.join(unknown)}")
    return permissions


class UserTypeConfigBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    user_type: UserType
    permissions: Dict[str, bool] = {}
    description: Optional[str] = None
    is_active: bool = True

    @field_validator("permissions")
    @classmethod
    def check_permissions(cls, v):
        return validate_permission_keys(v)


class UserTypeConfigCreate(UserTypeConfigBase):
    pass


class UserTypeConfigUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    user_type: Optional[UserType] = None
    permissions: Optional[Dict[str, bool]] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("permissions")
    @classmethod
    def check_permissions(cls, v):
        return validate_permission_keys(v)


class UserTypeConfigResponse(UserTypeConfigBase):
    id: uuid.UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
