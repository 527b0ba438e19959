from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from dental_clinic.domain.users.models import UserType
from dental_clinic.api.users.schemas import UserResponse


class LoginRequest(BaseModel):
    """Schema for login request"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Schema for login response"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    must_change_password: bool
    user: UserResponse


class RegisterRequest(BaseModel):
    """Schema for admin-driven account registration"""
    name: str = Field(..., min_length=2, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    phone: Optional[str] = Field(None, max_length=30)
    user_type: UserType = UserType.EMPLOYEE


class PasswordChangeRequest(BaseModel):
    """Schema for password change request"""
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)


class MustChangePasswordResponse(BaseModel):
    must_change_password: bool


class MessageResponse(BaseModel):
    message: str
