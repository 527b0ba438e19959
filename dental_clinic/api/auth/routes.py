"""
Auth API Routes

Login, registration and the password lifecycle. These endpoints stay
reachable while an account still has to change its temporary password.
"""

from fastapi import APIRouter, Depends, status

from dental_clinic.infrastructure.database import get_db
from dental_clinic.core.permissions import get_current_user, require_admin
from dental_clinic.domain.auth.service import AuthenticationService
from dental_clinic.api.users.schemas import UserResponse
from dental_clinic.api.auth.schemas import (
    LoginRequest, LoginResponse, RegisterRequest, PasswordChangeRequest,
    ForgotPasswordRequest, ResetPasswordRequest,
    MustChangePasswordResponse, MessageResponse
)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    login_data: LoginRequest,
    db = Depends(get_db)
):
    """Authenticate with email and password"""
    service = AuthenticationService(db)
    return service.authenticate_user(login_data.email, login_data.password)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    registration: RegisterRequest,
    db = Depends(get_db),
    current_user = Depends(require_admin)
):
    """Create an account that must change its password on first login"""
    service = AuthenticationService(db)
    return service.register_user(registration.model_dump())


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    password_data: PasswordChangeRequest,
    db = Depends(get_db),
    current_user = Depends(get_current_user)
):
    service = AuthenticationService(db)
    service.change_password(current_user, password_data.current_password, password_data.new_password)
    return {"message": "Password changed successfully"}


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    request_data: ForgotPasswordRequest,
    db = Depends(get_db)
):
    """Send a reset link; the answer is the same whether or not the email exists"""
    service = AuthenticationService(db)
    return {"message": service.request_password_reset(request_data.email)}


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    reset_data: ResetPasswordRequest,
    db = Depends(get_db)
):
    service = AuthenticationService(db)
    service.reset_password(reset_data.token, reset_data.new_password)
    return {"message": "Password reset successfully"}


@router.get("/must-change-password", response_model=MustChangePasswordResponse)
def must_change_password(current_user = Depends(get_current_user)):
    return {"must_change_password": current_user.must_change_password}


@router.get("/user", response_model=UserResponse)
def get_me(current_user = Depends(get_current_user)):
    """Get current user information"""
    return current_user


@router.post("/logout", response_model=MessageResponse)
def logout(current_user = Depends(get_current_user)):
    """Tokens are stateless; the client drops its copy"""
    return {"message": "Logged out successfully"}
