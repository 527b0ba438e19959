"""
Authentication Service Layer

Login, admin-driven registration and the password lifecycle: forced
change after a temporary password and the single-use reset token flow.
"""

from typing import Dict, Any
import uuid
from loguru import logger

from dental_clinic.core.exceptions import (
    AuthenticationError, AuthorizationError, ValidationError
)
from dental_clinic.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    create_password_reset_token,
    verify_token,
    PASSWORD_RESET_TOKEN,
)
from dental_clinic.core.config import settings
from dental_clinic.domain.users.models import User
from dental_clinic.domain.users.repository import UserRepository
from dental_clinic.domain.users.service import UserService, split_full_name
from dental_clinic.infrastructure.notifications import send_password_reset_email

FORGOT_PASSWORD_MESSAGE = "If the email exists, a reset link has been sent"


class AuthenticationService:
    """Service layer for authentication operations"""

    def __init__(self, db):
        self.db = db
        self.user_repo = UserRepository(db)

    def authenticate_user(self, email: str, password: str) -> Dict[str, Any]:
        """Check credentials and issue an access token"""
        user = self.user_repo.get_by_email(email)

        if not user or not user.password_hash:
            logger.warning(f"Failed login for {email}: unknown user or no password set")
            raise AuthenticationError("Invalid credentials")

        if not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for {email}: wrong password")
            raise AuthenticationError("Invalid credentials")

        if not user.is_active:
            raise AuthorizationError("Account is not active", error_code="ACCOUNT_INACTIVE")

        self.user_repo.update_last_login(user)

        access_token = create_access_token(str(user.id), {
            "email": user.email,
            "user_type": user.user_type.value,
        })
        logger.info(f"User {user.email} logged in")

        return {
            "access_token": access_token,
            "token_type": "bearer",
            "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "must_change_password": user.must_change_password,
            "user": user,
        }

    def register_user(self, registration: Dict[str, Any]) -> User:
        """Admin creates an account whose password must be changed on first login"""
        first_name, last_name = split_full_name(registration["name"])
        user_data = {
            "email": registration["email"],
            "password": registration["password"],
            "first_name": first_name,
            "last_name": last_name,
            "contact_info": registration.get("phone"),
            "user_type": registration["user_type"],
        }
        return UserService(self.db).create_user(user_data, must_change_password=True)

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        if not verify_password(current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect")
        if current_password == new_password:
            raise ValidationError("New password must be different from the current password")

        self.user_repo.update(user, {
            "password_hash": get_password_hash(new_password),
            "must_change_password": False,
        })
        logger.info(f"User {user.email} changed password")

    def request_password_reset(self, email: str) -> str:
        """Issue a reset token for known accounts; the reply never reveals which"""
        user = self.user_repo.get_by_email(email)
        if not user or not user.is_active:
            logger.info(f"Password reset requested for unknown or inactive account {email}")
            return FORGOT_PASSWORD_MESSAGE

        token = create_password_reset_token(str(user.id), user.email)
        # Only the latest token is honoured
        self.user_repo.update(user, {"password_reset_token": token})
        send_password_reset_email(user.email, token)
        logger.info(f"Password reset token issued for {user.email}")
        return FORGOT_PASSWORD_MESSAGE

    def reset_password(self, token: str, new_password: str) -> None:
        payload = verify_token(token, PASSWORD_RESET_TOKEN)
        if not payload:
            raise ValidationError("Invalid or expired reset token", error_code="INVALID_RESET_TOKEN")

        try:
            user_id = uuid.UUID(payload.get("sub", ""))
        except ValueError:
            raise ValidationError("Invalid or expired reset token", error_code="INVALID_RESET_TOKEN")

        user = self.user_repo.get_by_id(user_id)
        if not user or user.password_reset_token != token:
            raise ValidationError("Invalid or expired reset token", error_code="INVALID_RESET_TOKEN")

        self.user_repo.update(user, {
            "password_hash": get_password_hash(new_password),
            "password_reset_token": None,
            "must_change_password": False,
        })
        logger.info(f"Password reset completed for {user.email}")
