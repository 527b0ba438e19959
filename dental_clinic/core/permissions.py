from typing import List
from fastapi import Request, Depends
import uuid

from dental_clinic.core.security import verify_token
from dental_clinic.core.exceptions import AuthenticationError, AuthorizationError
from dental_clinic.infrastructure.database import get_db
from dental_clinic.domain.users.models import User
from dental_clinic.domain.users.repository import UserRepository, UserTypeConfigRepository


class Permissions:
    """Permission constants for the dental clinic"""

    ADMIN_ACCESS = "admin.access"

    # User management
    USERS_READ = "users.read"
    USERS_WRITE = "users.write"
    USERS_DELETE = "users.delete"

    # Patient management
    PATIENTS_READ = "patients.read"
    PATIENTS_WRITE = "patients.write"
    PATIENTS_DELETE = "patients.delete"

    # Appointments
    APPOINTMENTS_READ = "appointments.read"
    APPOINTMENTS_WRITE = "appointments.write"
    APPOINTMENTS_DELETE = "appointments.delete"

    # Procedures
    PROCEDURES_READ = "procedures.read"
    PROCEDURES_WRITE = "procedures.write"
    PROCEDURES_DELETE = "procedures.delete"

    # Finance
    TRANSACTIONS_READ = "transactions.read"
    TRANSACTIONS_WRITE = "transactions.write"
    TRANSACTIONS_DELETE = "transactions.delete"

    # Reporting and settings
    REPORTS_READ = "reports.read"
    SETTINGS_READ = "settings.read"
    SETTINGS_WRITE = "settings.write"

    @classmethod
    def all(cls) -> List[str]:
        return [
            value for key, value in vars(cls).items()
            if key.isupper() and isinstance(value, str)
        ]


def get_current_user(request: Request, db=Depends(get_db)) -> User:
    """Resolve the bearer token to an active user"""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise AuthenticationError("Authentication required")

    token = auth_header.split(" ", 1)[1]
    payload = verify_token(token, "access")

    if not payload:
        raise AuthenticationError("Invalid or expired token")

    try:
        user_id = uuid.UUID(payload.get("sub", ""))
    except ValueError:
        raise AuthenticationError("Invalid or expired token")

    user = UserRepository(db).get_by_id(user_id)
    if not user:
        raise AuthenticationError("User not found")
    if not user.is_active:
        raise AuthorizationError("Account is not active", error_code="ACCOUNT_INACTIVE")

    request.state.user = user
    return user


def user_has_permission(db, user: User, permission: str) -> bool:
    """Admins hold every permission; others get what their type config grants"""
    if user.is_admin:
        return True

    config = UserTypeConfigRepository(db).get_active_for_type(user.user_type)
    if not config:
        return False
    return config.grants(permission)


def require_password_changed(current_user: User = Depends(get_current_user)) -> User:
    """Block users who still have to replace a temporary password"""
    if current_user.must_change_password:
        raise AuthorizationError(
            "Password change required before accessing this resource",
            error_code="PASSWORD_CHANGE_REQUIRED"
        )
    return current_user


def require_permissions(required_permissions: List[str]):
    """Dependency function to check permissions"""
    def permission_checker(
        current_user: User = Depends(require_password_changed),
        db=Depends(get_db)
    ) -> User:
        # Check if user has any of the required permissions
        has_access = any(
            user_has_permission(db, current_user, perm)
            for perm in required_permissions
        )

        if not has_access:
            raise AuthorizationError(
                "Insufficient permissions",
                details={"required_permissions": required_permissions}
            )

        return current_user

    return permission_checker


def require_admin(current_user: User = Depends(require_password_changed)) -> User:
    """Restrict an endpoint to admin accounts"""
    if not current_user.is_admin:
        raise AuthorizationError("Administrator access required")
    return current_user
