"""
Users Service Layer

Business logic for staff account management, doctor schedules and the
user type permission configs.
"""

from typing import Optional, List, Dict, Any
import uuid
from loguru import logger

from dental_clinic.core.exceptions import ConflictError, NotFoundError, ValidationError
from dental_clinic.core.security import get_password_hash
from dental_clinic.domain.users.models import User, UserType, UserTypeConfig
from dental_clinic.domain.users.repository import UserRepository, UserTypeConfigRepository


def split_full_name(name: str) -> tuple:
    """Split "First Middle Last" into ("First", "Middle Last")"""
    parts = name.strip().split(" ", 1)
    return parts[0], (parts[1].strip() if len(parts) > 1 else "")


class UserService:
    """Service layer for staff account management"""

    def __init__(self, db):
        self.db = db
        self.user_repo = UserRepository(db)

    def get_user(self, user_id: uuid.UUID) -> User:
        user = self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_users(self, user_type: Optional[UserType] = None) -> List[User]:
        return self.user_repo.get_all(user_type)

    def create_user(
        self,
        user_data: Dict[str, Any],
        must_change_password: bool = False
    ) -> User:
        """Create a staff account with a hashed password"""
        email = user_data["email"].strip().lower()
        if self.user_repo.get_by_email(email):
            raise ConflictError("User with this email already exists")

        data = dict(user_data)
        password = data.pop("password", None)
        data["email"] = email
        data["password_hash"] = get_password_hash(password) if password else None
        data["must_change_password"] = must_change_password

        user = self.user_repo.create(data)
        logger.info(f"Created {user.user_type.value} account {user.email}")
        return user

    def update_user(self, user_id: uuid.UUID, update_data: Dict[str, Any]) -> User:
        user = self.get_user(user_id)

        if "email" in update_data and update_data["email"]:
            email = update_data["email"].strip().lower()
            existing = self.user_repo.get_by_email(email)
            if existing and existing.id != user.id:
                raise ConflictError("User with this email already exists")
            update_data["email"] = email

        password = update_data.pop("password", None)
        if password:
            update_data["password_hash"] = get_password_hash(password)

        return self.user_repo.update(user, update_data)

    def change_user_type(self, user_id: uuid.UUID, user_type: UserType) -> User:
        user = self.get_user(user_id)
        logger.info(f"Changing user {user.email} type to {user_type.value}")
        return self.user_repo.update(user, {"user_type": user_type})

    def set_active(self, user_id: uuid.UUID, is_active: bool) -> User:
        user = self.get_user(user_id)
        return self.user_repo.update(user, {"is_active": is_active})

    def deactivate_user(self, user_id: uuid.UUID, acting_user: User) -> User:
        """Soft delete; appointments and procedures keep pointing at the user"""
        if user_id == acting_user.id:
            raise ValidationError("You cannot deactivate your own account")
        user = self.get_user(user_id)
        logger.info(f"Deactivating user {user.email}")
        return self.user_repo.update(user, {"is_active": False})


class DoctorService:
    """Service layer for doctor listings and schedules"""

    def __init__(self, db):
        self.db = db
        self.user_repo = UserRepository(db)

    def list_doctors(self) -> List[User]:
        return self.user_repo.get_active_doctors()

    def get_doctor(self, doctor_id: uuid.UUID) -> User:
        doctor = self.user_repo.get_by_id(doctor_id)
        if not doctor or not doctor.is_doctor:
            raise NotFoundError("Doctor not found")
        return doctor

    def update_schedule(self, doctor_id: uuid.UUID, schedule: Dict[str, Any]) -> User:
        """Replace working days/hours, per-day overrides and offered types"""
        doctor = self.get_doctor(doctor_id)
        return self.user_repo.update(doctor, schedule)

    def update_specialties(self, doctor_id: uuid.UUID, specialties: List[str]) -> User:
        doctor = self.get_doctor(doctor_id)
        cleaned = [s.strip() for s in specialties if s and s.strip()]
        return self.user_repo.update(doctor, {"specialties": cleaned})


class UserTypeConfigService:
    """Service layer for user type permission configs"""

    def __init__(self, db):
        self.db = db
        self.config_repo = UserTypeConfigRepository(db)

    def list_configs(self) -> List[UserTypeConfig]:
        return self.config_repo.get_all()

    def get_config(self, config_id: uuid.UUID) -> UserTypeConfig:
        config = self.config_repo.get_by_id(config_id)
        if not config:
            raise NotFoundError("User type config not found")
        return config

    def create_config(self, config_data: Dict[str, Any]) -> UserTypeConfig:
        if self.config_repo.get_by_name(config_data["name"]):
            raise ConflictError("A user type config with this name already exists")
        return self.config_repo.create(config_data)

    def update_config(self, config_id: uuid.UUID, update_data: Dict[str, Any]) -> UserTypeConfig:
        config = self.get_config(config_id)
        name = update_data.get("name")
        if name and name != config.name and self.config_repo.get_by_name(name):
            raise ConflictError("A user type config with this name already exists")
        return self.config_repo.update(config, update_data)

    def deactivate_config(self, config_id: uuid.UUID) -> UserTypeConfig:
        config = self.get_config(config_id)
        return self.config_repo.update(config, {"is_active": False})
