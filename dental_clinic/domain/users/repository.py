"""
Users Repository Layer

Provides data access operations for staff accounts and user type configs.
"""

from typing import Optional, List
from datetime import datetime
import uuid

from dental_clinic.domain.users.models import User, UserType, UserTypeConfig


class UserRepository:
    """Repository for user data access operations"""

    def __init__(self, db):
        self.db = db

    def create(self, user_data: dict) -> User:
        """Create a new user"""
        user = User(**user_data)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(
            User.email == email.strip().lower()
        ).first()

    def get_all(self, user_type: Optional[UserType] = None) -> List[User]:
        """Get users, optionally restricted to one type"""
        query = self.db.query(User)
        if user_type:
            query = query.filter(User.user_type == user_type)
        return query.order_by(User.first_name, User.last_name).all()

    def get_active_doctors(self) -> List[User]:
        return self.db.query(User).filter(
            User.user_type == UserType.DOCTOR,
            User.is_active == True
        ).order_by(User.first_name, User.last_name).all()

    def count_admins(self) -> int:
        return self.db.query(User).filter(User.user_type == UserType.ADMIN).count()

    def update(self, user: User, update_data: dict) -> User:
        """Apply a partial update; explicit None values clear optional fields"""
        for key, value in update_data.items():
            if hasattr(user, key):
                setattr(user, key, value)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_last_login(self, user: User) -> None:
        user.last_login_at = datetime.utcnow()
        self.db.commit()


class UserTypeConfigRepository:
    """Repository for user type permission configs"""

    def __init__(self, db):
        self.db = db

    def create(self, config_data: dict) -> UserTypeConfig:
        config = UserTypeConfig(**config_data)
        self.db.add(config)
        self.db.commit()
        self.db.refresh(config)
        return config

    def get_by_id(self, config_id: uuid.UUID) -> Optional[UserTypeConfig]:
        return self.db.query(UserTypeConfig).filter(UserTypeConfig.id == config_id).first()

    def get_by_name(self, name: str) -> Optional[UserTypeConfig]:
        return self.db.query(UserTypeConfig).filter(UserTypeConfig.name == name).first()

    def get_active_for_type(self, user_type: UserType) -> Optional[UserTypeConfig]:
        """Active config that applies to users of the given type"""
        return self.db.query(UserTypeConfig).filter(
            UserTypeConfig.user_type == user_type,
            UserTypeConfig.is_active == True
        ).order_by(UserTypeConfig.created_at).first()

    def get_all(self) -> List[UserTypeConfig]:
        return self.db.query(UserTypeConfig).order_by(UserTypeConfig.name).all()

    def update(self, config: UserTypeConfig, update_data: dict) -> UserTypeConfig:
        for key, value in update_data.items():
            if hasattr(config, key) and value is not None:
                setattr(config, key, value)
        self.db.commit()
        self.db.refresh(config)
        return config
