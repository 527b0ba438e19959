"""
Users API Routes

Admin endpoints for staff accounts and user type permission configs.
"""

from fastapi import APIRouter, Depends, status
from typing import List, Optional
import uuid

from dental_clinic.infrastructure.database import get_db
from dental_clinic.core.permissions import require_permissions, Permissions
from dental_clinic.domain.users.models import UserType
from dental_clinic.domain.users.service import UserService, UserTypeConfigService
from dental_clinic.api.users.schemas import (
    UserCreate, UserUpdate, UserTypeUpdate, UserStatusUpdate, UserResponse,
    UserTypeConfigCreate, UserTypeConfigUpdate, UserTypeConfigResponse
)

router = APIRouter()
config_router = APIRouter()

admin_only = require_permissions([Permissions.ADMIN_ACCESS])


# ==================== User Endpoints ====================

@router.get("", response_model=List[UserResponse])
def list_users(
    user_type: Optional[UserType] = None,
    db = Depends(get_db),
    current_user = Depends(admin_only)
):
    """List staff accounts, optionally by type"""
    return UserService(db).list_users(user_type)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    db = Depends(get_db),
    current_user = Depends(admin_only)
):
    """Create a staff account"""
    return UserService(db).create_user(user_data.model_dump())


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: uuid.UUID,
    db = Depends(get_db),
    current_user = Depends(admin_only)
):
    return UserService(db).get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: uuid.UUID,
    update_data: UserUpdate,
    db = Depends(get_db),
    current_user = Depends(admin_only)
):
    """Update a staff account"""
    return UserService(db).update_user(user_id, update_data.model_dump(exclude_unset=True))


@router.put("/{user_id}/type", response_model=UserResponse)
def change_user_type(
    user_id: uuid.UUID,
    type_data: UserTypeUpdate,
    db = Depends(get_db),
    current_user = Depends(admin_only)
):
    """Change the account type (admin, employee, doctor)"""
    return UserService(db).change_user_type(user_id, type_data.user_type)


@router.patch("/{user_id}/status", response_model=UserResponse)
def update_user_status(
    user_id: uuid.UUID,
    status_data: UserStatusUpdate,
    db = Depends(get_db),
    current_user = Depends(admin_only)
):
    """Activate or deactivate an account"""
    return UserService(db).set_active(user_id, status_data.is_active)


@router.delete("/{user_id}", response_model=UserResponse)
def delete_user(
    user_id: uuid.UUID,
    db = Depends(get_db),
    current_user = Depends(admin_only)
):
    """Deactivate an account; its history stays attached"""
    return UserService(db).deactivate_user(user_id, current_user)


# ==================== User Type Config Endpoints ====================

@config_router.get("", response_model=List[UserTypeConfigResponse])
def list_user_type_configs(
    db = Depends(get_db),
    current_user = Depends(admin_only)
):
    return UserTypeConfigService(db).list_configs()


@config_router.post("", response_model=UserTypeConfigResponse, status_code=status.HTTP_201_CREATED)
def create_user_type_config(
    config_data: UserTypeConfigCreate,
    db = Depends(get_db),
    current_user = Depends(admin_only)
):
    return UserTypeConfigService(db).create_config(config_data.model_dump())


@config_router.get("/{config_id}", response_model=UserTypeConfigResponse)
def get_user_type_config(
    config_id: uuid.UUID,
    db = Depends(get_db),
    current_user = Depends(admin_only)
):
    return UserTypeConfigService(db).get_config(config_id)


@config_router.put("/{config_id}", response_model=UserTypeConfigResponse)
def update_user_type_config(
    config_id: uuid.UUID,
    update_data: UserTypeConfigUpdate,
    db = Depends(get_db),
    current_user = Depends(admin_only)
):
    return UserTypeConfigService(db).update_config(
        config_id, update_data.model_dump(exclude_unset=True)
    )


@config_router.delete("/{config_id}", response_model=UserTypeConfigResponse)
def delete_user_type_config(
    config_id: uuid.UUID,
    db = Depends(get_db),
    current_user = Depends(admin_only)
):
    """Deactivate a config; users of that type lose its permissions"""
    return UserTypeConfigService(db).deactivate_config(config_id)
