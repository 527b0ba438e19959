"""
Procedures API Routes
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional
import uuid
import math

from dental_clinic.infrastructure.database import get_db
from dental_clinic.core.permissions import require_permissions, Permissions
from dental_clinic.domain.procedures.models import ProcedureStatus
from dental_clinic.domain.procedures.service import ProcedureService
from dental_clinic.api.procedures.schemas import (
    ProcedureCreate, ProcedureUpdate, ProcedureResponse, ProcedureListResponse
)

router = APIRouter()


@router.get("", response_model=ProcedureListResponse)
def list_procedures(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    patient_id: Optional[uuid.UUID] = None,
    doctor_id: Optional[uuid.UUID] = None,
    appointment_id: Optional[uuid.UUID] = None,
    procedure_type_id: Optional[uuid.UUID] = None,
    status_filter: Optional[ProcedureStatus] = Query(None, alias="status"),
    search: Optional[str] = None,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.PROCEDURES_READ]))
):
    """List procedures with filtering and pagination"""
    service = ProcedureService(db)
    procedures, total = service.get_procedures(
        skip=(page - 1) * limit,
        limit=limit,
        patient_id=patient_id,
        doctor_id=doctor_id,
        appointment_id=appointment_id,
        procedure_type_id=procedure_type_id,
        status=status_filter,
        search=search
    )

    return {
        "items": procedures,
        "total": total,
        "page": page,
        "limit": limit,
        "pages": math.ceil(total / limit) if total > 0 else 1
    }


@router.post("", response_model=ProcedureResponse, status_code=status.HTTP_201_CREATED)
def create_procedure(
    procedure_data: ProcedureCreate,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.PROCEDURES_WRITE]))
):
    """Log a procedure priced from its type"""
    return ProcedureService(db).create_procedure(procedure_data.model_dump())


@router.get("/{procedure_id}", response_model=ProcedureResponse)
def get_procedure(
    procedure_id: uuid.UUID,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.PROCEDURES_READ]))
):
    return ProcedureService(db).get_procedure(procedure_id)


@router.put("/{procedure_id}", response_model=ProcedureResponse)
def update_procedure(
    procedure_id: uuid.UUID,
    update_data: ProcedureUpdate,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.PROCEDURES_WRITE]))
):
    """Partial update; a new procedure type re-prices the procedure"""
    return ProcedureService(db).update_procedure(
        procedure_id, update_data.model_dump(exclude_unset=True)
    )
