"""
Patients API Routes
"""

from fastapi import APIRouter, Depends, Response, status
from typing import List, Optional
import uuid

from dental_clinic.infrastructure.database import get_db
from dental_clinic.core.permissions import require_permissions, Permissions
from dental_clinic.domain.patients.service import PatientService
from dental_clinic.api.patients.schemas import (
    PatientCreate, PatientUpdate, PatientResponse, PatientHistoryResponse
)

router = APIRouter()


@router.get("", response_model=List[PatientResponse])
def list_patients(
    search: Optional[str] = None,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.PATIENTS_READ]))
):
    """List patients, optionally filtered by name, DI, email or phone"""
    return PatientService(db).list_patients(search)


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
def create_patient(
    patient_data: PatientCreate,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.PATIENTS_WRITE]))
):
    return PatientService(db).create_patient(patient_data.model_dump())


@router.get("/{patient_id}", response_model=PatientResponse)
def get_patient(
    patient_id: uuid.UUID,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.PATIENTS_READ]))
):
    return PatientService(db).get_patient(patient_id)


@router.get("/{patient_id}/history", response_model=PatientHistoryResponse)
def get_patient_history(
    patient_id: uuid.UUID,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.PATIENTS_READ]))
):
    """Appointments, procedures and transactions of a patient"""
    return PatientService(db).get_history(patient_id)


@router.put("/{patient_id}", response_model=PatientResponse)
def update_patient(
    patient_id: uuid.UUID,
    update_data: PatientUpdate,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.PATIENTS_WRITE]))
):
    return PatientService(db).update_patient(patient_id, update_data.model_dump(exclude_unset=True))


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_patient(
    patient_id: uuid.UUID,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.PATIENTS_DELETE]))
):
    PatientService(db).delete_patient(patient_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
