"""
Catalog API Routes

The three type catalogues expose the same endpoints, so one router is
built per catalogue from its service and schemas.
"""

from fastapi import APIRouter, Depends, status
from typing import List, Type
from pydantic import BaseModel
import uuid

from dental_clinic.infrastructure.database import get_db
from dental_clinic.core.permissions import require_password_changed, require_admin
from dental_clinic.domain.catalog.service import (
    CatalogService, ConsultationTypeService, ProcedureTypeService, TransactionTypeService
)
from dental_clinic.api.catalog.schemas import (
    ConsultationTypeCreate, ConsultationTypeUpdate, ConsultationTypeResponse,
    ProcedureTypeCreate, ProcedureTypeUpdate, ProcedureTypeResponse,
    TransactionTypeCreate, TransactionTypeUpdate, TransactionTypeResponse
)


def build_catalog_router(
    service_class: Type[CatalogService],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    response_schema: Type[BaseModel],
) -> APIRouter:
    router = APIRouter()

    @router.get("", response_model=List[response_schema])
    def list_items(
        db = Depends(get_db),
        current_user = Depends(require_password_changed)
    ):
        """List active entries ordered by name"""
        return service_class(db).list_active()

    @router.post("", response_model=response_schema, status_code=status.HTTP_201_CREATED)
    def create_item(
        item_data: create_schema,
        db = Depends(get_db),
        current_user = Depends(require_admin)
    ):
        return service_class(db).create(item_data.model_dump())

    @router.get("/{item_id}", response_model=response_schema)
    def get_item(
        item_id: uuid.UUID,
        db = Depends(get_db),
        current_user = Depends(require_password_changed)
    ):
        return service_class(db).get(item_id)

    @router.put("/{item_id}", response_model=response_schema)
    def update_item(
        item_id: uuid.UUID,
        update_data: update_schema,
        db = Depends(get_db),
        current_user = Depends(require_admin)
    ):
        return service_class(db).update(item_id, update_data.model_dump(exclude_unset=True))

    @router.delete("/{item_id}", response_model=response_schema)
    def delete_item(
        item_id: uuid.UUID,
        db = Depends(get_db),
        current_user = Depends(require_admin)
    ):
        """Soft delete; existing records keep their reference"""
        return service_class(db).deactivate(item_id)

    return router


consultation_types_router = build_catalog_router(
    ConsultationTypeService, ConsultationTypeCreate, ConsultationTypeUpdate, ConsultationTypeResponse
)
procedure_types_router = build_catalog_router(
    ProcedureTypeService, ProcedureTypeCreate, ProcedureTypeUpdate, ProcedureTypeResponse
)
transaction_types_router = build_catalog_router(
    TransactionTypeService, TransactionTypeCreate, TransactionTypeUpdate, TransactionTypeResponse
)
