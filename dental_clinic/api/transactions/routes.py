"""
Transactions API Routes
"""

from fastapi import APIRouter, Depends, Query, Response, status
from typing import Optional
from datetime import date, datetime, timedelta
import uuid
import math

from dental_clinic.infrastructure.database import get_db
from dental_clinic.core.permissions import require_permissions, Permissions
from dental_clinic.domain.finance.models import TransactionStatus
from dental_clinic.domain.finance.service import TransactionService
from dental_clinic.api.transactions.schemas import (
    TransactionCreate, TransactionUpdate, TransactionCancel,
    TransactionResponse, TransactionListResponse
)

router = APIRouter()


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    patient_id: Optional[uuid.UUID] = None,
    status_filter: Optional[TransactionStatus] = Query(None, alias="status"),
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.TRANSACTIONS_READ]))
):
    """List transactions; the date range is inclusive on both ends"""
    service = TransactionService(db)
    transactions, total = service.get_transactions(
        skip=(page - 1) * limit,
        limit=limit,
        patient_id=patient_id,
        status=status_filter,
        date_from=datetime.combine(date_from, datetime.min.time()) if date_from else None,
        date_to=datetime.combine(date_to + timedelta(days=1), datetime.min.time()) if date_to else None
    )

    return {
        "items": transactions,
        "total": total,
        "page": page,
        "limit": limit,
        "pages": math.ceil(total / limit) if total > 0 else 1
    }


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    transaction_data: TransactionCreate,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.TRANSACTIONS_WRITE]))
):
    return TransactionService(db).create_transaction(transaction_data.model_dump())


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: uuid.UUID,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.TRANSACTIONS_READ]))
):
    return TransactionService(db).get_transaction(transaction_id)


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: uuid.UUID,
    update_data: TransactionUpdate,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.TRANSACTIONS_WRITE]))
):
    """Partial update; marking as paid stamps the payment date"""
    return TransactionService(db).update_transaction(
        transaction_id, update_data.model_dump(exclude_unset=True)
    )


@router.patch("/{transaction_id}/cancel", response_model=TransactionResponse)
def cancel_transaction(
    transaction_id: uuid.UUID,
    cancel_data: TransactionCancel,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.TRANSACTIONS_WRITE]))
):
    """Cancel a paid transaction with a reason"""
    return TransactionService(db).cancel_transaction(transaction_id, cancel_data.cancellation_reason)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: uuid.UUID,
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.TRANSACTIONS_DELETE]))
):
    TransactionService(db).delete_transaction(transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
