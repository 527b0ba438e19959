"""
Finance Service Layer

Business logic for transactions: manual billing entries, the automatic
consultation charge raised when an appointment is completed, payment
stamping and cancellation of paid entries.
"""

from typing import Optional, List, Dict, Any, Tuple
from datetime import datetime
import uuid
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from dental_clinic.core.config import settings
from dental_clinic.core.exceptions import (
    BusinessLogicError, NotFoundError, ValidationError, handle_database_error
)
from dental_clinic.domain.appointments.models import Appointment
from dental_clinic.domain.appointments.repository import AppointmentRepository
from dental_clinic.domain.catalog.service import TransactionTypeService
from dental_clinic.domain.finance.models import Transaction, TransactionStatus
from dental_clinic.domain.finance.repository import TransactionRepository
from dental_clinic.domain.patients.repository import PatientRepository
from dental_clinic.domain.procedures.repository import ProcedureRepository


class TransactionService:
    """Service layer for financial transactions"""

    def __init__(self, db):
        self.db = db
        self.transaction_repo = TransactionRepository(db)
        self.type_service = TransactionTypeService(db)

    def _check_references(self, data: Dict[str, Any]) -> None:
        if data.get("transaction_type_id"):
            self.type_service.get_active(data["transaction_type_id"])
        if data.get("patient_id"):
            if not PatientRepository(self.db).get_by_id(data["patient_id"]):
                raise NotFoundError("Patient not found")
        if data.get("appointment_id"):
            if not AppointmentRepository(self.db).get_by_id(data["appointment_id"]):
                raise NotFoundError("Appointment not found")
        if data.get("procedure_id"):
            if not ProcedureRepository(self.db).get_by_id(data["procedure_id"]):
                raise NotFoundError("Procedure not found")

    def get_transactions(
        self,
        skip: int = 0,
        limit: int = 10,
        patient_id: Optional[uuid.UUID] = None,
        status: Optional[TransactionStatus] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None
    ) -> Tuple[List[Transaction], int]:
        return self.transaction_repo.get_all(
            skip=skip,
            limit=limit,
            patient_id=patient_id,
            status=status,
            date_from=date_from,
            date_to=date_to
        )

    def get_transaction(self, transaction_id: uuid.UUID) -> Transaction:
        transaction = self.transaction_repo.get_by_id(transaction_id)
        if not transaction:
            raise NotFoundError("Transaction not found")
        return transaction

    def create_transaction(self, transaction_data: Dict[str, Any]) -> Transaction:
        data = {k: v for k, v in transaction_data.items() if v is not None}
        self._check_references(data)

        status = data.get("status", TransactionStatus.PENDING)
        if status == TransactionStatus.CANCELLED:
            raise ValidationError("A transaction cannot be created already cancelled")
        if status == TransactionStatus.PAID and not data.get("paid_date"):
            data["paid_date"] = datetime.utcnow()

        transaction = self.transaction_repo.create(data)
        logger.info(f"Created transaction {transaction.id} ({transaction.amount}, {transaction.status.value})")
        return transaction

    def update_transaction(self, transaction_id: uuid.UUID, update_data: Dict[str, Any]) -> Transaction:
        transaction = self.get_transaction(transaction_id)
        self._check_references(update_data)

        status = update_data.get("status")
        if status is not None and transaction.status == TransactionStatus.CANCELLED:
            raise BusinessLogicError(
                "A cancelled transaction cannot change status",
                error_code="TRANSACTION_CANCELLED"
            )
        if status == TransactionStatus.CANCELLED:
            raise ValidationError("Use the cancel action to cancel a transaction")
        if status == TransactionStatus.PAID and not update_data.get("paid_date"):
            update_data["paid_date"] = transaction.paid_date or datetime.utcnow()

        return self.transaction_repo.update(transaction, update_data)

    def delete_transaction(self, transaction_id: uuid.UUID) -> None:
        transaction = self.get_transaction(transaction_id)
        self.transaction_repo.delete(transaction)
        logger.info(f"Deleted transaction {transaction_id}")

    def cancel_transaction(self, transaction_id: uuid.UUID, reason: str) -> Transaction:
        """Only settled payments are cancelled; pending ones are edited or deleted"""
        transaction = self.get_transaction(transaction_id)
        if transaction.status != TransactionStatus.PAID:
            raise BusinessLogicError(
                "Only paid transactions can be cancelled",
                error_code="TRANSACTION_NOT_PAID"
            )

        logger.info(f"Cancelling transaction {transaction.id}: {reason}")
        return self.transaction_repo.update(transaction, {
            "status": TransactionStatus.CANCELLED,
            "cancelled_date": datetime.utcnow(),
            "cancellation_reason": reason.strip(),
        })

    def create_consultation_charge(self, appointment: Appointment) -> Transaction:
        """Pending consultation charge for a completed appointment; at most one per appointment.

        Other entries linked to the appointment (deposits, expenses) do not count.
        """
        existing = self.transaction_repo.get_consultation_charge(
            appointment.id, settings.CONSULTATION_TRANSACTION_TYPE_NAME
        )
        if existing:
            return existing

        transaction_type = self.type_service.get_or_create_income_type(
            settings.CONSULTATION_TRANSACTION_TYPE_NAME
        )
        consultation_type = appointment.consultation_type
        try:
            transaction = self.transaction_repo.create({
                "patient_id": appointment.patient_id,
                "appointment_id": appointment.id,
                "transaction_type_id": transaction_type.id,
                "amount": consultation_type.price,
                "status": TransactionStatus.PENDING,
                "description": f"{consultation_type.name} on {appointment.date.isoformat()} {appointment.time}",
            })
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_database_error(e, "create consultation charge")

        logger.info(f"Created pending consultation charge {transaction.id} for appointment {appointment.id}")
        return transaction
