"""
Finance Repository Layer

Provides data access operations for transactions and the aggregates used
by the dashboard and financial report.
"""

from typing import Optional, List, Tuple
from sqlalchemy import func
from sqlalchemy.orm import joinedload
from datetime import datetime
import uuid

from dental_clinic.domain.finance.models import Transaction, TransactionStatus
from dental_clinic.domain.catalog.models import TransactionType, TransactionCategory


class TransactionRepository:
    """Repository for transaction data access operations"""

    def __init__(self, db):
        self.db = db

    def create(self, transaction_data: dict) -> Transaction:
        transaction = Transaction(**transaction_data)
        self.db.add(transaction)
        self.db.commit()
        self.db.refresh(transaction)
        return transaction

    def get_by_id(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        return self.db.query(Transaction).options(
            joinedload(Transaction.patient),
            joinedload(Transaction.transaction_type)
        ).filter(Transaction.id == transaction_id).first()

    def get_by_appointment(self, appointment_id: uuid.UUID) -> List[Transaction]:
        return self.db.query(Transaction).filter(
            Transaction.appointment_id == appointment_id
        ).all()

    def get_consultation_charge(self, appointment_id: uuid.UUID, type_name: str) -> Optional[Transaction]:
        """The appointment's income entry of the consultation payment type, whatever its status"""
        return self.db.query(Transaction).join(
            TransactionType, Transaction.transaction_type_id == TransactionType.id
        ).filter(
            Transaction.appointment_id == appointment_id,
            TransactionType.name == type_name,
            TransactionType.category == TransactionCategory.INCOME
        ).order_by(Transaction.created_at.asc()).first()

    def get_by_patient(self, patient_id: uuid.UUID) -> List[Transaction]:
        return self.db.query(Transaction).options(
            joinedload(Transaction.transaction_type)
        ).filter(
            Transaction.patient_id == patient_id
        ).order_by(Transaction.transaction_date.desc()).all()

    def get_all(
        self,
        skip: int = 0,
        limit: int = 10,
        patient_id: Optional[uuid.UUID] = None,
        status: Optional[TransactionStatus] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None
    ) -> Tuple[List[Transaction], int]:
        query = self.db.query(Transaction)

        if patient_id:
            query = query.filter(Transaction.patient_id == patient_id)
        if status:
            query = query.filter(Transaction.status == status)
        if date_from:
            query = query.filter(Transaction.transaction_date >= date_from)
        if date_to:
            query = query.filter(Transaction.transaction_date < date_to)

        total = query.count()
        items = query.options(
            joinedload(Transaction.patient),
            joinedload(Transaction.transaction_type)
        ).order_by(
            Transaction.transaction_date.desc()
        ).offset(skip).limit(limit).all()
        return items, total

    def get_recent(self, limit: int = 5) -> List[Transaction]:
        return self.db.query(Transaction).options(
            joinedload(Transaction.patient),
            joinedload(Transaction.transaction_type)
        ).order_by(Transaction.created_at.desc()).limit(limit).all()

    def sum_by_status(self, status: TransactionStatus) -> float:
        total = self.db.query(func.sum(Transaction.amount)).filter(
            Transaction.status == status
        ).scalar()
        return float(total or 0)

    def sum_paid(
        self,
        category: TransactionCategory,
        date_from: datetime,
        date_to: datetime
    ) -> float:
        """Sum of paid amounts of one category within [date_from, date_to)"""
        total = self.db.query(func.sum(Transaction.amount)).join(
            TransactionType, Transaction.transaction_type_id == TransactionType.id
        ).filter(
            Transaction.status == TransactionStatus.PAID,
            TransactionType.category == category,
            Transaction.transaction_date >= date_from,
            Transaction.transaction_date < date_to
        ).scalar()
        return float(total or 0)

    def get_paid_with_types(self, date_from: datetime, date_to: datetime) -> List[Tuple[Transaction, TransactionType]]:
        return self.db.query(Transaction, TransactionType).join(
            TransactionType, Transaction.transaction_type_id == TransactionType.id
        ).filter(
            Transaction.status == TransactionStatus.PAID,
            Transaction.transaction_date >= date_from,
            Transaction.transaction_date < date_to
        ).order_by(Transaction.transaction_date).all()

    def update(self, transaction: Transaction, update_data: dict) -> Transaction:
        for key, value in update_data.items():
            if hasattr(transaction, key):
                setattr(transaction, key, value)
        self.db.commit()
        self.db.refresh(transaction)
        return transaction

    def delete(self, transaction: Transaction) -> None:
        self.db.delete(transaction)
        self.db.commit()
