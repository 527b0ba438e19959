"""
Catalog Service Layer

Consultation, procedure and transaction types share one lifecycle:
active entries are listed by name, admins create and edit them, and
deleting only deactivates so historical records keep their reference.
"""

from typing import List, Dict, Any
import uuid
from loguru import logger

from dental_clinic.core.exceptions import NotFoundError
from dental_clinic.domain.catalog.models import (
    ConsultationType, ProcedureType, TransactionType, TransactionCategory
)
from dental_clinic.domain.catalog.repository import CatalogRepository, TransactionTypeRepository


class CatalogService:
    """Generic service for one catalogue table"""

    label = "Item"

    def __init__(self, db, model):
        self.db = db
        self.repo = CatalogRepository(db, model)

    def list_active(self) -> List:
        return self.repo.get_active()

    def get(self, item_id: uuid.UUID):
        item = self.repo.get_by_id(item_id)
        if not item:
            raise NotFoundError(f"{self.label} not found")
        return item

    def get_active(self, item_id: uuid.UUID):
        """Lookup used when another record is priced or classified by this type"""
        item = self.repo.get_by_id(item_id)
        if not item or not item.is_active:
            raise NotFoundError(f"{self.label} not found")
        return item

    def create(self, data: Dict[str, Any]):
        item = self.repo.create(data)
        logger.info(f"Created {self.label.lower()} '{item.name}'")
        return item

    def update(self, item_id: uuid.UUID, update_data: Dict[str, Any]):
        item = self.get(item_id)
        return self.repo.update(item, update_data)

    def deactivate(self, item_id: uuid.UUID):
        item = self.get(item_id)
        logger.info(f"Deactivating {self.label.lower()} '{item.name}'")
        return self.repo.update(item, {"is_active": False})


class ConsultationTypeService(CatalogService):
    label = "Consultation type"

    def __init__(self, db):
        super().__init__(db, ConsultationType)


class ProcedureTypeService(CatalogService):
    label = "Procedure type"

    def __init__(self, db):
        super().__init__(db, ProcedureType)


class TransactionTypeService(CatalogService):
    label = "Transaction type"

    def __init__(self, db):
        super().__init__(db, TransactionType)
        self.repo = TransactionTypeRepository(db)

    def get_or_create_income_type(self, name: str) -> TransactionType:
        """Find the active income type with this name, creating it if missing"""
        transaction_type = self.repo.get_active_income_by_name(name)
        if transaction_type:
            return transaction_type
        logger.info(f"Creating missing income transaction type '{name}'")
        return self.repo.create({
            "name": name,
            "category": TransactionCategory.INCOME,
            "description": "Created automatically for consultation billing",
            "is_active": True,
        })
