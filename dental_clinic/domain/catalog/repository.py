from typing import Optional, List, Type
import uuid

from dental_clinic.infrastructure.database import Base
from dental_clinic.domain.catalog.models import TransactionType, TransactionCategory


class CatalogRepository:
    """Data access shared by the consultation, procedure and transaction type tables"""

    def __init__(self, db, model: Type[Base]):
        self.db = db
        self.model = model

    def create(self, data: dict):
        item = self.model(**data)
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def get_by_id(self, item_id: uuid.UUID):
        return self.db.query(self.model).filter(self.model.id == item_id).first()

    def get_by_name(self, name: str):
        return self.db.query(self.model).filter(self.model.name == name).first()

    def get_active(self) -> List:
        return self.db.query(self.model).filter(
            self.model.is_active == True
        ).order_by(self.model.name).all()

    def update(self, item, update_data: dict):
        for key, value in update_data.items():
            if hasattr(item, key):
                setattr(item, key, value)
        self.db.commit()
        self.db.refresh(item)
        return item


class TransactionTypeRepository(CatalogRepository):
    def __init__(self, db):
        super().__init__(db, TransactionType)

    def get_active_income_by_name(self, name: str) -> Optional[TransactionType]:
        return self.db.query(TransactionType).filter(
            TransactionType.name == name,
            TransactionType.category == TransactionCategory.INCOME,
            TransactionType.is_active == True
        ).first()
