# app/services/reference_service.py

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import commit_or_raise
from app.core.errors import DuplicateKey, InUse, NotFound, ValidationError
from app.models.products import Product
from app.models.reference import Category, Supplier

logger = logging.getLogger(__name__)


class ReferenceRegistry:
    """
    A named lookup list (categories, suppliers).

    Products refer to entries by name, so deletion first counts the
    products carrying that name and refuses while any remain.
    """

    def __init__(self, model, label: str, product_column):
        self.model = model
        self.label = label
        self.product_column = product_column

    def list(self, db: Session):
        return db.query(self.model).order_by(self.model.name.asc()).all()

    def add(self, db: Session, name: str | None):
        name = (name or "").strip()
        if not name:
            raise ValidationError(f"{self.label.capitalize()} name required")

        duplicate_message = f"{self.label.capitalize()} already exists"

        if db.query(self.model.id).filter(self.model.name == name).first():
            raise DuplicateKey(duplicate_message)

        entry = self.model(name=name)
        db.add(entry)
        commit_or_raise(db, duplicate_message)
        db.refresh(entry)

        logger.info("%s %r added", self.label.capitalize(), name)
        return entry

    def usage_count(self, db: Session, name: str) -> int:
        return (
            db.query(func.count(Product.id))
            .filter(self.product_column == name)
            .scalar()
        )

    def delete(self, db: Session, entry_id: int) -> None:
        entry = db.query(self.model).filter(self.model.id == entry_id).first()

        if not entry:
            raise NotFound(f"{self.label.capitalize()} not found")

        count = self.usage_count(db, entry.name)
        if count > 0:
            raise InUse(
                f'Cannot delete {self.label}: "{entry.name}" is in use by {count} product(s).',
                count,
            )

        db.delete(entry)
        commit_or_raise(db, f"{self.label.capitalize()} could not be deleted")

        logger.info("%s %r deleted", self.label.capitalize(), entry.name)


categories = ReferenceRegistry(Category, "category", Product.category)
suppliers = ReferenceRegistry(Supplier, "supplier", Product.supplier)
