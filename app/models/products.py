# app/models/products.py

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, Index, Integer, String, Numeric, DateTime
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.sql import func

from app.database import Base
from app.core.stock_status import stock_status, stock_status_expression


def _utcnow():
    return datetime.now(timezone.utc)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    sku = Column(String(100), nullable=False, unique=True, index=True)

    # Category and supplier hold registry names, not foreign keys
    category = Column(String(100), nullable=False)
    supplier = Column(String(255), nullable=False, default="")

    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer, nullable=False, default=0)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    # Set client-side: CURRENT_TIMESTAMP on SQLite stops at whole seconds
    updated_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
        nullable=False,
    )

    @hybrid_property
    def status(self):
        return stock_status(self.quantity, self.min_stock)

    @status.expression
    def status(cls):
        return stock_status_expression(cls.quantity, cls.min_stock)

    __table_args__ = (
        Index("ix_products_category", "category"),
        Index("ix_products_supplier", "supplier"),
        Index("ix_products_updated_at", "updated_at"),
        CheckConstraint("price >= 0", name="ck_price_non_negative"),
        CheckConstraint("quantity >= 0", name="ck_quantity_non_negative"),
        CheckConstraint("min_stock >= 0", name="ck_min_stock_non_negative"),
    )
