# app/models/stock_logs.py

from sqlalchemy import Column, Index, Integer, String, DateTime
from sqlalchemy.sql import func

from app.database import Base


class StockLog(Base):
    __tablename__ = "stock_logs"

    id = Column(Integer, primary_key=True, index=True)

    # No foreign key: entries outlive the product they describe
    product_id = Column(Integer, nullable=False, index=True)
    product_name = Column(String(255), nullable=True)

    old_quantity = Column(Integer, nullable=False)
    new_quantity = Column(Integer, nullable=False)
    reason = Column(String(100), nullable=False)
    user_name = Column(String(100), nullable=True)

    timestamp = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_stock_logs_timestamp", "timestamp"),
    )
