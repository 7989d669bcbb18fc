# app/services/stock_log_service.py

import logging

from sqlalchemy.orm import Session

from app.database import SessionLocal
from app.models.stock_logs import StockLog

logger = logging.getLogger(__name__)

REASON_CREATED = "Product Created"
REASON_UPDATED = "Stock Update"
REASON_DELETED = "Product Deleted"

SYSTEM_ACTOR = "System"


class StockLogWriter:
    """
    Append-only sink for quantity transitions.

    Each append runs in its own session, after the triggering product
    change has committed. Failures are logged and absorbed: append() never
    raises, and the product change stands whether or not the entry lands.
    """

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def append(
        self,
        product_id: int,
        product_name: str | None,
        old_quantity: int,
        new_quantity: int,
        reason: str,
        user_name: str | None = None,
    ) -> bool:
        db = None
        try:
            db = self.session_factory()
            db.add(
                StockLog(
                    product_id=product_id,
                    product_name=product_name,
                    old_quantity=old_quantity,
                    new_quantity=new_quantity,
                    reason=reason,
                    user_name=user_name or SYSTEM_ACTOR,
                )
            )
            db.commit()
            return True
        except Exception:
            # close() below discards the failed transaction
            logger.exception(
                "Error logging stock change for product %s (%s -> %s, %s)",
                product_id,
                old_quantity,
                new_quantity,
                reason,
            )
            return False
        finally:
            if db is not None:
                db.close()


def get_stock_log_writer() -> StockLogWriter:
    return StockLogWriter(SessionLocal)


def recent_logs(db: Session, limit: int) -> list[StockLog]:
    return (
        db.query(StockLog)
        .order_by(StockLog.timestamp.desc(), StockLog.id.desc())
        .limit(limit)
        .all()
    )
