# app/routers/logs.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import require_permission
from app.core.config import settings
from app.core.permissions import LOGS_READ
from app.schemas.stock_log import StockLogResponse
from app.services.stock_log_service import recent_logs

router = APIRouter(prefix="/logs", tags=["Stock Logs"])


@router.get("", response_model=list[StockLogResponse])
def list_logs(
    db: Session = Depends(get_db),
    current_user=Depends(require_permission(LOGS_READ)),
):
    return recent_logs(db, settings.LOG_FEED_LIMIT)
