# app/routers/dashboard.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import require_permission
from app.core.permissions import DASHBOARD_READ
from app.schemas.dashboard import CategoryChartPoint, StatsResponse, ValueChartPoint
from app.services.dashboard_service import (
    get_category_chart,
    get_stats,
    get_value_chart,
    resolve_date_window,
)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=StatsResponse)
def stats(
    db: Session = Depends(get_db),
    current_user=Depends(require_permission(DASHBOARD_READ)),
):
    return get_stats(db)


@router.get("/category-chart", response_model=list[CategoryChartPoint])
def category_chart(
    startDate: str | None = None,
    endDate: str | None = None,
    db: Session = Depends(get_db),
    current_user=Depends(require_permission(DASHBOARD_READ)),
):
    return get_category_chart(db, resolve_date_window(startDate, endDate))


@router.get("/value-chart", response_model=list[ValueChartPoint])
def value_chart(
    startDate: str | None = None,
    endDate: str | None = None,
    db: Session = Depends(get_db),
    current_user=Depends(require_permission(DASHBOARD_READ)),
):
    return get_value_chart(db, resolve_date_window(startDate, endDate))
