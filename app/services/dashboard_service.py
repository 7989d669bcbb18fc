# =========================================================
# DASHBOARD & EXPORT SERVICE
#
# Read-only aggregates over the product table:
# - headline stats (count, stock value, low / out of stock)
# - products per category, optionally limited to a created-at window
# - top five products by stock value, same optional window
# - full product export as CSV or Excel
# =========================================================

import csv
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from io import BytesIO, StringIO

from openpyxl import Workbook
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.core.stock_status import LOW_STOCK, OUT_OF_STOCK
from app.models.products import Product

VALUE_CHART_SIZE = 5

EXPORT_HEADERS = ["name", "sku", "category", "price", "quantity", "minStock", "supplier"]


# =========================================================
# HELPER: DATE WINDOW
# =========================================================
def _parse_date(value: str | None, field: str) -> date | None:
    if value is None:
        return None

    value = value.strip()
    if not value or value.lower() in ("null", "undefined"):
        return None

    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise ValidationError(f"Invalid {field}, expected YYYY-MM-DD")


def resolve_date_window(start_date: str | None, end_date: str | None):
    """
    Turn optional start/end dates into a half-open datetime window.

    The end date is inclusive, so the upper bound is the start of the
    following day. The window only applies when both dates are given.
    """
    start = _parse_date(start_date, "startDate")
    end = _parse_date(end_date, "endDate")

    if start is None or end is None:
        return None

    if end < start:
        raise ValidationError("endDate cannot be before startDate")

    start_dt = datetime.combine(start, time.min)
    end_dt = datetime.combine(end + timedelta(days=1), time.min)
    return start_dt, end_dt


def _window_filter(window):
    if window is None:
        return []
    start_dt, end_dt = window
    return [Product.created_at >= start_dt, Product.created_at < end_dt]


# =========================================================
# HEADLINE STATS
# =========================================================
def get_stats(db: Session) -> dict:
    total_products = db.query(func.count(Product.id)).scalar()

    total_value = (
        db.query(func.coalesce(func.sum(Product.price * Product.quantity), 0))
        .scalar()
    )

    low_stock_items = (
        db.query(func.count(Product.id))
        .filter(Product.status == LOW_STOCK)
        .scalar()
    )

    out_of_stock_items = (
        db.query(func.count(Product.id))
        .filter(Product.status == OUT_OF_STOCK)
        .scalar()
    )

    return {
        "total_products": total_products,
        "total_value": round(float(total_value or 0), 2),
        "low_stock_items": low_stock_items,
        "out_of_stock_items": out_of_stock_items,
    }


# =========================================================
# CHARTS
# =========================================================
def get_category_chart(db: Session, window=None) -> list[dict]:
    value = func.count(Product.id)

    rows = (
        db.query(Product.category, value.label("value"))
        .filter(*_window_filter(window))
        .group_by(Product.category)
        .having(value > 0)
        .order_by(Product.category.asc())
        .all()
    )

    return [{"category": row.category, "value": row.value} for row in rows]


def get_value_chart(db: Session, window=None) -> list[dict]:
    stock_value = Product.price * Product.quantity

    rows = (
        db.query(Product.name, stock_value.label("value"))
        .filter(stock_value > 0, *_window_filter(window))
        .order_by(stock_value.desc(), Product.id.asc())
        .limit(VALUE_CHART_SIZE)
        .all()
    )

    return [{"name": row.name, "value": round(float(row.value), 2)} for row in rows]


# =========================================================
# EXPORT
# =========================================================
def _export_rows(db: Session):
    products = db.query(Product).order_by(Product.name.asc(), Product.id.asc()).all()

    for product in products:
        yield [
            product.name,
            product.sku,
            product.category,
            Decimal(product.price).quantize(Decimal("0.01")),
            product.quantity,
            product.min_stock,
            product.supplier or "",
        ]


def build_csv_export(db: Session) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)

    writer.writerow(EXPORT_HEADERS)
    for row in _export_rows(db):
        writer.writerow(row)

    return buffer.getvalue()


def build_excel_export(db: Session) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Products"

    sheet.append(EXPORT_HEADERS)
    for row in _export_rows(db):
        row[3] = float(row[3])
        sheet.append(row)

    output = BytesIO()
    workbook.save(output)
    return output.getvalue()
