# app/services/product_service.py

import logging
import math
from datetime import datetime, timezone

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.database import commit_or_raise
from app.core.errors import DuplicateKey, NotFound, ValidationError
from app.core.permissions import PRODUCTS_CREATE, PRODUCTS_DELETE, authorize, narrow_update
from app.core.stock_status import STOCK_STATUSES
from app.models.products import Product
from app.models.users import User
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.stock_log_service import (
    REASON_CREATED,
    REASON_DELETED,
    REASON_UPDATED,
    StockLogWriter,
)

logger = logging.getLogger(__name__)

DUPLICATE_SKU_MESSAGE = "SKU already exists"


def _product_fields(product: Product) -> dict:
    return {
        "name": product.name,
        "sku": product.sku,
        "category": product.category,
        "price": product.price,
        "quantity": product.quantity,
        "min_stock": product.min_stock,
        "supplier": product.supplier,
    }


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def get_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()

    if not product:
        raise NotFound("Product not found")

    return product


def _sku_taken(db: Session, sku: str, exclude_id: int | None = None) -> bool:
    query = db.query(Product.id).filter(Product.sku == sku)
    if exclude_id is not None:
        query = query.filter(Product.id != exclude_id)
    return query.first() is not None


def create_product(
    db: Session,
    data: ProductCreate,
    actor: User,
    log_writer: StockLogWriter,
) -> Product:
    authorize(actor.role, PRODUCTS_CREATE)

    if _sku_taken(db, data.sku):
        raise DuplicateKey(DUPLICATE_SKU_MESSAGE)

    product = Product(
        name=data.name,
        sku=data.sku,
        category=data.category,
        price=data.price,
        quantity=data.quantity,
        min_stock=data.min_stock,
        supplier=data.supplier or "",
    )
    db.add(product)

    # A racing insert of the same SKU loses here on the unique index
    commit_or_raise(db, DUPLICATE_SKU_MESSAGE)
    db.refresh(product)

    logger.info("Product %s (%s) created by %s", product.id, product.sku, actor.username)

    log_writer.append(
        product.id,
        product.name,
        0,
        product.quantity,
        REASON_CREATED,
        actor.username,
    )

    return product


def update_product(
    db: Session,
    product_id: int,
    data: ProductUpdate,
    actor: User,
    log_writer: StockLogWriter,
) -> Product:
    product = get_product(db, product_id)
    old_quantity = product.quantity

    effective = narrow_update(
        actor.role,
        data.model_dump(exclude_unset=True),
        _product_fields(product),
    )

    if effective["sku"] != product.sku and _sku_taken(db, effective["sku"], exclude_id=product.id):
        raise DuplicateKey(DUPLICATE_SKU_MESSAGE)

    for field, value in effective.items():
        setattr(product, field, value)

    # Bump even when no column changed
    product.updated_at = datetime.now(timezone.utc)

    commit_or_raise(db, DUPLICATE_SKU_MESSAGE)
    db.refresh(product)

    if product.quantity != old_quantity:
        log_writer.append(
            product.id,
            product.name,
            old_quantity,
            product.quantity,
            REASON_UPDATED,
            actor.username,
        )

    return product


def delete_product(
    db: Session,
    product_id: int,
    actor: User,
    log_writer: StockLogWriter,
) -> None:
    authorize(actor.role, PRODUCTS_DELETE)

    product = get_product(db, product_id)
    snapshot = (product.id, product.name, product.quantity)

    db.delete(product)
    commit_or_raise(db, "Product could not be deleted")

    logger.info("Product %s deleted by %s", snapshot[0], actor.username)

    log_writer.append(
        snapshot[0],
        snapshot[1],
        snapshot[2],
        0,
        REASON_DELETED,
        actor.username,
    )


def list_products(
    db: Session,
    page: int,
    limit: int,
    category: str | None = None,
    supplier: str | None = None,
    status: str | None = None,
    search: str | None = None,
):
    """
    Filter, count and page the product table.

    Filters combine with AND. Returns (products, total_products, total_pages).
    """
    query = db.query(Product)

    if category:
        query = query.filter(Product.category == category)

    if supplier:
        query = query.filter(Product.supplier == supplier)

    if status:
        if status not in STOCK_STATUSES:
            raise ValidationError(
                "Invalid status. Expected one of: {}".format(", ".join(STOCK_STATUSES))
            )
        query = query.filter(Product.status == status)

    if search:
        pattern = f"%{_escape_like(search)}%"
        query = query.filter(
            or_(
                Product.name.ilike(pattern, escape="\\"),
                Product.sku.ilike(pattern, escape="\\"),
            )
        )

    total_products = query.count()
    total_pages = math.ceil(total_products / limit)

    products = (
        query
        .order_by(Product.updated_at.desc(), Product.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return products, total_products, total_pages
