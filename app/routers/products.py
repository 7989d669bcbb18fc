# app/routers/products.py

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import require_permission
from app.core.config import settings
from app.core.permissions import (
    PRODUCTS_CREATE,
    PRODUCTS_DELETE,
    PRODUCTS_EXPORT,
    PRODUCTS_READ,
    PRODUCTS_UPDATE,
)
from app.models.users import User
from app.schemas.product import (
    ProductCreate,
    ProductCreatedResponse,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from app.services import dashboard_service, product_service
from app.services.stock_log_service import StockLogWriter, get_stock_log_writer

router = APIRouter(
    prefix="/products",
    tags=["Products"],
)


@router.get("", response_model=ProductListResponse)
def list_products(
    category: str | None = None,
    supplier: str | None = None,
    status: str | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = settings.DEFAULT_PAGE_SIZE,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(PRODUCTS_READ)),
):
    if page < 1:
        page = 1

    if limit < 1 or limit > settings.MAX_PAGE_SIZE:
        limit = settings.DEFAULT_PAGE_SIZE

    products, total_products, total_pages = product_service.list_products(
        db,
        page=page,
        limit=limit,
        category=category,
        supplier=supplier,
        status=status,
        search=search,
    )

    return ProductListResponse(
        products=[ProductResponse.model_validate(product) for product in products],
        total_pages=total_pages,
        current_page=page,
        total_products=total_products,
    )


# Declared before /{product_id} so "export" is not parsed as an id
@router.get("/export")
def export_products(
    format: str = Query("csv", pattern="^(csv|xlsx)$"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(PRODUCTS_EXPORT)),
):
    if format == "xlsx":
        return Response(
            content=dashboard_service.build_excel_export(db),
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": 'attachment; filename="products.xlsx"'},
        )

    return Response(
        content=dashboard_service.build_csv_export(db),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="products.csv"'},
    )


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(PRODUCTS_READ)),
):
    return product_service.get_product(db, product_id)


@router.post(
    "",
    response_model=ProductCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(PRODUCTS_CREATE)),
    log_writer: StockLogWriter = Depends(get_stock_log_writer),
):
    product = product_service.create_product(db, product_data, current_user, log_writer)

    return {"message": "Product created successfully", "id": product.id}


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(PRODUCTS_UPDATE)),
    log_writer: StockLogWriter = Depends(get_stock_log_writer),
):
    # Field-level narrowing by role happens in the service
    return product_service.update_product(db, product_id, product_data, current_user, log_writer)


@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(PRODUCTS_DELETE)),
    log_writer: StockLogWriter = Depends(get_stock_log_writer),
):
    product_service.delete_product(db, product_id, current_user, log_writer)

    return {"message": "Product deleted successfully"}
