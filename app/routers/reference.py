# app/routers/reference.py
#
# Categories and suppliers share one shape: list, add, delete-when-unused.

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import require_permission
from app.core.permissions import (
    CATEGORIES_READ,
    CATEGORIES_WRITE,
    SUPPLIERS_READ,
    SUPPLIERS_WRITE,
)
from app.schemas.reference import ReferenceCreate, ReferenceResponse
from app.services.reference_service import ReferenceRegistry, categories, suppliers


def build_reference_router(
    registry: ReferenceRegistry,
    prefix: str,
    tag: str,
    read_operation: str,
    write_operation: str,
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("", response_model=list[ReferenceResponse])
    def list_entries(
        db: Session = Depends(get_db),
        current_user=Depends(require_permission(read_operation)),
    ):
        return registry.list(db)

    @router.post("", response_model=ReferenceResponse, status_code=status.HTTP_201_CREATED)
    def add_entry(
        entry_data: ReferenceCreate,
        db: Session = Depends(get_db),
        current_user=Depends(require_permission(write_operation)),
    ):
        return registry.add(db, entry_data.name)

    @router.delete("/{entry_id}")
    def delete_entry(
        entry_id: int,
        db: Session = Depends(get_db),
        current_user=Depends(require_permission(write_operation)),
    ):
        registry.delete(db, entry_id)
        return {"message": f"{registry.label.capitalize()} deleted successfully"}

    return router


categories_router = build_reference_router(
    categories, "/categories", "Categories", CATEGORIES_READ, CATEGORIES_WRITE
)
suppliers_router = build_reference_router(
    suppliers, "/suppliers", "Suppliers", SUPPLIERS_READ, SUPPLIERS_WRITE
)
