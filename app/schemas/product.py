from decimal import Decimal
from pydantic import AliasChoices, BaseModel, Field, field_validator
from datetime import datetime
from typing import List


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class ProductCreate(BaseModel):
    name: str = Field(..., max_length=255)
    sku: str = Field(..., max_length=100)
    category: str = Field(..., max_length=100)

    price: Decimal = Field(
        ...,
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Unit price, two decimal places"
    )

    quantity: int = Field(..., ge=0)

    min_stock: int = Field(
        0,
        ge=0,
        validation_alias=AliasChoices("minStock", "min_stock"),
    )
    supplier: str | None = Field(None, max_length=255)

    @field_validator("name", "sku", "category")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        return _strip_required(value)


class ProductUpdate(BaseModel):
    # Every field is optional; omitted fields keep their stored values
    name: str | None = Field(None, max_length=255)
    sku: str | None = Field(None, max_length=100)
    category: str | None = Field(None, max_length=100)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    quantity: int | None = Field(None, ge=0)
    min_stock: int | None = Field(
        None,
        ge=0,
        validation_alias=AliasChoices("minStock", "min_stock"),
    )
    supplier: str | None = Field(None, max_length=255)

    @field_validator("name", "sku", "category")
    @classmethod
    def _not_blank(cls, value):
        if value is None:
            return value
        return _strip_required(value)


class ProductCreatedResponse(BaseModel):
    message: str
    id: int


class ProductResponse(BaseModel):
    id: int
    name: str
    sku: str
    category: str
    price: float
    quantity: int
    min_stock: int = Field(serialization_alias="minStock")
    supplier: str | None
    status: str
    updated_at: datetime | None = Field(None, serialization_alias="lastUpdated")
    created_at: datetime | None = Field(None, serialization_alias="createdAt")

    class Config:
        from_attributes = True


class ProductListResponse(BaseModel):
    products: List[ProductResponse]
    total_pages: int = Field(serialization_alias="totalPages")
    current_page: int = Field(serialization_alias="currentPage")
    total_products: int = Field(serialization_alias="totalProducts")
