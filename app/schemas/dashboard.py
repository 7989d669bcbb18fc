# schemas/dashboard.py

from pydantic import BaseModel, Field


class StatsResponse(BaseModel):
    total_products: int = Field(serialization_alias="totalProducts")
    total_value: float = Field(serialization_alias="totalValue")
    low_stock_items: int = Field(serialization_alias="lowStockItems")
    out_of_stock_items: int = Field(serialization_alias="outOfStockItems")


class CategoryChartPoint(BaseModel):
    category: str
    value: int


class ValueChartPoint(BaseModel):
    name: str
    value: float
