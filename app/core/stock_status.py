# app/core/stock_status.py

from sqlalchemy import case

IN_STOCK = "In Stock"
LOW_STOCK = "Low Stock"
OUT_OF_STOCK = "Out of Stock"

STOCK_STATUSES = (IN_STOCK, LOW_STOCK, OUT_OF_STOCK)


def stock_status(quantity: int, min_stock: int) -> str:
    """
    Classify a quantity against its minimum threshold.

    Zero is always out of stock, whatever the threshold. A quantity equal
    to the threshold is low stock.
    """
    if quantity == 0:
        return OUT_OF_STOCK
    if quantity <= min_stock:
        return LOW_STOCK
    return IN_STOCK


def stock_status_expression(quantity, min_stock):
    # SQL form of stock_status(), keep the two in step
    return case(
        (quantity == 0, OUT_OF_STOCK),
        (quantity <= min_stock, LOW_STOCK),
        else_=IN_STOCK,
    )
