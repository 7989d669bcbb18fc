# app/services/seed_service.py

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from app.models.products import Product
from app.models.reference import Category, Supplier

logger = logging.getLogger(__name__)

SAMPLE_SUPPLIERS = ["TechCorp", "FashionHub", "LifeStyle Inc", "OfficeMax", "FitGear", "Unassigned"]
SAMPLE_CATEGORIES = ["Electronics", "Clothing", "Lifestyle", "Office", "Fitness", "Uncategorized"]

# name, sku, category, price, quantity, min_stock, supplier
SAMPLE_PRODUCTS = [
    ("Wireless Headphones", "WH-001", "Electronics", "79.99", 45, 10, "TechCorp"),
    ("Cotton T-Shirt", "TS-002", "Clothing", "24.99", 8, 15, "FashionHub"),
    ("Smart Water Bottle", "WB-003", "Lifestyle", "34.99", 0, 5, "LifeStyle Inc"),
    ("Laptop Stand", "LS-004", "Office", "49.99", 23, 8, "OfficeMax"),
    ("Yoga Mat", "YM-005", "Fitness", "39.99", 12, 10, "FitGear"),
]


def seed_sample_data(db: Session) -> int:
    """
    Insert the sample registries and products that are not already present.

    Safe to run on every start. Seeded products get no stock log entries.
    Returns the number of rows inserted.
    """
    inserted = 0

    existing_suppliers = {name for (name,) in db.query(Supplier.name).all()}
    for name in SAMPLE_SUPPLIERS:
        if name not in existing_suppliers:
            db.add(Supplier(name=name))
            inserted += 1

    existing_categories = {name for (name,) in db.query(Category.name).all()}
    for name in SAMPLE_CATEGORIES:
        if name not in existing_categories:
            db.add(Category(name=name))
            inserted += 1

    existing_skus = {sku for (sku,) in db.query(Product.sku).all()}
    for name, sku, category, price, quantity, min_stock, supplier in SAMPLE_PRODUCTS:
        if sku in existing_skus:
            continue
        db.add(
            Product(
                name=name,
                sku=sku,
                category=category,
                price=Decimal(price),
                quantity=quantity,
                min_stock=min_stock,
                supplier=supplier,
            )
        )
        inserted += 1

    db.commit()

    if inserted:
        logger.info("Sample data inserted (%s rows)", inserted)

    return inserted
