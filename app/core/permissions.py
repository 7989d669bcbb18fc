# app/core/permissions.py
#
# Role policy table. Each role maps the operations it may perform to the
# product fields a write under that operation is allowed to touch.

from app.core.errors import Forbidden, ValidationError

ADMIN = "admin"
STAFF = "staff"

PRODUCT_FIELDS = frozenset(
    {"name", "sku", "category", "price", "quantity", "min_stock", "supplier"}
)
STOCK_FIELDS = frozenset({"quantity", "min_stock"})
# Null on update means unassigned
NULLABLE_FIELDS = frozenset({"supplier"})
ALL_FIELDS = PRODUCT_FIELDS

PRODUCTS_READ = "products:read"
PRODUCTS_CREATE = "products:create"
PRODUCTS_UPDATE = "products:update"
PRODUCTS_DELETE = "products:delete"
PRODUCTS_EXPORT = "products:export"
CATEGORIES_READ = "categories:read"
CATEGORIES_WRITE = "categories:write"
SUPPLIERS_READ = "suppliers:read"
SUPPLIERS_WRITE = "suppliers:write"
LOGS_READ = "logs:read"
DASHBOARD_READ = "dashboard:read"

OPERATIONS = (
    PRODUCTS_READ,
    PRODUCTS_CREATE,
    PRODUCTS_UPDATE,
    PRODUCTS_DELETE,
    PRODUCTS_EXPORT,
    CATEGORIES_READ,
    CATEGORIES_WRITE,
    SUPPLIERS_READ,
    SUPPLIERS_WRITE,
    LOGS_READ,
    DASHBOARD_READ,
)

ROLE_POLICIES = {
    ADMIN: {operation: ALL_FIELDS for operation in OPERATIONS},
    STAFF: {
        PRODUCTS_READ: ALL_FIELDS,
        PRODUCTS_UPDATE: STOCK_FIELDS,
        DASHBOARD_READ: ALL_FIELDS,
    },
}

FORBIDDEN_MESSAGE = "Forbidden: You do not have permission to perform this action."


def authorize(role: str, operation: str) -> frozenset:
    """Return the field set `role` may write under `operation`, or raise Forbidden."""
    allowed = ROLE_POLICIES.get(role, {}).get(operation)
    if allowed is None:
        raise Forbidden(FORBIDDEN_MESSAGE)
    return allowed


def is_allowed(role: str, operation: str) -> bool:
    return operation in ROLE_POLICIES.get(role, {})


def narrow_update(role: str, requested: dict, current: dict) -> dict:
    """
    Merge a requested product write over the stored values.

    Fields outside the role's allow-list, and fields the caller left out,
    take the stored value, so they cannot be smuggled through. An explicit
    null unassigns the supplier; any other field sent as null is rejected.
    """
    allowed = authorize(role, PRODUCTS_UPDATE)

    effective = {}
    for field in PRODUCT_FIELDS:
        if field not in allowed or field not in requested:
            effective[field] = current.get(field)
            continue

        value = requested[field]
        if value is None:
            if field not in NULLABLE_FIELDS:
                raise ValidationError(f"{field} cannot be null")
            value = ""
        effective[field] = value
    return effective
