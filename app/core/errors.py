# app/core/errors.py

from fastapi import status


class InventoryError(Exception):
    """Base class for failures surfaced to API callers as {"error": message}."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(InventoryError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(InventoryError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(InventoryError):
    status_code = status.HTTP_404_NOT_FOUND


# Duplicate keys are reported as 400, not 409, to match the existing clients
class DuplicateKey(InventoryError):
    status_code = status.HTTP_400_BAD_REQUEST


class InUse(InventoryError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, count: int):
        super().__init__(message)
        self.count = count


class StorageError(InventoryError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Database error"):
        super().__init__(message)
