"""
Domain exceptions for inventory and borrowing business logic

Raised by the business layer when a rule is violated. The API blueprint maps
each class to an HTTP status code.
"""


class InventoryDomainError(Exception):
    """Base exception for all inventory domain errors"""
    status_code = 500


class NotFoundError(InventoryDomainError):
    """Raised when a referenced id does not exist"""
    status_code = 404


class ValidationError(InventoryDomainError):
    """Raised when input or a business rule (quantities, lifecycle) is violated"""
    status_code = 400


class ConflictError(InventoryDomainError):
    """Raised on uniqueness violations or when a delete is blocked by open borrowings"""
    status_code = 409


class AuthError(InventoryDomainError):
    """Raised when login credentials do not match"""
    status_code = 401
