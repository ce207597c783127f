# checkout/domain/errors.py
"""
Taksonomia bledow domenowych.
Kazdy blad niesie status HTTP, router/handler nie musi zgadywac mapowania.
"""


class DomainError(Exception):
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    status_code = 400
    default_message = "Validation failed"


class EmptyCartError(DomainError):
    status_code = 400
    default_message = "Your cart is empty"


class InvalidTransitionError(DomainError):
    status_code = 400
    default_message = "Invalid order status transition"


class ForbiddenError(DomainError):
    status_code = 403
    default_message = "You do not have permission to perform this action"


class NotFoundError(DomainError):
    status_code = 404
    default_message = "Not found"


class ConflictError(DomainError):
    status_code = 409
    default_message = "Conflicting concurrent modification"


class CatalogUnavailableError(DomainError):
    status_code = 503
    default_message = "Catalog service unavailable"


class StorageError(DomainError):
    status_code = 503
    default_message = "Storage unavailable"
