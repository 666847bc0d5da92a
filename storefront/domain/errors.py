# storefront/domain/errors.py


class StorefrontError(Exception):
    """Bazowy blad domenowy - routery mapuja go na odpowiedz HTTP."""

    message = "Request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class Unauthorized(StorefrontError):
    message = "Authentication required"


class InvalidRequest(StorefrontError):
    message = "Invalid request"


class NotFound(StorefrontError):
    message = "Not found"


class Conflict(StorefrontError):
    message = "Conflict"


class EmptyCart(StorefrontError):
    message = "Cart is empty"


class InsufficientStock(StorefrontError):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Insufficient stock for product {product_id}")


class DataAccessFailure(StorefrontError):
    """Baza nieosiagalna albo transakcja przerwana z przyczyn infrastrukturalnych."""

    message = "Data access failure"
