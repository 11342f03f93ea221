# backend/utils/errors.py
"""Domain errors raised by the services and rendered by main.py as {"message": ...}."""


class ShopError(Exception):
    """Base class for every error the API turns into a client-facing response."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ShopError):
    """Missing or malformed field, or a value outside an enumeration."""

    status_code = 400


class NotFoundError(ShopError):
    status_code = 404


class InvalidSizeError(ShopError):
    """Requested size is not declared on the product."""

    status_code = 400

    def __init__(self, size: str):
        self.size = size
        super().__init__(f"Size '{size}' not available")


class InsufficientStockError(ShopError):
    """Requested quantity would exceed the stock left for a size."""

    status_code = 400

    def __init__(self, size: str, available: int):
        self.size = size
        self.available = available
        super().__init__(f"Only {available} items available for size '{size}'")


class InvalidActionError(ShopError):
    status_code = 400

    def __init__(self, action: str):
        self.action = action
        super().__init__("Invalid action, must be 'increment' or 'decrement'")


class PaymentFailedError(ShopError):
    status_code = 402

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Payment failed: {reason}")


class ForbiddenError(ShopError):
    status_code = 403
