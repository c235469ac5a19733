class WarehouseError(Exception):
    """Base for errors reported to API clients as {success: false, message}."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None, **extra):
        self.message = message or self.default_message
        # extra keys are merged into the JSON error body
        self.extra = extra
        super().__init__(self.message)


class AuthenticationRequired(WarehouseError):
    """Raised when a request carries no resolved tenant."""
    status_code = 401
    default_message = "Unauthorized"


class PermissionDenied(WarehouseError):
    """Raised when the tenant role may not run an administrative operation."""
    status_code = 403
    default_message = "Forbidden"


class NotFound(WarehouseError):
    """Raised when a document or counterparty is absent or owned by another tenant."""
    status_code = 404
    default_message = "Not found"


class ValidationFailed(WarehouseError):
    status_code = 400
    default_message = "Invalid request"


class InsufficientStock(ValidationFailed):
    """Raised when a guarded stock decrement matches no row."""

    def __init__(self, product_name, available, requested):
        super().__init__(
            f"Insufficient stock for {product_name}. "
            f"Available: {available}, Requested: {requested}",
            available=available,
            requested=requested,
        )
        self.product_name = product_name
        self.available = available
        self.requested = requested


class DuplicateNumber(WarehouseError):
    """Raised when mint_number() exhausts its retries on taken codes."""
    status_code = 500
    default_message = "Could not allocate a unique document number"
