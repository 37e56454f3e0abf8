__all__ = [
    "EthQRError",
    "ValidationError",
    "RenderError",
]

class EthQRError(Exception):
    """Base exception for ethqr operations."""
    pass


class ValidationError(EthQRError):
    """Raised when form input is rejected before conversion."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class RenderError(EthQRError):
    """Raised when the QR image cannot be produced."""
    pass
