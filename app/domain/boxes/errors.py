"""
Domain-specific errors for the boxes bounded context.

These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class BoxesDomainError(Exception):
    """Base error for all boxes domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class StorageFault(BoxesDomainError):
    """Raised when the record store cannot open, query or write."""

    def __init__(self, operation: str, cause: Exception) -> None:
        super().__init__(f"Storage fault during {operation}: {cause}")
        self.operation = operation
        self.cause = cause


class MaintenanceDisabledError(BoxesDomainError):
    """Raised when a maintenance-only operation is called on a production store."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Maintenance operation not enabled: {operation}")
        self.operation = operation
