"""Exceptions raised by the warehouse service layer."""


class WarehouseServiceError(Exception):
    """Base class for all warehouse service errors."""


class WarehouseValidationError(WarehouseServiceError):
    """Raised when input passes the schema but is still unusable."""


class DuplicateResourceError(WarehouseServiceError):
    """Raised when a warehouse with the same code already exists."""


class ResourceNotFoundError(WarehouseServiceError):
    """Raised when a referenced warehouse does not exist."""


class VersionConflictError(WarehouseServiceError):
    """Raised when an update loses an optimistic version check.

    The caller is expected to re-fetch the record and retry.
    """


class StoreError(WarehouseServiceError):
    """Raised when the underlying database fails."""
