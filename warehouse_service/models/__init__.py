"""SQLAlchemy models for the warehouse service."""

from warehouse_service.models.warehouse import Warehouse

__all__ = [
    "Warehouse",
]
