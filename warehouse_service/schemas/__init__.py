"""Request and response schemas for the warehouse service."""

from warehouse_service.schemas.warehouse import (
    WarehouseCreate,
    WarehouseDto,
    WarehousePage,
)

__all__ = [
    "WarehouseCreate",
    "WarehouseDto",
    "WarehousePage",
]
