"""FastAPI routes for the warehouse service."""

from warehouse_service.api.warehouses import router as warehouses_router

__all__ = ["warehouses_router"]
