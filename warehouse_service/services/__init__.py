"""Business logic services for the warehouse service."""

from warehouse_service.services.pagination import Page, PageRequest, SortOrder, parse_sort
from warehouse_service.services.warehouse_repository import WarehouseFilters
from warehouse_service.services.warehouse_service import (
    create_warehouse,
    delete_warehouse,
    get_warehouse_by_code,
    get_warehouse_by_id,
    list_active_warehouses,
    list_warehouses,
    list_warehouses_by_city,
    list_warehouses_by_country,
    list_warehouses_by_state,
    search_warehouses,
    soft_delete_warehouse,
    update_warehouse,
    warehouse_exists_by_code,
)

__all__ = [
    "Page",
    "PageRequest",
    "SortOrder",
    "WarehouseFilters",
    "create_warehouse",
    "delete_warehouse",
    "get_warehouse_by_code",
    "get_warehouse_by_id",
    "list_active_warehouses",
    "list_warehouses",
    "list_warehouses_by_city",
    "list_warehouses_by_country",
    "list_warehouses_by_state",
    "parse_sort",
    "search_warehouses",
    "soft_delete_warehouse",
    "update_warehouse",
    "warehouse_exists_by_code",
]
