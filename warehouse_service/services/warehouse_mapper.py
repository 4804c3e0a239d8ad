"""Conversion between warehouse DTOs and the Warehouse model."""

from warehouse_service.models import Warehouse
from warehouse_service.schemas.warehouse import WarehouseDto

# Assigned by the store, never copied from caller input
STORE_ASSIGNED_FIELDS = frozenset({"id", "created_at", "updated_at", "version"})

# code is fixed once the warehouse exists
MERGE_EXCLUDED_FIELDS = STORE_ASSIGNED_FIELDS | {"code"}


def to_dto(warehouse: Warehouse) -> WarehouseDto:
    """Copy every column, including identity, audit and version fields."""
    return WarehouseDto.model_validate(warehouse)


def to_entity(dto: WarehouseDto) -> Warehouse:
    """Build a new Warehouse from the business fields of a DTO."""
    values = {
        field_name: getattr(dto, field_name)
        for field_name in WarehouseDto.model_fields
        if field_name not in STORE_ASSIGNED_FIELDS
    }
    return Warehouse(**values)


def merge_into_entity(warehouse: Warehouse, dto: WarehouseDto) -> Warehouse:
    """Apply a partial update to an existing warehouse.

    Only fields the DTO actually carries (non-None) overwrite the stored
    value; None leaves the stored value untouched. Identity, audit and
    version fields and ``code`` are never merged.

    Args:
        warehouse: Loaded warehouse to modify in place
        dto: Incoming changes

    Returns:
        The same warehouse instance
    """
    for field_name in WarehouseDto.model_fields:
        if field_name in MERGE_EXCLUDED_FIELDS:
            continue
        value = getattr(dto, field_name)
        if value is not None:
            setattr(warehouse, field_name, value)
    return warehouse
