"""Warehouse management service.

This module provides the operations behind the warehouse API:
- Creating warehouses with unique codes
- Fetching warehouses by id, code, activity flag and location
- Filtered, paginated search
- Partial updates, hard deletes and soft deletes (deactivation)

Every operation runs in its own transaction scope: mutations commit on
success, reads run read-only, and any failure rolls back.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from warehouse_service.database import transaction
from warehouse_service.exceptions import (
    DuplicateResourceError,
    ResourceNotFoundError,
    VersionConflictError,
)
from warehouse_service.models import Warehouse
from warehouse_service.schemas.warehouse import WarehouseDto
from warehouse_service.services import warehouse_repository as repository
from warehouse_service.services.pagination import Page, PageRequest
from warehouse_service.services.warehouse_mapper import (
    merge_into_entity,
    to_dto,
    to_entity,
)
from warehouse_service.services.warehouse_repository import WarehouseFilters

logger = logging.getLogger(__name__)


async def _require_by_id(session: AsyncSession, warehouse_id: UUID) -> Warehouse:
    warehouse = await repository.find_by_id(session, warehouse_id)
    if warehouse is None:
        raise ResourceNotFoundError(f"Warehouse not found with ID: {warehouse_id}")
    return warehouse


async def create_warehouse(session: AsyncSession, dto: WarehouseDto) -> WarehouseDto:
    """Create a new warehouse.

    Args:
        session: Database session
        dto: Validated warehouse data; store-assigned fields are ignored

    Returns:
        The created warehouse with id, timestamps and version 0

    Raises:
        DuplicateResourceError: If a warehouse with the same code exists
    """
    logger.info("Creating warehouse with code: %s", dto.code)

    async with transaction(session):
        if await repository.exists_by_code(session, dto.code):
            raise DuplicateResourceError(
                f"Warehouse with code '{dto.code}' already exists"
            )

        warehouse = await repository.save_warehouse(session, to_entity(dto))
        result = to_dto(warehouse)

    logger.info("Warehouse created successfully with ID: %s", result.id)
    return result


async def get_warehouse_by_id(session: AsyncSession, warehouse_id: UUID) -> WarehouseDto:
    """Get a warehouse by id.

    Raises:
        ResourceNotFoundError: If no warehouse has this id
    """
    logger.info("Fetching warehouse with ID: %s", warehouse_id)

    async with transaction(session, read_only=True):
        return to_dto(await _require_by_id(session, warehouse_id))


async def get_warehouse_by_code(session: AsyncSession, code: str) -> WarehouseDto:
    """Get a warehouse by exact code.

    Raises:
        ResourceNotFoundError: If no warehouse has this code
    """
    logger.info("Fetching warehouse with code: %s", code)

    async with transaction(session, read_only=True):
        warehouse = await repository.find_by_code(session, code)
        if warehouse is None:
            raise ResourceNotFoundError(f"Warehouse not found with code: {code}")
        return to_dto(warehouse)


async def list_warehouses(
    session: AsyncSession,
    page_request: PageRequest | None = None,
) -> Page[WarehouseDto] | list[WarehouseDto]:
    """List all warehouses, paginated when a page request is given."""
    logger.info("Fetching all warehouses")

    async with transaction(session, read_only=True):
        found = await repository.find_all(session, page_request)
        if isinstance(found, Page):
            return found.map(to_dto)
        return [to_dto(warehouse) for warehouse in found]


async def list_active_warehouses(
    session: AsyncSession,
    page_request: PageRequest | None = None,
) -> Page[WarehouseDto] | list[WarehouseDto]:
    """List active warehouses, paginated when a page request is given."""
    logger.info("Fetching active warehouses")

    async with transaction(session, read_only=True):
        found = await repository.find_active(session, page_request)
        if isinstance(found, Page):
            return found.map(to_dto)
        return [to_dto(warehouse) for warehouse in found]


async def list_warehouses_by_city(session: AsyncSession, city: str) -> list[WarehouseDto]:
    logger.info("Fetching warehouses by city: %s", city)

    async with transaction(session, read_only=True):
        return [to_dto(w) for w in await repository.find_by_city(session, city)]


async def list_warehouses_by_state(session: AsyncSession, state: str) -> list[WarehouseDto]:
    logger.info("Fetching warehouses by state: %s", state)

    async with transaction(session, read_only=True):
        return [to_dto(w) for w in await repository.find_by_state(session, state)]


async def list_warehouses_by_country(
    session: AsyncSession, country: str
) -> list[WarehouseDto]:
    logger.info("Fetching warehouses by country: %s", country)

    async with transaction(session, read_only=True):
        return [to_dto(w) for w in await repository.find_by_country(session, country)]


async def update_warehouse(
    session: AsyncSession,
    warehouse_id: UUID,
    dto: WarehouseDto,
) -> WarehouseDto:
    """Apply a partial update to a warehouse.

    Fields left as None in the DTO keep their stored value, and the code
    never changes. When the DTO carries a version it must match the
    stored one.

    Args:
        session: Database session
        warehouse_id: Warehouse to update
        dto: Changes to apply

    Returns:
        The updated warehouse

    Raises:
        ResourceNotFoundError: If no warehouse has this id
        VersionConflictError: If the version is stale
    """
    logger.info("Updating warehouse with ID: %s", warehouse_id)

    async with transaction(session):
        warehouse = await _require_by_id(session, warehouse_id)
        if dto.version is not None and dto.version != warehouse.version:
            raise VersionConflictError(
                f"Warehouse {warehouse_id} is at version {warehouse.version}, "
                f"update was based on version {dto.version}"
            )

        merge_into_entity(warehouse, dto)
        warehouse = await repository.save_warehouse(session, warehouse)
        result = to_dto(warehouse)

    logger.info("Warehouse updated successfully with ID: %s", warehouse_id)
    return result


async def delete_warehouse(session: AsyncSession, warehouse_id: UUID) -> None:
    """Permanently delete a warehouse.

    Raises:
        ResourceNotFoundError: If no warehouse has this id
    """
    logger.info("Deleting warehouse with ID: %s", warehouse_id)

    async with transaction(session):
        if not await repository.exists_by_id(session, warehouse_id):
            raise ResourceNotFoundError(f"Warehouse not found with ID: {warehouse_id}")
        if not await repository.delete_by_id(session, warehouse_id):
            # Removed by another transaction after the existence check
            raise ResourceNotFoundError(f"Warehouse not found with ID: {warehouse_id}")

    logger.info("Warehouse deleted successfully with ID: %s", warehouse_id)


async def soft_delete_warehouse(session: AsyncSession, warehouse_id: UUID) -> None:
    """Deactivate a warehouse, keeping its row.

    Raises:
        ResourceNotFoundError: If no warehouse has this id
    """
    logger.info("Soft deleting warehouse with ID: %s", warehouse_id)

    async with transaction(session):
        warehouse = await _require_by_id(session, warehouse_id)
        warehouse.is_active = False
        await repository.save_warehouse(session, warehouse)

    logger.info("Warehouse soft deleted successfully with ID: %s", warehouse_id)


async def search_warehouses(
    session: AsyncSession,
    filters: WarehouseFilters,
    page_request: PageRequest,
) -> Page[WarehouseDto]:
    """Search warehouses with optional case-insensitive filters."""
    logger.info("Searching warehouses with filters: %s", filters)

    async with transaction(session, read_only=True):
        page = await repository.find_with_filters(session, filters, page_request)
        return page.map(to_dto)


async def warehouse_exists_by_code(session: AsyncSession, code: str) -> bool:
    logger.info("Checking existence of warehouse with code: %s", code)

    async with transaction(session, read_only=True):
        return await repository.exists_by_code(session, code)
