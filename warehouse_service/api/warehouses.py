"""FastAPI routes for warehouse management.

This module provides API endpoints for:
- Creating, updating and deleting warehouses
- Soft-deleting (deactivating) warehouses
- Looking warehouses up by id, code and location
- Paginated listing and filtered search
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from warehouse_service.config import settings
from warehouse_service.database import get_db
from warehouse_service.exceptions import (
    DuplicateResourceError,
    ResourceNotFoundError,
    StoreError,
    VersionConflictError,
    WarehouseValidationError,
)
from warehouse_service.schemas.warehouse import (
    WarehouseCreate,
    WarehouseDto,
    WarehousePage,
)
from warehouse_service.services import warehouse_service as service
from warehouse_service.services.pagination import Page, PageRequest, parse_sort
from warehouse_service.services.warehouse_repository import WarehouseFilters

router = APIRouter(prefix="/api/v1/warehouses", tags=["warehouses"])


# --- Helpers ---


def get_page_request(
    page: Annotated[int, Query(ge=0, description="Page index (0-based)")] = 0,
    size: Annotated[
        int | None,
        Query(ge=1, le=settings.max_page_size, description="Items per page"),
    ] = None,
    sort: Annotated[
        list[str] | None,
        Query(description="Sort order as property[,asc|desc]; repeatable"),
    ] = None,
) -> PageRequest:
    """Build a PageRequest from query parameters."""
    try:
        return PageRequest(
            page=page,
            size=size or settings.default_page_size,
            sort=parse_sort(sort),
        )
    except WarehouseValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


def to_page_response(page: Page[WarehouseDto]) -> WarehousePage:
    return WarehousePage(
        items=page.items,
        total=page.total,
        page=page.page,
        page_size=page.page_size,
        total_pages=page.total_pages,
    )


def store_failure(e: StoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Warehouse store error: {e}",
    )


# --- API Endpoints ---


@router.post(
    "",
    response_model=WarehouseDto,
    status_code=status.HTTP_201_CREATED,
)
async def create_warehouse(
    payload: WarehouseCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WarehouseDto:
    """Create a new warehouse.

    Raises:
        HTTPException: 409 if a warehouse with the same code exists.
    """
    try:
        return await service.create_warehouse(db, payload)
    except DuplicateResourceError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except StoreError as e:
        raise store_failure(e) from e


@router.get("", response_model=WarehousePage)
async def list_warehouses(
    db: Annotated[AsyncSession, Depends(get_db)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> WarehousePage:
    """List all warehouses with pagination."""
    try:
        page = await service.list_warehouses(db, page_request)
    except WarehouseValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except StoreError as e:
        raise store_failure(e) from e
    return to_page_response(page)


@router.get("/active", response_model=list[WarehouseDto])
async def list_active_warehouses(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[WarehouseDto]:
    """List every active warehouse."""
    try:
        return await service.list_active_warehouses(db)
    except StoreError as e:
        raise store_failure(e) from e


@router.get("/active/pageable", response_model=WarehousePage)
async def list_active_warehouses_paginated(
    db: Annotated[AsyncSession, Depends(get_db)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> WarehousePage:
    """List active warehouses with pagination."""
    try:
        page = await service.list_active_warehouses(db, page_request)
    except WarehouseValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except StoreError as e:
        raise store_failure(e) from e
    return to_page_response(page)


@router.get("/search", response_model=WarehousePage)
async def search_warehouses(
    db: Annotated[AsyncSession, Depends(get_db)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
    code: Annotated[str | None, Query(description="Warehouse code filter")] = None,
    name: Annotated[str | None, Query(description="Warehouse name filter")] = None,
    city: Annotated[str | None, Query(description="City filter")] = None,
    state: Annotated[str | None, Query(description="State filter")] = None,
    country: Annotated[str | None, Query(description="Country filter")] = None,
    is_active: Annotated[
        bool | None,
        Query(alias="isActive", description="Active status filter"),
    ] = None,
) -> WarehousePage:
    """Search warehouses with optional filters.

    Text filters match case-insensitively anywhere in the value.
    Filters that are not given do not narrow the result.
    """
    filters = WarehouseFilters(
        code=code,
        name=name,
        city=city,
        state=state,
        country=country,
        is_active=is_active,
    )
    try:
        page = await service.search_warehouses(db, filters, page_request)
    except WarehouseValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except StoreError as e:
        raise store_failure(e) from e
    return to_page_response(page)


@router.get("/code/{code}", response_model=WarehouseDto)
async def get_warehouse_by_code(
    code: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WarehouseDto:
    """Get a warehouse by its code."""
    try:
        return await service.get_warehouse_by_code(db, code)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StoreError as e:
        raise store_failure(e) from e


@router.get("/by-city/{city}", response_model=list[WarehouseDto])
async def get_warehouses_by_city(
    city: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[WarehouseDto]:
    """Get warehouses in exactly this city."""
    try:
        return await service.list_warehouses_by_city(db, city)
    except StoreError as e:
        raise store_failure(e) from e


@router.get("/by-state/{state}", response_model=list[WarehouseDto])
async def get_warehouses_by_state(
    state: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[WarehouseDto]:
    """Get warehouses in exactly this state."""
    try:
        return await service.list_warehouses_by_state(db, state)
    except StoreError as e:
        raise store_failure(e) from e


@router.get("/by-country/{country}", response_model=list[WarehouseDto])
async def get_warehouses_by_country(
    country: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[WarehouseDto]:
    """Get warehouses in exactly this country."""
    try:
        return await service.list_warehouses_by_country(db, country)
    except StoreError as e:
        raise store_failure(e) from e


@router.get("/exists/{code}", response_model=bool)
async def warehouse_exists(
    code: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> bool:
    """Check whether a warehouse with this code exists."""
    try:
        return await service.warehouse_exists_by_code(db, code)
    except StoreError as e:
        raise store_failure(e) from e


@router.get("/{warehouse_id}", response_model=WarehouseDto)
async def get_warehouse(
    warehouse_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WarehouseDto:
    """Get a warehouse by ID."""
    try:
        return await service.get_warehouse_by_id(db, warehouse_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StoreError as e:
        raise store_failure(e) from e


@router.put("/{warehouse_id}", response_model=WarehouseDto)
async def update_warehouse(
    warehouse_id: UUID,
    payload: WarehouseDto,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WarehouseDto:
    """Update a warehouse.

    Only fields present in the body change; the code is never changed.
    Send ``version`` to have the update rejected if someone else changed
    the warehouse first.

    Raises:
        HTTPException: 404 if the warehouse does not exist.
        HTTPException: 409 if the version is stale.
    """
    try:
        return await service.update_warehouse(db, warehouse_id, payload)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except VersionConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except StoreError as e:
        raise store_failure(e) from e


@router.delete("/{warehouse_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_warehouse(
    warehouse_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """Permanently delete a warehouse."""
    try:
        await service.delete_warehouse(db, warehouse_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StoreError as e:
        raise store_failure(e) from e


@router.patch("/{warehouse_id}/soft-delete", status_code=status.HTTP_204_NO_CONTENT)
async def soft_delete_warehouse(
    warehouse_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """Mark a warehouse as inactive, keeping its record."""
    try:
        await service.soft_delete_warehouse(db, warehouse_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except VersionConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except StoreError as e:
        raise store_failure(e) from e
