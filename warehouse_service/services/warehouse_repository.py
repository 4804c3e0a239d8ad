"""Query and persistence functions for the warehouses table.

This module provides functions for:
- Typed lookups by id, code, activity flag and location
- A filtered, paginated search with optional per-field filters
- Saving and deleting rows, with audit timestamps assigned on save

Database errors are translated into the service exception hierarchy here,
so callers never see SQLAlchemy exceptions.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from pydantic.alias_generators import to_camel
from sqlalchemy import ColumnElement, delete, exists, func, inspect, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from warehouse_service.exceptions import (
    DuplicateResourceError,
    StoreError,
    VersionConflictError,
    WarehouseValidationError,
)
from warehouse_service.models import Warehouse
from warehouse_service.services.pagination import Page, PageRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WarehouseFilters:
    """Filters for searching warehouses.

    String filters match case-insensitively anywhere in the column value.
    A filter left as None does not constrain the result.

    Attributes:
        code: Substring of the warehouse code
        name: Substring of the warehouse name
        city: Substring of the city
        state: Substring of the state
        country: Substring of the country
        is_active: Exact activity flag
    """

    code: str | None = None
    name: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    is_active: bool | None = None


def _sortable_columns() -> dict[str, ColumnElement]:
    """Map both JSON and Python attribute names to sortable columns."""
    columns: dict[str, ColumnElement] = {}
    for attr in inspect(Warehouse).column_attrs:
        column = getattr(Warehouse, attr.key)
        columns[attr.key] = column
        columns[to_camel(attr.key)] = column
    return columns


def _order_by(page_request: PageRequest | None) -> list[ColumnElement]:
    if page_request is None or not page_request.sort:
        return [Warehouse.created_at, Warehouse.id]

    columns = _sortable_columns()
    clauses: list[ColumnElement] = []
    for order in page_request.sort:
        column = columns.get(order.attribute)
        if column is None:
            raise WarehouseValidationError(f"Unknown sort property: {order.attribute!r}")
        clauses.append(column.desc() if order.descending else column.asc())
    # Stable tiebreak so pages never overlap
    clauses.append(Warehouse.id)
    return clauses


def build_filter_conditions(filters: WarehouseFilters) -> list[ColumnElement[bool]]:
    """Build the WHERE clauses for a filtered search.

    Each provided string filter becomes a case-insensitive ``%value%``
    match; ``is_active`` is compared exactly. Filters that are None are
    left out entirely.

    Args:
        filters: Search filters

    Returns:
        List of conditions to be combined with AND
    """
    conditions: list[ColumnElement[bool]] = []

    if filters.code is not None:
        conditions.append(Warehouse.code.ilike(f"%{filters.code}%"))
    if filters.name is not None:
        conditions.append(Warehouse.name.ilike(f"%{filters.name}%"))
    if filters.city is not None:
        conditions.append(Warehouse.city.ilike(f"%{filters.city}%"))
    if filters.state is not None:
        conditions.append(Warehouse.state.ilike(f"%{filters.state}%"))
    if filters.country is not None:
        conditions.append(Warehouse.country.ilike(f"%{filters.country}%"))
    if filters.is_active is not None:
        conditions.append(Warehouse.is_active == filters.is_active)

    return conditions


async def _fetch_all(
    session: AsyncSession,
    conditions: list[ColumnElement[bool]],
) -> list[Warehouse]:
    query = select(Warehouse).where(*conditions).order_by(*_order_by(None))
    try:
        result = await session.execute(query)
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to query warehouses: {e}") from e
    return list(result.scalars().all())


async def _fetch_page(
    session: AsyncSession,
    conditions: list[ColumnElement[bool]],
    page_request: PageRequest,
) -> Page[Warehouse]:
    order_by = _order_by(page_request)
    count_query = select(func.count(Warehouse.id)).where(*conditions)
    query = (
        select(Warehouse)
        .where(*conditions)
        .order_by(*order_by)
        .offset(page_request.offset)
        .limit(page_request.size)
    )

    try:
        total = (await session.execute(count_query)).scalar() or 0
        result = await session.execute(query)
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to query warehouses: {e}") from e

    return Page(
        items=list(result.scalars().all()),
        total=total,
        page=page_request.page,
        page_size=page_request.size,
    )


async def find_by_id(session: AsyncSession, warehouse_id: UUID) -> Warehouse | None:
    """Get a warehouse by primary key, or None if it does not exist."""
    try:
        return await session.get(Warehouse, warehouse_id)
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to load warehouse {warehouse_id}: {e}") from e


async def find_by_code(session: AsyncSession, code: str) -> Warehouse | None:
    """Get a warehouse by exact, case-sensitive code match."""
    try:
        result = await session.execute(select(Warehouse).where(Warehouse.code == code))
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to load warehouse {code!r}: {e}") from e
    return result.scalar_one_or_none()


async def exists_by_code(session: AsyncSession, code: str) -> bool:
    """Check whether a warehouse with exactly this code exists."""
    try:
        result = await session.execute(select(exists().where(Warehouse.code == code)))
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to check warehouse {code!r}: {e}") from e
    return bool(result.scalar())


async def exists_by_id(session: AsyncSession, warehouse_id: UUID) -> bool:
    """Check whether a warehouse with this id exists."""
    try:
        result = await session.execute(
            select(exists().where(Warehouse.id == warehouse_id))
        )
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to check warehouse {warehouse_id}: {e}") from e
    return bool(result.scalar())


async def find_all(
    session: AsyncSession,
    page_request: PageRequest | None = None,
) -> Page[Warehouse] | list[Warehouse]:
    """Get all warehouses, as a page when a page request is given."""
    if page_request is None:
        return await _fetch_all(session, [])
    return await _fetch_page(session, [], page_request)


async def find_active(
    session: AsyncSession,
    page_request: PageRequest | None = None,
) -> Page[Warehouse] | list[Warehouse]:
    """Get active warehouses, as a page when a page request is given."""
    conditions = [Warehouse.is_active.is_(True)]
    if page_request is None:
        return await _fetch_all(session, conditions)
    return await _fetch_page(session, conditions, page_request)


async def find_by_city(session: AsyncSession, city: str) -> list[Warehouse]:
    return await _fetch_all(session, [Warehouse.city == city])


async def find_by_state(session: AsyncSession, state: str) -> list[Warehouse]:
    return await _fetch_all(session, [Warehouse.state == state])


async def find_by_country(session: AsyncSession, country: str) -> list[Warehouse]:
    return await _fetch_all(session, [Warehouse.country == country])


async def find_with_filters(
    session: AsyncSession,
    filters: WarehouseFilters,
    page_request: PageRequest,
) -> Page[Warehouse]:
    """Search warehouses with optional filters combined by AND.

    Args:
        session: Database session
        filters: Search filters; None fields are ignored
        page_request: Page index, size and sort order

    Returns:
        Page of matching warehouses
    """
    return await _fetch_page(session, build_filter_conditions(filters), page_request)


async def save_warehouse(session: AsyncSession, warehouse: Warehouse) -> Warehouse:
    """Persist a new or modified warehouse and flush it.

    New rows get matching created/updated timestamps; existing rows get a
    fresh updated timestamp, which also forces the version to advance.

    Args:
        session: Database session
        warehouse: Warehouse to persist

    Returns:
        The flushed warehouse with id, timestamps and version populated

    Raises:
        DuplicateResourceError: If the code collides with another row
        VersionConflictError: If the row changed since it was loaded
        StoreError: On any other database failure
    """
    now = datetime.now(UTC)
    if warehouse.created_at is None:
        warehouse.created_at = now
    warehouse.updated_at = now

    # A failed flush expires the instance, so read these before flushing
    warehouse_id = warehouse.id
    code = warehouse.code

    session.add(warehouse)
    try:
        await session.flush()
    except StaleDataError as e:
        raise VersionConflictError(
            f"Warehouse {warehouse_id} was modified concurrently; reload and retry"
        ) from e
    except IntegrityError as e:
        raise DuplicateResourceError(f"Warehouse with code '{code}' already exists") from e
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to save warehouse: {e}") from e

    logger.debug(
        "Flushed warehouse %s (code=%s, version=%s)",
        warehouse.id,
        warehouse.code,
        warehouse.version,
    )
    return warehouse


async def delete_by_id(session: AsyncSession, warehouse_id: UUID) -> int:
    """Remove a warehouse row permanently.

    Returns:
        Number of rows deleted (0 or 1)
    """
    try:
        result = await session.execute(
            delete(Warehouse).where(Warehouse.id == warehouse_id)
        )
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to delete warehouse {warehouse_id}: {e}") from e
    return result.rowcount
