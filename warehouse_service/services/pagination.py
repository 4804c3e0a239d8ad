"""Pagination primitives shared by the query layer and the API.

Pages are 0-based. A sort value follows the ``property[,asc|desc]`` form,
for example ``["city,asc", "name,desc"]``.
"""

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from warehouse_service.config import settings
from warehouse_service.exceptions import WarehouseValidationError

T = TypeVar("T")
R = TypeVar("R")

SORT_ASC = "asc"
SORT_DESC = "desc"


@dataclass(frozen=True)
class SortOrder:
    """A single sort key.

    Attributes:
        attribute: Attribute name to sort on (JSON or Python spelling)
        direction: Either "asc" or "desc"
    """

    attribute: str
    direction: str = SORT_ASC

    @property
    def descending(self) -> bool:
        return self.direction == SORT_DESC


@dataclass(frozen=True)
class PageRequest:
    """Requested slice of a result set.

    Attributes:
        page: 0-based page index
        size: Number of rows per page
        sort: Sort keys, applied in order
    """

    page: int = 0
    size: int = field(default_factory=lambda: settings.default_page_size)
    sort: tuple[SortOrder, ...] = ()

    def __post_init__(self) -> None:
        if self.page < 0:
            raise WarehouseValidationError("Page index must not be negative")
        if self.size < 1:
            raise WarehouseValidationError("Page size must be at least 1")
        if self.size > settings.max_page_size:
            raise WarehouseValidationError(
                f"Page size must not exceed {settings.max_page_size}"
            )

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the totals needed to navigate the rest.

    Attributes:
        items: Rows on this page
        total: Number of rows matching the query across all pages
        page: 0-based page index
        page_size: Requested page size
    """

    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0

    def map(self, func: Callable[[T], R]) -> "Page[R]":
        """Convert every item, keeping the paging totals."""
        return Page(
            items=[func(item) for item in self.items],
            total=self.total,
            page=self.page,
            page_size=self.page_size,
        )


def parse_sort(values: Sequence[str] | None) -> tuple[SortOrder, ...]:
    """Parse ``property[,direction]`` strings into sort orders.

    Args:
        values: Raw sort strings, typically repeated query parameters

    Returns:
        Tuple of SortOrder in the order given

    Raises:
        WarehouseValidationError: If a value is empty or has an unknown
            direction
    """
    orders: list[SortOrder] = []
    for raw in values or ():
        parts = [part.strip() for part in raw.split(",")]
        prop = parts[0]
        if not prop:
            raise WarehouseValidationError(f"Invalid sort value: {raw!r}")
        direction = parts[1].lower() if len(parts) > 1 and parts[1] else SORT_ASC
        if direction not in (SORT_ASC, SORT_DESC) or len(parts) > 2:
            raise WarehouseValidationError(f"Invalid sort value: {raw!r}")
        orders.append(SortOrder(attribute=prop, direction=direction))
    return tuple(orders)
