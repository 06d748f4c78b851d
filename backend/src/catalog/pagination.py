"""Offset-based pagination over ordered SQLAlchemy selects.

``paginate`` turns an ordered, not yet executed ``Select`` into one
materialized ``Page``. The count and the slice are two separate queries, so
``total_items`` may lag behind the slice under concurrent writes; no
snapshot isolation is attempted.

Page numbers are 1-based. A page below 1, or beyond the last page, raises
``PageOutOfRangeError``. An empty listing still has a valid (empty) page 1.
"""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.exceptions import PageOutOfRangeError

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of an ordered listing plus its position in the whole.

    A plain dataclass so repositories and services stay free of Pydantic;
    routers convert it with ``PaginatedResponse[X].model_validate(page)``.
    """

    items: list[T]
    current_page: int
    items_per_page: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.items_per_page)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


def check_page(page: int, total_items: int, page_size: int) -> None:
    """Raise PageOutOfRangeError unless 1 <= page <= max(total_pages, 1)."""
    total_pages = math.ceil(total_items / page_size)
    if page < 1 or page > max(total_pages, 1):
        raise PageOutOfRangeError(page, total_pages)


async def count(db: AsyncSession, stmt: Select) -> int:
    """Return the number of rows ``stmt`` would produce."""
    subquery = stmt.order_by(None).subquery()
    result = await db.execute(select(func.count()).select_from(subquery))
    return result.scalar_one()


async def paginate(db: AsyncSession, stmt: Select[tuple[T]], page: int, page_size: int) -> Page[T]:
    """Execute one page of ``stmt``.

    ``stmt`` must already carry its ORDER BY; page boundaries are only stable
    when that ordering is deterministic.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    total_items = await count(db, stmt)
    check_page(page, total_items, page_size)

    result = await db.execute(stmt.offset((page - 1) * page_size).limit(page_size))
    return Page(
        items=list(result.scalars().all()),
        current_page=page,
        items_per_page=page_size,
        total_items=total_items,
    )
