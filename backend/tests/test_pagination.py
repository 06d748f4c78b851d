"""Pager tests: page arithmetic and slicing over real selects."""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.exceptions import PageOutOfRangeError
from catalog.models import Product
from catalog.pagination import Page, check_page, paginate

NEWEST_FIRST = select(Product).order_by(Product.id.desc())


# ---------------------------------------------------------------------------
# 1. Page metadata
# ---------------------------------------------------------------------------
@pytest.mark.parametrize(
    "total_items, page_size, total_pages",
    [(0, 3, 0), (1, 3, 1), (3, 3, 1), (7, 3, 3), (7, 2, 4), (10, 5, 2)],
)
def test_total_pages_is_ceiling(total_items: int, page_size: int, total_pages: int) -> None:
    page = Page(items=[], current_page=1, items_per_page=page_size, total_items=total_items)
    assert page.total_pages == total_pages


def test_previous_and_next_flags() -> None:
    first = Page(items=[1, 2, 3], current_page=1, items_per_page=3, total_items=7)
    middle = Page(items=[4, 5, 6], current_page=2, items_per_page=3, total_items=7)
    last = Page(items=[7], current_page=3, items_per_page=3, total_items=7)

    assert (first.has_previous, first.has_next) == (False, True)
    assert (middle.has_previous, middle.has_next) == (True, True)
    assert (last.has_previous, last.has_next) == (True, False)


def test_page_is_immutable() -> None:
    page = Page(items=[], current_page=1, items_per_page=3, total_items=0)
    with pytest.raises(AttributeError):
        page.current_page = 2  # type: ignore[misc]


def test_check_page_accepts_first_page_of_empty_listing() -> None:
    check_page(1, total_items=0, page_size=3)


@pytest.mark.parametrize("page", [0, -1, 4])
def test_check_page_rejects_out_of_range(page: int) -> None:
    with pytest.raises(PageOutOfRangeError):
        check_page(page, total_items=7, page_size=3)


# ---------------------------------------------------------------------------
# 2. Slicing: 7 products, 3 per page
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_pages_partition_the_listing(seeded_db: AsyncSession) -> None:
    pages = [await paginate(seeded_db, NEWEST_FIRST, p, 3) for p in (1, 2, 3)]

    assert [len(page.items) for page in pages] == [3, 3, 1]
    assert [[product.id for product in page.items] for page in pages] == [
        [7, 6, 5],
        [4, 3, 2],
        [1],
    ]
    for number, page in enumerate(pages, start=1):
        assert page.current_page == number
        assert page.items_per_page == 3
        assert page.total_items == 7
        assert page.total_pages == 3


@pytest.mark.asyncio
async def test_page_past_the_end_is_rejected(seeded_db: AsyncSession) -> None:
    with pytest.raises(PageOutOfRangeError) as excinfo:
        await paginate(seeded_db, NEWEST_FIRST, 4, 3)
    assert excinfo.value.total_pages == 3


@pytest.mark.asyncio
async def test_page_zero_is_rejected(seeded_db: AsyncSession) -> None:
    with pytest.raises(PageOutOfRangeError):
        await paginate(seeded_db, NEWEST_FIRST, 0, 3)


@pytest.mark.asyncio
async def test_non_positive_page_size_is_a_programming_error(seeded_db: AsyncSession) -> None:
    with pytest.raises(ValueError):
        await paginate(seeded_db, NEWEST_FIRST, 1, 0)


@pytest.mark.asyncio
async def test_empty_listing_has_an_empty_first_page(db: AsyncSession) -> None:
    page = await paginate(db, NEWEST_FIRST, 1, 3)
    assert page.items == []
    assert page.total_items == 0
    assert page.total_pages == 0
    assert not page.has_next

    with pytest.raises(PageOutOfRangeError):
        await paginate(db, NEWEST_FIRST, 2, 3)


@pytest.mark.asyncio
async def test_count_respects_filters(seeded_db: AsyncSession) -> None:
    stmt = NEWEST_FIRST.where(Product.category_id == 2)
    page = await paginate(seeded_db, stmt, 1, 2)
    assert page.total_items == 3
    assert [product.name for product in page.items] == ["Stool", "red Chair"]


@pytest.mark.asyncio
async def test_repeated_calls_return_the_same_page(seeded_db: AsyncSession) -> None:
    first = await paginate(seeded_db, NEWEST_FIRST, 2, 3)
    second = await paginate(seeded_db, NEWEST_FIRST, 2, 3)
    assert [p.id for p in first.items] == [p.id for p in second.items]
    assert first.total_items == second.total_items
