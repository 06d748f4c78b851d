import pytest
from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog.models import Category, Movie, Product, Thematic
from tests.factories import make_category, make_product


# ---------------------------------------------------------------------------
# 1. Persistence: seed creates both entity groups
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_seed_creates_both_entity_groups(seeded_db: AsyncSession) -> None:
    assert len((await seeded_db.execute(select(Category))).scalars().all()) == 2
    assert len((await seeded_db.execute(select(Product))).scalars().all()) == 7
    assert len((await seeded_db.execute(select(Thematic))).scalars().all()) == 2
    assert len((await seeded_db.execute(select(Movie))).scalars().all()) == 5


# ---------------------------------------------------------------------------
# 2. Associations: parents load their own children
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_category_loads_its_own_products(seeded_db: AsyncSession) -> None:
    stmt = select(Category).options(selectinload(Category.products)).order_by(Category.id)
    lamps, chairs = (await seeded_db.execute(stmt)).scalars().all()

    assert len(lamps.products) == 4
    assert len(chairs.products) == 3
    for product in lamps.products:
        assert product.category_id == lamps.id


@pytest.mark.asyncio
async def test_thematic_loads_its_own_movies(seeded_db: AsyncSession) -> None:
    stmt = select(Thematic).options(selectinload(Thematic.movies)).order_by(Thematic.id)
    scifi, drama = (await seeded_db.execute(stmt)).scalars().all()

    assert sorted(m.name for m in scifi.movies) == ["Alien", "Arrival", "Blade Runner"]
    assert sorted(m.name for m in drama.movies) == ["Parasite", "Whiplash"]


# ---------------------------------------------------------------------------
# 3. Check constraints: violation tests
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field, value",
    [("price", 0), ("price", 1_000_001), ("stock", -1)],
    ids=["price_below_min", "price_above_max", "stock_negative"],
)
async def test_check_constraint_violation(db: AsyncSession, field: str, value: int) -> None:
    category = make_category()
    db.add(category)
    await db.flush()

    product = make_product(category_id=category.id)
    setattr(product, field, value)
    db.add(product)

    with pytest.raises((IntegrityError, DBAPIError)):
        await db.flush()
    await db.rollback()


# ---------------------------------------------------------------------------
# 4. Foreign keys are enforced
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_product_requires_existing_category(db: AsyncSession) -> None:
    db.add(make_product(category_id=999))
    with pytest.raises(IntegrityError):
        await db.flush()
    await db.rollback()


# ---------------------------------------------------------------------------
# 5. Names are not unique
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_duplicate_names_are_allowed(db: AsyncSession) -> None:
    db.add_all([make_category(name="Lamps"), make_category(name="Lamps")])
    await db.commit()

    names = (await db.execute(select(Category.name))).scalars().all()
    assert names == ["Lamps", "Lamps"]
