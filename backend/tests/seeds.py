"""Reusable seed data fixtures for integration tests.

Insertion order fixes the ids: products 1..7 and movies 1..5, so every
listing (newest first) starts from the highest id.
"""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import make_category, make_movie, make_product, make_thematic

PRODUCT_NAMES = {
    "Lamps": ["Red Lamp", "Desk Lamp", "Floor Lamp", "lamp shade"],
    "Chairs": ["Office Chair", "red Chair", "Stool"],
}

MOVIE_NAMES = {
    "Science Fiction": ["Alien", "Blade Runner", "Arrival"],
    "Drama": ["Whiplash", "Parasite"],
}


@pytest_asyncio.fixture
async def seeded_db(db: AsyncSession) -> AsyncSession:
    """Seed 2 categories with 7 products and 2 thematics with 5 movies."""
    lamps, chairs = make_category(name="Lamps"), make_category(name="Chairs")
    scifi, drama = make_thematic(name="Science Fiction"), make_thematic(name="Drama")
    db.add_all([lamps, chairs, scifi, drama])
    await db.flush()

    for category in (lamps, chairs):
        for name in PRODUCT_NAMES[category.name]:
            db.add(make_product(category_id=category.id, name=name))
            await db.flush()

    for thematic in (scifi, drama):
        for name in MOVIE_NAMES[thematic.name]:
            db.add(make_movie(thematic_id=thematic.id, name=name))
            await db.flush()

    await db.commit()
    return db
