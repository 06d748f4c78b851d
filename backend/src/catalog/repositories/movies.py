"""Repositories for the Thematic / Movie / MovieImage group."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models import Movie, MovieImage, Thematic
from catalog.repositories.base import EntityShape, Repository

THEMATIC = EntityShape(Thematic)
MOVIE = EntityShape(Movie, parent_key="thematic_id", search_field="name", eager="thematic")
MOVIE_IMAGE = EntityShape(MovieImage, parent_key="movie_id", eager="movie")


def thematics(db: AsyncSession) -> Repository[Thematic]:
    return Repository(db, THEMATIC)


def movies(db: AsyncSession) -> Repository[Movie]:
    return Repository(db, MOVIE)


def movie_images(db: AsyncSession) -> Repository[MovieImage]:
    return Repository(db, MOVIE_IMAGE)


async def image_names_by_thematic(db: AsyncSession, thematic_id: int) -> list[str]:
    """Return file names of every image attached to a movie of this thematic."""
    stmt = (
        select(MovieImage.name)
        .join(Movie, MovieImage.movie_id == Movie.id)
        .where(Movie.thematic_id == thematic_id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())
