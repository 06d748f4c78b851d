"""Movie business logic."""

from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.config import settings
from catalog.exceptions import NotFoundError
from catalog.logging import get_logger
from catalog.models import Movie
from catalog.pagination import Page
from catalog.repositories.movies import movie_images, movies, thematics
from catalog.slugs import slugify
from catalog.storage import FileStore

logger = get_logger(__name__)


async def _require_thematic(db: AsyncSession, thematic_id: int) -> None:
    if not await thematics(db).exists(thematic_id):
        raise NotFoundError("Thematic", thematic_id)


async def list_movies(db: AsyncSession, page: int) -> Page[Movie]:
    return await movies(db).get_paged(page, settings.movies_page_size)


async def list_movies_by_thematic(db: AsyncSession, thematic_id: int, page: int) -> Page[Movie]:
    await _require_thematic(db, thematic_id)
    return await movies(db).get_paged_by_parent(thematic_id, page, settings.movies_page_size)


async def search_movies(db: AsyncSession, term: str | None, page: int) -> Page[Movie]:
    if not term:
        return await list_movies(db, page)
    return await movies(db).get_paged_by_search(term, page, settings.movies_page_size)


async def get_movie(db: AsyncSession, movie_id: int) -> Movie:
    movie = await movies(db).get_by_id(movie_id)
    if movie is None:
        raise NotFoundError("Movie", movie_id)
    return movie


async def create_movie(db: AsyncSession, *, name: str, description: str, thematic_id: int) -> Movie:
    await _require_thematic(db, thematic_id)
    movie = Movie(
        name=name,
        slug=slugify(name),
        description=description,
        date=datetime.now(UTC),
        thematic_id=thematic_id,
    )
    movie = await movies(db).add(movie)
    logger.info("movie_created", movie_id=movie.id, thematic_id=thematic_id)
    return movie


async def update_movie(
    db: AsyncSession, movie_id: int, *, name: str, description: str, thematic_id: int
) -> Movie:
    movie = await get_movie(db, movie_id)
    await _require_thematic(db, thematic_id)
    movie.name = name
    movie.slug = slugify(name)
    movie.description = description
    movie.thematic_id = thematic_id
    movie = await movies(db).update(movie)
    logger.info("movie_updated", movie_id=movie.id)
    return movie


async def delete_movie(db: AsyncSession, files: FileStore, movie_id: int) -> None:
    """Delete a movie; its images go with it (database cascade, then files)."""
    images = await movie_images(db).get_all_by_parent(movie_id)
    if not await movies(db).delete(movie_id):
        raise NotFoundError("Movie", movie_id)
    for image in images:
        await files.remove("movies", image.name)
    logger.info("movie_deleted", movie_id=movie_id, images_removed=len(images))
