"""Thematic business logic.

Deleting a thematic cascades in the database to its movies and their
images; the image files are removed from disk once the delete committed.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.exceptions import NotFoundError
from catalog.logging import get_logger
from catalog.models import Thematic
from catalog.repositories.movies import image_names_by_thematic, thematics
from catalog.slugs import slugify
from catalog.storage import FileStore

logger = get_logger(__name__)


async def list_thematics(db: AsyncSession) -> list[Thematic]:
    return await thematics(db).get_all()


async def get_thematic(db: AsyncSession, thematic_id: int) -> Thematic:
    thematic = await thematics(db).get_by_id(thematic_id)
    if thematic is None:
        raise NotFoundError("Thematic", thematic_id)
    return thematic


async def create_thematic(db: AsyncSession, *, name: str) -> Thematic:
    thematic = await thematics(db).add(Thematic(name=name, slug=slugify(name)))
    logger.info("thematic_created", thematic_id=thematic.id)
    return thematic


async def update_thematic(db: AsyncSession, thematic_id: int, *, name: str) -> Thematic:
    thematic = await get_thematic(db, thematic_id)
    thematic.name = name
    thematic.slug = slugify(name)
    thematic = await thematics(db).update(thematic)
    logger.info("thematic_updated", thematic_id=thematic.id)
    return thematic


async def delete_thematic(db: AsyncSession, files: FileStore, thematic_id: int) -> None:
    image_names = await image_names_by_thematic(db, thematic_id)
    if not await thematics(db).delete(thematic_id):
        raise NotFoundError("Thematic", thematic_id)
    for name in image_names:
        await files.remove("movies", name)
    logger.info("thematic_deleted", thematic_id=thematic_id, images_removed=len(image_names))
