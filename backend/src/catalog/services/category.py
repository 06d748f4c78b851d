"""Category business logic."""

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.exceptions import NotFoundError
from catalog.logging import get_logger
from catalog.models import Category
from catalog.repositories.products import categories

logger = get_logger(__name__)


async def list_categories(db: AsyncSession) -> list[Category]:
    return await categories(db).get_all()


async def get_category(db: AsyncSession, category_id: int) -> Category:
    category = await categories(db).get_by_id(category_id)
    if category is None:
        raise NotFoundError("Category", category_id)
    return category


async def create_category(db: AsyncSession, *, name: str) -> Category:
    category = await categories(db).add(Category(name=name))
    logger.info("category_created", category_id=category.id)
    return category


async def rename_category(db: AsyncSession, category_id: int, *, name: str) -> Category:
    category = await get_category(db, category_id)
    category.name = name
    category = await categories(db).update(category)
    logger.info("category_updated", category_id=category.id)
    return category


async def delete_category(db: AsyncSession, category_id: int) -> None:
    """Delete a category. Fails with IntegrityError while products still reference it."""
    if not await categories(db).delete(category_id):
        raise NotFoundError("Category", category_id)
    logger.info("category_deleted", category_id=category_id)
