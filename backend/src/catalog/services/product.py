"""Product business logic.

Derives the slug and creation date, checks the referenced category, and
picks the page size of each listing. Empty search terms fall back to the
plain listing.
"""

from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.config import settings
from catalog.exceptions import NotFoundError
from catalog.logging import get_logger
from catalog.models import Product
from catalog.pagination import Page
from catalog.repositories.products import categories, products
from catalog.slugs import slugify

logger = get_logger(__name__)


async def _require_category(db: AsyncSession, category_id: int) -> None:
    if not await categories(db).exists(category_id):
        raise NotFoundError("Category", category_id)


async def list_products(db: AsyncSession, page: int) -> Page[Product]:
    return await products(db).get_paged(page, settings.products_page_size)


async def list_products_by_category(db: AsyncSession, category_id: int, page: int) -> Page[Product]:
    await _require_category(db, category_id)
    return await products(db).get_paged_by_parent(category_id, page, settings.products_page_size)


async def search_products(db: AsyncSession, term: str | None, page: int) -> Page[Product]:
    if not term:
        return await list_products(db, page)
    return await products(db).get_paged_by_search(term, page, settings.products_search_page_size)


async def get_product(db: AsyncSession, product_id: int) -> Product:
    product = await products(db).get_by_id(product_id)
    if product is None:
        raise NotFoundError("Product", product_id)
    return product


async def create_product(
    db: AsyncSession,
    *,
    name: str,
    description: str,
    price: int,
    stock: int,
    category_id: int,
) -> Product:
    await _require_category(db, category_id)
    product = Product(
        name=name,
        slug=slugify(name),
        description=description,
        price=price,
        stock=stock,
        date=datetime.now(UTC),
        category_id=category_id,
    )
    product = await products(db).add(product)
    logger.info("product_created", product_id=product.id, category_id=category_id)
    return product


async def update_product(
    db: AsyncSession,
    product_id: int,
    *,
    name: str,
    description: str,
    price: int,
    stock: int,
    category_id: int,
) -> Product:
    product = await get_product(db, product_id)
    await _require_category(db, category_id)
    product.name = name
    product.slug = slugify(name)
    product.description = description
    product.price = price
    product.stock = stock
    product.category_id = category_id
    product = await products(db).update(product)
    logger.info("product_updated", product_id=product.id)
    return product


async def delete_product(db: AsyncSession, product_id: int) -> None:
    """Delete a product. Fails with IntegrityError while images still reference it."""
    if not await products(db).delete(product_id):
        raise NotFoundError("Product", product_id)
    logger.info("product_deleted", product_id=product_id)
