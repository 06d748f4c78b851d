"""Repositories for the Category / Product / ProductImage group."""

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models import Category, Product, ProductImage
from catalog.repositories.base import EntityShape, Repository

CATEGORY = EntityShape(Category)
PRODUCT = EntityShape(Product, parent_key="category_id", search_field="name", eager="category")
PRODUCT_IMAGE = EntityShape(ProductImage, parent_key="product_id", eager="product")


def categories(db: AsyncSession) -> Repository[Category]:
    return Repository(db, CATEGORY)


def products(db: AsyncSession) -> Repository[Product]:
    return Repository(db, PRODUCT)


def product_images(db: AsyncSession) -> Repository[ProductImage]:
    return Repository(db, PRODUCT_IMAGE)
