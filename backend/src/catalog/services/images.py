"""Image galleries attached to products and movies.

Both galleries behave the same way; a ``Gallery`` describes where the files
go and which repositories hold the parent and image records. The file is
written before the image row is inserted, and removed after the row is
deleted.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.db.session import Base
from catalog.exceptions import NotFoundError
from catalog.logging import get_logger
from catalog.models import ImageRecord, MovieImage, ProductImage
from catalog.repositories.base import Repository
from catalog.repositories.movies import movie_images, movies
from catalog.repositories.products import product_images, products
from catalog.storage import FileStore

if TYPE_CHECKING:
    from fastapi import UploadFile

logger = get_logger(__name__)

P = TypeVar("P", bound=Base)
I = TypeVar("I", bound=ImageRecord)


@dataclass(frozen=True)
class Gallery(Generic[P, I]):
    namespace: str
    parent_label: str
    parents: Callable[[AsyncSession], Repository[P]]
    images: Callable[[AsyncSession], Repository[I]]
    build: Callable[[str, int], I]


PRODUCT_GALLERY = Gallery(
    namespace="products",
    parent_label="Product",
    parents=products,
    images=product_images,
    build=lambda name, parent_id: ProductImage(name=name, product_id=parent_id),
)

MOVIE_GALLERY = Gallery(
    namespace="movies",
    parent_label="Movie",
    parents=movies,
    images=movie_images,
    build=lambda name, parent_id: MovieImage(name=name, movie_id=parent_id),
)


async def _require_parent(
    db: AsyncSession, gallery: Gallery[P, I], parent_id: int
) -> None:
    if not await gallery.parents(db).exists(parent_id):
        raise NotFoundError(gallery.parent_label, parent_id)


async def list_images(
    db: AsyncSession, gallery: Gallery[P, I], parent_id: int
) -> list[I]:
    await _require_parent(db, gallery, parent_id)
    return await gallery.images(db).get_all_by_parent(parent_id)


async def add_image(
    db: AsyncSession,
    files: FileStore,
    gallery: Gallery[P, I],
    parent_id: int,
    upload: "UploadFile",
) -> I:
    await _require_parent(db, gallery, parent_id)
    name = await files.save_upload(gallery.namespace, upload)
    try:
        image = await gallery.images(db).add(gallery.build(name, parent_id))
    except Exception:
        await files.remove(gallery.namespace, name)
        raise
    logger.info("image_added", gallery=gallery.namespace, parent_id=parent_id, image_id=image.id)
    return image


async def delete_image(
    db: AsyncSession, files: FileStore, gallery: Gallery[P, I], image_id: int
) -> I:
    """Delete the image row, then its file. Returns the removed record."""
    repository = gallery.images(db)
    image = await repository.get_by_id(image_id)
    if image is None:
        raise NotFoundError(f"{gallery.parent_label}Image", image_id)
    await repository.delete(image_id)
    await files.remove(gallery.namespace, image.name)
    logger.info("image_deleted", gallery=gallery.namespace, image_id=image_id)
    return image
