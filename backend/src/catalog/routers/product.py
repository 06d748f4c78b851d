"""Product and product image endpoints."""

from typing import Annotated

from fastapi import APIRouter, File, Query, UploadFile

from catalog.dependencies import DB, Files
from catalog.schemas.common import CREATED, DELETED, UPDATED, MutationResponse
from catalog.schemas.image import ProductImageResponse
from catalog.schemas.product import ProductIn, ProductPage, ProductResponse
from catalog.services import product as products
from catalog.services.images import PRODUCT_GALLERY, add_image, delete_image, list_images

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductPage)
async def list_paged(db: DB, page: int = Query(1, ge=1)) -> ProductPage:
    """Products, newest first, a fixed number per page."""
    return ProductPage.model_validate(await products.list_products(db, page))


@router.get("/search", response_model=ProductPage)
async def search(db: DB, q: str | None = None, page: int = Query(1, ge=1)) -> ProductPage:
    """Case-sensitive name search; an empty ``q`` returns the plain listing."""
    return ProductPage.model_validate(await products.search_products(db, q, page))


@router.post("", response_model=MutationResponse[ProductResponse], status_code=201)
async def create(body: ProductIn, db: DB) -> MutationResponse[ProductResponse]:
    product = await products.create_product(db, **body.model_dump())
    return MutationResponse(data=ProductResponse.model_validate(product), flash=CREATED)


@router.get("/{product_id}", response_model=ProductResponse)
async def detail(product_id: int, db: DB) -> ProductResponse:
    return ProductResponse.model_validate(await products.get_product(db, product_id))


@router.put("/{product_id}", response_model=MutationResponse[ProductResponse])
async def update(product_id: int, body: ProductIn, db: DB) -> MutationResponse[ProductResponse]:
    product = await products.update_product(db, product_id, **body.model_dump())
    return MutationResponse(data=ProductResponse.model_validate(product), flash=UPDATED)


@router.delete("/{product_id}", response_model=MutationResponse[None])
async def delete(product_id: int, db: DB) -> MutationResponse[None]:
    await products.delete_product(db, product_id)
    return MutationResponse(flash=DELETED)


@router.get("/{product_id}/images", response_model=list[ProductImageResponse])
async def images(product_id: int, db: DB) -> list[ProductImageResponse]:
    return [
        ProductImageResponse.model_validate(image)
        for image in await list_images(db, PRODUCT_GALLERY, product_id)
    ]


@router.post(
    "/{product_id}/images",
    response_model=MutationResponse[ProductImageResponse],
    status_code=201,
)
async def upload_image(
    product_id: int,
    file: Annotated[UploadFile, File(...)],
    db: DB,
    files: Files,
) -> MutationResponse[ProductImageResponse]:
    image = await add_image(db, files, PRODUCT_GALLERY, product_id, file)
    return MutationResponse(data=ProductImageResponse.model_validate(image), flash=CREATED)


@router.delete("/images/{image_id}", response_model=MutationResponse[ProductImageResponse])
async def remove_image(image_id: int, db: DB, files: Files) -> MutationResponse[ProductImageResponse]:
    image = await delete_image(db, files, PRODUCT_GALLERY, image_id)
    return MutationResponse(data=ProductImageResponse.model_validate(image), flash=DELETED)
