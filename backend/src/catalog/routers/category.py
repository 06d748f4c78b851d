"""Category endpoints."""

from fastapi import APIRouter, Query

from catalog.dependencies import DB
from catalog.schemas.category import CategoryIn, CategoryResponse
from catalog.schemas.common import CREATED, DELETED, UPDATED, MutationResponse
from catalog.schemas.product import ProductPage
from catalog.services.category import (
    create_category,
    delete_category,
    get_category,
    list_categories,
    rename_category,
)
from catalog.services.product import list_products_by_category

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_all(db: DB) -> list[CategoryResponse]:
    """All categories, newest first."""
    return [CategoryResponse.model_validate(c) for c in await list_categories(db)]


@router.post("", response_model=MutationResponse[CategoryResponse], status_code=201)
async def create(body: CategoryIn, db: DB) -> MutationResponse[CategoryResponse]:
    category = await create_category(db, name=body.name)
    return MutationResponse(data=CategoryResponse.model_validate(category), flash=CREATED)


@router.get("/{category_id}", response_model=CategoryResponse)
async def detail(category_id: int, db: DB) -> CategoryResponse:
    return CategoryResponse.model_validate(await get_category(db, category_id))


@router.put("/{category_id}", response_model=MutationResponse[CategoryResponse])
async def update(category_id: int, body: CategoryIn, db: DB) -> MutationResponse[CategoryResponse]:
    category = await rename_category(db, category_id, name=body.name)
    return MutationResponse(data=CategoryResponse.model_validate(category), flash=UPDATED)


@router.delete("/{category_id}", response_model=MutationResponse[None])
async def delete(category_id: int, db: DB) -> MutationResponse[None]:
    await delete_category(db, category_id)
    return MutationResponse(flash=DELETED)


@router.get("/{category_id}/products", response_model=ProductPage)
async def products_of_category(category_id: int, db: DB, page: int = Query(1, ge=1)) -> ProductPage:
    """Products of one category, paged, newest first."""
    return ProductPage.model_validate(await list_products_by_category(db, category_id, page))
