"""Thematic endpoints."""

from fastapi import APIRouter, Query

from catalog.dependencies import DB, Files
from catalog.schemas.common import CREATED, DELETED, UPDATED, MutationResponse
from catalog.schemas.movie import MoviePage
from catalog.schemas.thematic import ThematicIn, ThematicResponse
from catalog.services.movie import list_movies_by_thematic
from catalog.services.thematic import (
    create_thematic,
    delete_thematic,
    get_thematic,
    list_thematics,
    update_thematic,
)

router = APIRouter(prefix="/thematics", tags=["thematics"])


@router.get("", response_model=list[ThematicResponse])
async def list_all(db: DB) -> list[ThematicResponse]:
    return [ThematicResponse.model_validate(t) for t in await list_thematics(db)]


@router.post("", response_model=MutationResponse[ThematicResponse], status_code=201)
async def create(body: ThematicIn, db: DB) -> MutationResponse[ThematicResponse]:
    thematic = await create_thematic(db, name=body.name)
    return MutationResponse(data=ThematicResponse.model_validate(thematic), flash=CREATED)


@router.get("/{thematic_id}", response_model=ThematicResponse)
async def detail(thematic_id: int, db: DB) -> ThematicResponse:
    return ThematicResponse.model_validate(await get_thematic(db, thematic_id))


@router.put("/{thematic_id}", response_model=MutationResponse[ThematicResponse])
async def update(thematic_id: int, body: ThematicIn, db: DB) -> MutationResponse[ThematicResponse]:
    thematic = await update_thematic(db, thematic_id, name=body.name)
    return MutationResponse(data=ThematicResponse.model_validate(thematic), flash=UPDATED)


@router.delete("/{thematic_id}", response_model=MutationResponse[None])
async def delete(thematic_id: int, db: DB, files: Files) -> MutationResponse[None]:
    """Delete a thematic together with its movies and their images."""
    await delete_thematic(db, files, thematic_id)
    return MutationResponse(flash=DELETED)


@router.get("/{thematic_id}/movies", response_model=MoviePage)
async def movies_of_thematic(thematic_id: int, db: DB, page: int = Query(1, ge=1)) -> MoviePage:
    return MoviePage.model_validate(await list_movies_by_thematic(db, thematic_id, page))
