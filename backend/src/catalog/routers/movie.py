"""Movie and movie image endpoints."""

from typing import Annotated

from fastapi import APIRouter, File, Query, UploadFile

from catalog.dependencies import DB, Files
from catalog.schemas.common import CREATED, DELETED, UPDATED, MutationResponse
from catalog.schemas.image import MovieImageResponse
from catalog.schemas.movie import MovieIn, MoviePage, MovieResponse
from catalog.services import movie as movies
from catalog.services.images import MOVIE_GALLERY, add_image, delete_image, list_images

router = APIRouter(prefix="/movies", tags=["movies"])


@router.get("", response_model=MoviePage)
async def list_paged(db: DB, page: int = Query(1, ge=1)) -> MoviePage:
    return MoviePage.model_validate(await movies.list_movies(db, page))


@router.get("/search", response_model=MoviePage)
async def search(db: DB, q: str | None = None, page: int = Query(1, ge=1)) -> MoviePage:
    """Case-sensitive name search; an empty ``q`` returns the plain listing."""
    return MoviePage.model_validate(await movies.search_movies(db, q, page))


@router.post("", response_model=MutationResponse[MovieResponse], status_code=201)
async def create(body: MovieIn, db: DB) -> MutationResponse[MovieResponse]:
    movie = await movies.create_movie(db, **body.model_dump())
    return MutationResponse(data=MovieResponse.model_validate(movie), flash=CREATED)


@router.get("/{movie_id}", response_model=MovieResponse)
async def detail(movie_id: int, db: DB) -> MovieResponse:
    return MovieResponse.model_validate(await movies.get_movie(db, movie_id))


@router.put("/{movie_id}", response_model=MutationResponse[MovieResponse])
async def update(movie_id: int, body: MovieIn, db: DB) -> MutationResponse[MovieResponse]:
    movie = await movies.update_movie(db, movie_id, **body.model_dump())
    return MutationResponse(data=MovieResponse.model_validate(movie), flash=UPDATED)


@router.delete("/{movie_id}", response_model=MutationResponse[None])
async def delete(movie_id: int, db: DB, files: Files) -> MutationResponse[None]:
    await movies.delete_movie(db, files, movie_id)
    return MutationResponse(flash=DELETED)


@router.get("/{movie_id}/images", response_model=list[MovieImageResponse])
async def images(movie_id: int, db: DB) -> list[MovieImageResponse]:
    return [
        MovieImageResponse.model_validate(image)
        for image in await list_images(db, MOVIE_GALLERY, movie_id)
    ]


@router.post("/{movie_id}/images", response_model=MutationResponse[MovieImageResponse], status_code=201)
async def upload_image(
    movie_id: int,
    file: Annotated[UploadFile, File(...)],
    db: DB,
    files: Files,
) -> MutationResponse[MovieImageResponse]:
    image = await add_image(db, files, MOVIE_GALLERY, movie_id, file)
    return MutationResponse(data=MovieImageResponse.model_validate(image), flash=CREATED)


@router.delete("/images/{image_id}", response_model=MutationResponse[MovieImageResponse])
async def remove_image(image_id: int, db: DB, files: Files) -> MutationResponse[MovieImageResponse]:
    image = await delete_image(db, files, MOVIE_GALLERY, image_id)
    return MutationResponse(data=MovieImageResponse.model_validate(image), flash=DELETED)
