"""Movie request/response schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, StringConstraints

from catalog.schemas.common import Name
from catalog.schemas.pagination import PaginatedResponse
from catalog.schemas.thematic import ThematicResponse


class MovieIn(BaseModel):
    name: Name
    description: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    thematic_id: int


class MovieResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    slug: str | None
    description: str
    date: datetime | None
    thematic_id: int
    thematic: ThematicResponse


MoviePage = PaginatedResponse[MovieResponse]
