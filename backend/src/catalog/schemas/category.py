from pydantic import BaseModel

from catalog.schemas.common import ShortName


class CategoryIn(BaseModel):
    name: ShortName


class CategoryResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
