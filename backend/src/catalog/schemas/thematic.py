from pydantic import BaseModel

from catalog.schemas.common import ShortName


class ThematicIn(BaseModel):
    name: ShortName


class ThematicResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    slug: str | None
