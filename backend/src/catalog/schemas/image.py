from pydantic import BaseModel


class ProductImageResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    product_id: int


class MovieImageResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    movie_id: int
