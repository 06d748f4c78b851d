"""Product request/response schemas.

ProductResponse nests the owning category, which the repository loads
together with every product.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from catalog.schemas.category import CategoryResponse
from catalog.schemas.common import Name
from catalog.schemas.pagination import PaginatedResponse


class ProductIn(BaseModel):
    name: Name
    description: str = ""
    price: int = Field(ge=1, le=1_000_000)
    stock: int = Field(default=0, ge=0)
    category_id: int


class ProductResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    slug: str | None
    description: str
    price: int
    stock: int
    date: datetime | None
    category_id: int
    category: CategoryResponse


ProductPage = PaginatedResponse[ProductResponse]
