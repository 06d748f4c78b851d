"""Serializable page of results shared by all paged list endpoints."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """HTTP shape of a ``catalog.pagination.Page``.

    ``from_attributes`` lets routers build it straight from the dataclass,
    derived properties included::

        page = await products.list_products(db, page_number)
        return ProductPage.model_validate(page)

    Reuse it per entity with a type parameter, e.g.
    ``ProductPage = PaginatedResponse[ProductResponse]``.
    """

    model_config = {"from_attributes": True}

    items: list[T]
    current_page: int
    items_per_page: int
    total_items: int
    total_pages: int
    has_previous: bool
    has_next: bool
