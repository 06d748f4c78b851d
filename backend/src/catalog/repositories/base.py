"""Generic data-access layer.

One ``Repository`` class serves every entity. What differs between entities
(identity column, parent foreign key, searchable name column, the relation
to attach when loading) is described by an ``EntityShape``; the per-entity
modules only declare shapes and thin constructors.

No business logic, no HTTP concerns, no logging. Writes commit before
returning; storage errors propagate unchanged.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute, selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from catalog.db.session import Base
from catalog.exceptions import NotFoundError
from catalog.pagination import Page, paginate

M = TypeVar("M", bound=Base)


@dataclass(frozen=True)
class EntityShape(Generic[M]):
    """Which columns of ``model`` drive lookups, filtering and ordering.

    ``identity`` doubles as the ordering key: listings are newest first.
    ``parent_key`` names the foreign key column for per-parent listings,
    ``search_field`` the column matched by substring search, and ``eager``
    the many-to-one relation loaded together with every record.
    """

    model: type[M]
    identity: str = "id"
    parent_key: str | None = None
    search_field: str | None = None
    eager: str | None = None

    def column(self, name: str) -> InstrumentedAttribute[Any]:
        return getattr(self.model, name)


class Repository(Generic[M]):
    """Uniform fetch/add/update/delete over one entity shape."""

    def __init__(self, db: AsyncSession, shape: EntityShape[M]) -> None:
        self.db = db
        self.shape = shape

    @property
    def model(self) -> type[M]:
        return self.shape.model

    def _identity(self) -> InstrumentedAttribute[Any]:
        return self.shape.column(self.shape.identity)

    def _load_options(self) -> list[LoaderOption]:
        if self.shape.eager is None:
            return []
        return [selectinload(self.shape.column(self.shape.eager))]

    def query(self, *, parent_id: int | None = None, search: str | None = None) -> Select[tuple[M]]:
        """Build the ordered listing statement, optionally filtered.

        ``search`` is a case-sensitive substring match on the search field; an
        empty or None term adds no filter. ``%`` and ``_`` match literally.
        """
        stmt = select(self.model).options(*self._load_options())
        if parent_id is not None:
            if self.shape.parent_key is None:
                raise TypeError(f"{self.model.__name__} has no parent key")
            stmt = stmt.where(self.shape.column(self.shape.parent_key) == parent_id)
        if search:
            if self.shape.search_field is None:
                raise TypeError(f"{self.model.__name__} has no search field")
            stmt = stmt.where(self.shape.column(self.shape.search_field).contains(search, autoescape=True))
        return stmt.order_by(self._identity().desc())

    async def get_by_id(self, record_id: int) -> M | None:
        """Return the record with this identity, or None when it does not exist."""
        stmt = (
            select(self.model)
            .options(*self._load_options())
            .where(self._identity() == record_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def exists(self, record_id: int) -> bool:
        result = await self.db.execute(select(self._identity()).where(self._identity() == record_id))
        return result.scalar_one_or_none() is not None

    async def get_all(self) -> list[M]:
        result = await self.db.execute(self.query())
        return list(result.scalars().all())

    async def get_all_by_parent(self, parent_id: int) -> list[M]:
        result = await self.db.execute(self.query(parent_id=parent_id))
        return list(result.scalars().all())

    async def get_paged(self, page: int, page_size: int) -> Page[M]:
        return await paginate(self.db, self.query(), page, page_size)

    async def get_paged_by_parent(self, parent_id: int, page: int, page_size: int) -> Page[M]:
        return await paginate(self.db, self.query(parent_id=parent_id), page, page_size)

    async def get_paged_by_search(self, term: str | None, page: int, page_size: int) -> Page[M]:
        """Same as get_paged when ``term`` is empty or None."""
        return await paginate(self.db, self.query(search=term), page, page_size)

    async def add(self, record: M) -> M:
        """Insert ``record`` and commit; the identity is assigned by the database."""
        self.db.add(record)
        await self.db.commit()
        await self._reload(record)
        return record

    async def update(self, record: M) -> M:
        """Write every field of an existing record and commit.

        Raises NotFoundError when the record's identity is no longer stored.
        """
        record_id = getattr(record, self.shape.identity)
        if record_id is None or not await self.exists(record_id):
            raise NotFoundError(self.model.__name__, record_id)
        record = await self.db.merge(record)
        await self.db.commit()
        await self._reload(record)
        return record

    async def delete(self, record_id: int) -> bool:
        """Remove the record and commit. Returns False when there was nothing to remove."""
        record = await self.db.get(self.model, record_id)
        if record is None:
            return False
        await self.db.delete(record)
        await self.db.commit()
        return True

    async def _reload(self, record: M) -> None:
        await self.db.refresh(record)
        if self.shape.eager is not None:
            await self.db.refresh(record, attribute_names=[self.shape.eager])
