"""SQLAlchemy models.

Two parallel entity groups (Category/Product/ProductImage and
Thematic/Movie/MovieImage) plus User. Delete behaviour of each parent
relation is declared on the foreign key:

- Category -> Product and Product -> ProductImage restrict (the parent
  cannot be removed while children exist).
- Thematic -> Movie and Movie -> MovieImage cascade in the database.
"""

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.db.session import Base

# Identities are never handed out twice, SQLite included.
SQLITE_AUTOINCREMENT = {"sqlite_autoincrement": True}


class UserStatus(enum.IntEnum):
    PENDING = 0
    ACTIVE = 1


class Category(Base):
    __tablename__ = "categories"
    __table_args__ = SQLITE_AUTOINCREMENT

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))

    # passive_deletes="all": the ORM never touches children on delete, the
    # foreign key decides.
    products: Mapped[list["Product"]] = relationship(
        back_populates="category", passive_deletes="all"
    )


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 1 AND price <= 1000000", name="price_range"),
        CheckConstraint("stock >= 0", name="stock_non_negative"),
        SQLITE_AUTOINCREMENT,
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(150))
    slug: Mapped[str | None] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, default="")
    price: Mapped[int]
    stock: Mapped[int] = mapped_column(default=0)
    date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="RESTRICT"), index=True
    )

    category: Mapped["Category"] = relationship(back_populates="products")
    images: Mapped[list["ProductImage"]] = relationship(
        back_populates="product", passive_deletes="all"
    )


class ImageRecord(Base):
    """Columns shared by product and movie images; ``name`` is the stored file name."""

    __abstract__ = True

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))


class ProductImage(ImageRecord):
    __tablename__ = "product_images"
    __table_args__ = SQLITE_AUTOINCREMENT

    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="RESTRICT"), index=True
    )

    product: Mapped["Product"] = relationship(back_populates="images")


class Thematic(Base):
    __tablename__ = "thematics"
    __table_args__ = SQLITE_AUTOINCREMENT

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    slug: Mapped[str | None] = mapped_column(String(150))

    # passive_deletes=True: the database cascade removes the rows, the ORM
    # does not load them first.
    movies: Mapped[list["Movie"]] = relationship(
        back_populates="thematic", cascade="all, delete-orphan", passive_deletes=True
    )


class Movie(Base):
    __tablename__ = "movies"
    __table_args__ = SQLITE_AUTOINCREMENT

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(150))
    slug: Mapped[str | None] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)
    date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    thematic_id: Mapped[int] = mapped_column(
        ForeignKey("thematics.id", ondelete="CASCADE"), index=True
    )

    thematic: Mapped["Thematic"] = relationship(back_populates="movies")
    images: Mapped[list["MovieImage"]] = relationship(
        back_populates="movie", cascade="all, delete-orphan", passive_deletes=True
    )


class MovieImage(ImageRecord):
    __tablename__ = "movie_images"
    __table_args__ = SQLITE_AUTOINCREMENT

    movie_id: Mapped[int] = mapped_column(ForeignKey("movies.id", ondelete="CASCADE"), index=True)

    movie: Mapped["Movie"] = relationship(back_populates="images")


class User(Base):
    __tablename__ = "users"
    __table_args__ = SQLITE_AUTOINCREMENT

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(254), index=True)
    # SHA-256 hex digest
    password: Mapped[str] = mapped_column(String(64))
    status: Mapped[int] = mapped_column(default=UserStatus.PENDING)
    token: Mapped[str] = mapped_column(String(100), default="")
