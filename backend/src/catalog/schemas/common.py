"""Envelopes shared by every endpoint.

Errors: {"error": {"code": "...", "message": "..."}}, built by the exception
handlers in main.py.

Mutations: {"data": ..., "flash": {"level": "...", "message": "..."}}. The
flash message travels in the response that produced it; nothing is kept
server-side between requests.
"""

from typing import Annotated, Generic, Literal, TypeVar

from pydantic import BaseModel, StringConstraints

# Limits follow the column widths: String(150) for products and movies,
# String(100) for categories, thematics and users.
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=150)]
ShortName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class ErrorDetail(BaseModel):
    """Machine-readable code plus human-readable message."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail


class Flash(BaseModel):
    """One-shot user notice describing the outcome of a mutation."""

    level: Literal["success", "danger"]
    message: str

    @classmethod
    def success(cls, message: str) -> "Flash":
        return cls(level="success", message=message)


CREATED = Flash.success("Record created successfully")
UPDATED = Flash.success("Record updated successfully")
DELETED = Flash.success("Record deleted successfully")


T = TypeVar("T")


class MutationResponse(BaseModel, Generic[T]):
    data: T | None = None
    flash: Flash
