"""Domain exceptions raised by services and the pager.

Exception handlers in main.py translate them into the standard
error envelope: {"error": {"code": "...", "message": "..."}}.
Storage errors (sqlalchemy.exc.IntegrityError and friends) are not wrapped;
they propagate as-is and get their own handler.
"""


class DomainError(Exception):
    """Base class for all domain exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with id {identifier} not found")


class PageOutOfRangeError(DomainError):
    """Raised when a page number falls outside the listing."""

    def __init__(self, page: int, total_pages: int) -> None:
        self.page = page
        self.total_pages = total_pages
        super().__init__(f"Page {page} is out of range (1..{max(total_pages, 1)})")


class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state (e.g. duplicate email)."""


class InvalidCredentialsError(DomainError):
    """Raised when login credentials or a security token do not match an account."""


class InvalidUploadError(DomainError):
    """Raised when an uploaded file is rejected before it reaches the disk."""
