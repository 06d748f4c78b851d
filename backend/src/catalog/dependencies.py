"""Shared FastAPI dependencies.

Type aliases routers import. Defined here (not in main.py) to avoid
circular imports when routers are registered in main.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.config import settings
from catalog.db.session import get_db
from catalog.storage import FileStore


def get_file_store() -> FileStore:
    """Image store rooted at the configured upload directory."""
    return FileStore(settings.upload_dir, settings.max_upload_bytes)


DB = Annotated[AsyncSession, Depends(get_db)]
Files = Annotated[FileStore, Depends(get_file_store)]
