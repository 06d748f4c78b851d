"""Image files on local disk.

Files live under ``<root>/<namespace>/`` (namespace is ``products`` or
``movies``). Only the generated file name is stored in the database; there is
no transaction spanning the file write and the insert, so callers write the
file first and insert the record afterwards.
"""

import secrets
import time
from pathlib import Path
from typing import TYPE_CHECKING

from starlette.concurrency import run_in_threadpool

from catalog.exceptions import InvalidUploadError
from catalog.logging import get_logger

if TYPE_CHECKING:
    from fastapi import UploadFile

logger = get_logger(__name__)

ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})

# Chunk size for reading uploads (64 KB)
CHUNK_SIZE_BYTES = 64 * 1024


class FileStore:
    def __init__(self, root: str | Path, max_bytes: int) -> None:
        self.root = Path(root)
        self.max_bytes = max_bytes

    def path_for(self, namespace: str, name: str) -> Path:
        return self.root / namespace / name

    async def save_upload(self, namespace: str, upload: "UploadFile") -> str:
        """Validate and write an uploaded image, returning the stored file name.

        Raises:
            InvalidUploadError: empty upload, disallowed extension, or too large.
        """
        extension = Path(upload.filename or "").suffix.lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise InvalidUploadError(
                f"Unsupported image type '{extension or upload.filename}'. "
                f"Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
            )

        content = await self._read_limited(upload)
        if not content:
            raise InvalidUploadError("Uploaded file is empty")

        name = f"image_{int(time.time())}_{secrets.token_hex(4)}{extension}"
        await run_in_threadpool(self._write, self.path_for(namespace, name), content)
        logger.info("image_stored", namespace=namespace, file=name, size=len(content))
        return name

    async def remove(self, namespace: str, name: str) -> None:
        """Delete a stored file; a file that is already gone is not an error."""
        await run_in_threadpool(self.path_for(namespace, name).unlink, missing_ok=True)
        logger.info("image_removed", namespace=namespace, file=name)

    async def _read_limited(self, upload: "UploadFile") -> bytes:
        chunks: list[bytes] = []
        total = 0
        while chunk := await upload.read(CHUNK_SIZE_BYTES):
            total += len(chunk)
            if total > self.max_bytes:
                raise InvalidUploadError(
                    f"File too large. Maximum size: {self.max_bytes} bytes"
                )
            chunks.append(chunk)
        return b"".join(chunks)

    @staticmethod
    def _write(path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
