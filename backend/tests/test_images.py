"""Integration tests for product image uploads."""

import io

import pytest
from fastapi import UploadFile
from httpx import AsyncClient, Response
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.repositories.base import Repository
from catalog.services.images import PRODUCT_GALLERY, add_image
from catalog.storage import FileStore

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


async def upload(client: AsyncClient, product_id: int, filename: str = "lamp.png", content: bytes = PNG_BYTES) -> Response:
    return await client.post(
        f"/products/{product_id}/images",
        files={"file": (filename, content, "image/png")},
    )


@pytest.mark.asyncio
async def test_upload_lists_and_stores_file(
    client: AsyncClient, seeded_db: AsyncSession, files: FileStore
) -> None:
    resp = await upload(client, 2)
    assert resp.status_code == 201
    image = resp.json()["data"]
    assert image["product_id"] == 2
    assert image["name"].startswith("image_")
    assert image["name"].endswith(".png")

    stored = files.path_for("products", image["name"])
    assert stored.read_bytes() == PNG_BYTES

    listing = (await client.get("/products/2/images")).json()
    assert [i["id"] for i in listing] == [image["id"]]


@pytest.mark.asyncio
async def test_images_are_listed_newest_first(client: AsyncClient, seeded_db: AsyncSession) -> None:
    first = (await upload(client, 1, "a.jpg")).json()["data"]
    second = (await upload(client, 1, "b.webp")).json()["data"]
    assert first["name"] != second["name"]

    listing = (await client.get("/products/1/images")).json()
    assert [i["id"] for i in listing] == [second["id"], first["id"]]
    assert (await client.get("/products/2/images")).json() == []


@pytest.mark.asyncio
async def test_delete_image_removes_file(
    client: AsyncClient, seeded_db: AsyncSession, files: FileStore
) -> None:
    image = (await upload(client, 3)).json()["data"]

    resp = await client.delete(f"/products/images/{image['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == image["name"]
    assert not files.path_for("products", image["name"]).exists()
    assert (await client.get("/products/3/images")).json() == []

    assert (await client.delete(f"/products/images/{image['id']}")).status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("filename", "content"),
    [("notes.txt", b"hello"), ("no_extension", PNG_BYTES), ("empty.png", b""), ("huge.png", b"\x00" * 2048)],
    ids=["bad_extension", "no_extension", "empty", "too_large"],
)
async def test_invalid_upload_returns_400(
    client: AsyncClient, seeded_db: AsyncSession, files: FileStore, filename: str, content: bytes
) -> None:
    resp = await upload(client, 1, filename, content)
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "invalid_upload"
    assert not (files.root / "products").exists() or not any((files.root / "products").iterdir())


@pytest.mark.asyncio
async def test_upload_to_missing_product_returns_404(client: AsyncClient, seeded_db: AsyncSession) -> None:
    resp = await upload(client, 42)
    assert resp.status_code == 404
    assert (await client.get("/products/42/images")).status_code == 404


@pytest.mark.asyncio
async def test_product_with_images_cannot_be_deleted(client: AsyncClient, seeded_db: AsyncSession) -> None:
    await upload(client, 4)

    resp = await client.delete("/products/4")
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "storage_conflict"
    assert (await client.get("/products/4")).status_code == 200


@pytest.mark.asyncio
async def test_failed_insert_removes_stored_file(
    seeded_db: AsyncSession, files: FileStore, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def failing_add(self: Repository, record: object) -> object:
        raise RuntimeError("insert failed")

    monkeypatch.setattr(Repository, "add", failing_add)
    upload_file = UploadFile(file=io.BytesIO(PNG_BYTES), filename="lamp.png")

    with pytest.raises(RuntimeError, match="insert failed"):
        await add_image(seeded_db, files, PRODUCT_GALLERY, 1, upload_file)

    assert list((files.root / "products").iterdir()) == []
