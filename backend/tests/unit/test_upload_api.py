"""Tests for the model upload endpoint."""

import re
from pathlib import Path

import pytest

from app.api.dependencies import get_format_converter
from app.core.config import get_settings
from app.services.converter import FormatConverter
from tests.samples import TRIANGLE_OBJ, TRIANGLE_STL


def _upload(name: str, content: bytes) -> dict:
    return {"model": (name, content, "application/octet-stream")}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "filename,content",
    [("plant.obj", TRIANGLE_OBJ), ("valve.stl", TRIANGLE_STL), ("PLANT.OBJ", TRIANGLE_OBJ)],
)
async def test_upload_converts_to_gltf(async_client, filename, content):
    response = await async_client.post("/api/upload", files=_upload(filename, content))

    assert response.status_code == 200
    url = response.json()["url"]
    assert re.fullmatch(r"/models/\d{13}\.gltf", url)

    model = await async_client.get(url)
    assert model.status_code == 200
    document = model.json()
    assert document["asset"]["version"] == "2.0"
    assert len(document["meshes"]) >= 1


@pytest.mark.asyncio
async def test_upload_keeps_raw_file(async_client):
    response = await async_client.post("/api/upload", files=_upload("plant.obj", TRIANGLE_OBJ))
    stem = Path(response.json()["url"]).stem

    raw = Path(get_settings().storage.upload_dir) / f"{stem}.obj"
    assert raw.read_bytes() == TRIANGLE_OBJ


@pytest.mark.asyncio
async def test_upload_dwg_not_implemented(async_client):
    response = await async_client.post("/api/upload", files=_upload("site.dwg", b"AC1032"))

    assert response.status_code == 501
    assert response.json()["error"] == {
        "code": "NOT_IMPLEMENTED",
        "message": "DWG conversion not implemented",
    }


@pytest.mark.asyncio
async def test_upload_unsupported_format(async_client):
    response = await async_client.post("/api/upload", files=_upload("notes.txt", b"hello"))

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "UNSUPPORTED_FORMAT"
    # Rejected before anything is written
    assert not any(Path(get_settings().storage.upload_dir).glob("*"))


@pytest.mark.asyncio
async def test_upload_without_file(async_client):
    response = await async_client.post("/api/upload", data={"other": "value"})

    assert response.status_code == 400
    assert response.json()["error"] == {
        "code": "INVALID_REQUEST",
        "message": "No file uploaded",
    }


@pytest.mark.asyncio
async def test_upload_requires_token(unauthenticated_client):
    response = await unauthenticated_client.post(
        "/api/upload", files=_upload("plant.obj", TRIANGLE_OBJ)
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_conversion_failure_returns_500(app, async_client):
    def broken(path: Path) -> dict:
        raise RuntimeError("corrupt mesh at line 3")

    app.dependency_overrides[get_format_converter] = lambda: FormatConverter(
        {".obj": broken}
    )

    response = await async_client.post("/api/upload", files=_upload("plant.obj", TRIANGLE_OBJ))

    assert response.status_code == 500
    assert response.json()["error"] == {
        "code": "CONVERSION_FAILED",
        "message": "Conversion failed",
    }
