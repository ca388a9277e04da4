"""Local directory model store for model-viewer.

Raw uploads land in ``upload_dir``; converted documents land in
``models_dir``, which the application serves as static files under
``url_prefix``. Files are named after the upload time in milliseconds.
Nothing is ever cleaned up or deduplicated.
"""

import json
import shutil
import time
from pathlib import Path
from typing import Any, BinaryIO, Literal

from starlette.concurrency import run_in_threadpool

from app.storage.interface import ModelStore

GLTF_SUFFIX = ".gltf"


def timestamp_stem() -> str:
    """Milliseconds since the epoch, used as the file stem of an upload."""
    return str(time.time_ns() // 1_000_000)


class LocalDirModelStore(ModelStore):
    """Model store backed by two local directories."""

    def __init__(
        self,
        upload_dir: str | Path,
        models_dir: str | Path,
        url_prefix: str = "/models",
    ) -> None:
        self._upload_dir = Path(upload_dir)
        self._models_dir = Path(models_dir)
        self._url_prefix = url_prefix.rstrip("/")

    @property
    def backend_name(self) -> Literal["local-dir"]:
        return "local-dir"

    @property
    def models_dir(self) -> Path:
        return self._models_dir

    async def save_upload(self, stream: BinaryIO, suffix: str) -> Path:
        """Copy an upload stream to ``upload_dir/<millis><suffix>``.

        Args:
            stream: Readable binary file object (e.g. ``UploadFile.file``)
            suffix: Extension including the leading dot

        Returns:
            Path of the written file
        """
        return await run_in_threadpool(self._write_upload, stream, suffix)

    def _write_upload(self, stream: BinaryIO, suffix: str) -> Path:
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        path = self._upload_dir / f"{timestamp_stem()}{suffix}"
        with path.open("wb") as out:
            shutil.copyfileobj(stream, out)
        return path

    async def save_model(self, stem: str, document: dict[str, Any]) -> str:
        """Serialize ``document`` to ``models_dir/<stem>.gltf``.

        Returns:
            Public URL of the written file, e.g. ``/models/1700000000000.gltf``
        """
        filename = f"{stem}{GLTF_SUFFIX}"
        await run_in_threadpool(self._write_model, filename, document)
        return f"{self._url_prefix}/{filename}"

    def _write_model(self, filename: str, document: dict[str, Any]) -> None:
        self._models_dir.mkdir(parents=True, exist_ok=True)
        self.path_for(filename).write_text(json.dumps(document), encoding="utf-8")

    def path_for(self, filename: str) -> Path:
        return self._models_dir / Path(filename).name
