"""Upload pipeline: receive a file, convert it, store the glTF, return a URL."""

import logging
from pathlib import PurePath
from typing import BinaryIO

from starlette.concurrency import run_in_threadpool

from app.services.converter import FormatConverter
from app.storage import ModelStore

logger = logging.getLogger(__name__)


class ModelService:
    """Ties the format converter to the model store."""

    def __init__(self, store: ModelStore, converter: FormatConverter) -> None:
        self._store = store
        self._converter = converter

    async def ingest(self, filename: str, stream: BinaryIO) -> str:
        """Convert an uploaded model and return its public URL.

        The extension of ``filename`` selects the converter. Unsupported
        formats are rejected before anything is written.

        Raises:
            UnsupportedFormatError: Extension has no converter
            FormatNotImplementedError: Extension is known but not convertible
            ConversionFailedError: The converter raised
        """
        extension = PurePath(filename).suffix.lower()
        self._converter.check(extension)

        raw_path = await self._store.save_upload(stream, extension)
        document = await run_in_threadpool(self._converter.convert, extension, raw_path)
        url = await self._store.save_model(raw_path.stem, document)

        logger.info(
            "Model converted",
            extra={"source": filename, "extension": extension, "url": url},
        )
        return url
