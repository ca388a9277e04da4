"""Model Store interface for model-viewer."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, BinaryIO, Literal


class ModelStore(ABC):
    """Write-once sink for raw uploads and converted glTF documents."""

    @property
    @abstractmethod
    def backend_name(self) -> Literal["local-dir"]:
        """Return the backend identifier."""
        ...

    @abstractmethod
    async def save_upload(self, stream: BinaryIO, suffix: str) -> Path:
        """Persist a raw upload and return where it was written."""
        ...

    @abstractmethod
    async def save_model(self, stem: str, document: dict[str, Any]) -> str:
        """Persist a glTF document and return its public URL."""
        ...

    @abstractmethod
    def path_for(self, filename: str) -> Path:
        """Return the on-disk location of a converted model file."""
        ...
