"""Model Store module for model-viewer.

Provides the storage abstraction for uploads and converted models.
Only the local-dir backend exists.
"""

from app.storage.interface import ModelStore
from app.storage.local_dir import GLTF_SUFFIX, LocalDirModelStore, timestamp_stem

__all__ = [
    "GLTF_SUFFIX",
    "LocalDirModelStore",
    "ModelStore",
    "timestamp_stem",
]
