"""Format conversion for uploaded models.

Dispatches a source file by extension to a converter that produces a glTF
2.0 document. Mesh parsing and glTF encoding are delegated to trimesh.

Policy:
- .obj, .stl: converted
- .dwg: recognised but not implemented (501)
- anything else: unsupported (400)
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import trimesh
from trimesh.exchange.gltf import export_gltf

from app.core.errors import (
    ConversionFailedError,
    FormatNotImplementedError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)

GltfDocument = dict[str, Any]
Converter = Callable[[Path], GltfDocument]

# Formats we know about but cannot convert
NOT_IMPLEMENTED_FORMATS = frozenset({".dwg"})


def _mesh_to_gltf(
    source_path: Path, file_type: str, **load_options: Any
) -> GltfDocument:
    """Load ``source_path`` as a scene and export it as embedded glTF JSON."""
    scene = trimesh.load(
        str(source_path), file_type=file_type, force="scene", **load_options
    )
    if scene.is_empty:
        raise ValueError(f"No geometry found in {source_path.name}")

    files = export_gltf(scene, embed_buffers=True)
    for name, data in files.items():
        if name.endswith(".gltf"):
            return json.loads(data)
    raise ValueError("glTF exporter produced no document")


def convert_obj(source_path: Path) -> GltfDocument:
    # One node per `o` object, named after it; node names are component ids
    return _mesh_to_gltf(
        source_path, "obj", split_objects=True, group_material=False
    )


def convert_stl(source_path: Path) -> GltfDocument:
    return _mesh_to_gltf(source_path, "stl")


class FormatConverter:
    """Extension-keyed converter registry.

    Usage:
        converter = FormatConverter()
        converter.check(".obj")
        document = converter.convert(".obj", Path("uploads/1700000000000.obj"))
    """

    def __init__(self, converters: dict[str, Converter] | None = None) -> None:
        if converters is None:
            converters = {".obj": convert_obj, ".stl": convert_stl}
        self._converters = {ext.lower(): fn for ext, fn in converters.items()}

    @property
    def supported_extensions(self) -> frozenset[str]:
        return frozenset(self._converters)

    def check(self, extension: str) -> Converter:
        """Resolve the converter for ``extension`` without running it.

        Raises:
            FormatNotImplementedError: For recognised but unconvertible formats
            UnsupportedFormatError: For anything else without a converter
        """
        ext = extension.lower()
        converter = self._converters.get(ext)
        if converter is not None:
            return converter
        if ext in NOT_IMPLEMENTED_FORMATS:
            raise FormatNotImplementedError(
                f"{ext.lstrip('.').upper()} conversion not implemented"
            )
        raise UnsupportedFormatError()

    def convert(self, extension: str, source_path: Path) -> GltfDocument:
        """Convert ``source_path`` to a glTF document.

        A single attempt is made. Whatever the converter raises is logged
        and replaced by ConversionFailedError.
        """
        converter = self.check(extension)
        try:
            return converter(source_path)
        except Exception:
            logger.exception(
                "Conversion failed",
                extra={"extension": extension.lower(), "source": str(source_path)},
            )
            raise ConversionFailedError() from None
