"""Unit tests for FormatConverter."""

import logging
from pathlib import Path

import pytest

from app.core.errors import (
    ConversionFailedError,
    FormatNotImplementedError,
    UnsupportedFormatError,
)
from app.services.converter import FormatConverter, convert_obj, convert_stl
from tests.samples import TRIANGLE_OBJ, TRIANGLE_STL, TWO_OBJECT_OBJ


@pytest.fixture
def obj_file(tmp_path: Path) -> Path:
    path = tmp_path / "part.obj"
    path.write_bytes(TRIANGLE_OBJ)
    return path


@pytest.fixture
def stl_file(tmp_path: Path) -> Path:
    path = tmp_path / "part.stl"
    path.write_bytes(TRIANGLE_STL)
    return path


class TestConverters:

    def test_obj_to_gltf(self, obj_file: Path) -> None:
        document = convert_obj(obj_file)

        assert document["asset"]["version"] == "2.0"
        assert len(document["meshes"]) >= 1

    def test_stl_to_gltf(self, stl_file: Path) -> None:
        document = convert_stl(stl_file)

        assert document["asset"]["version"] == "2.0"
        assert len(document["meshes"]) >= 1

    def test_obj_objects_become_named_nodes(self, tmp_path: Path) -> None:
        source = tmp_path / "plant.obj"
        source.write_bytes(TWO_OBJECT_OBJ)

        document = convert_obj(source)

        names = {node.get("name") for node in document["nodes"]}
        assert {"valve-1", "pipe-2"} <= names
        assert len(document["meshes"]) == 2

    def test_buffers_are_embedded(self, obj_file: Path) -> None:
        document = convert_obj(obj_file)

        for buffer in document["buffers"]:
            assert buffer["uri"].startswith("data:")


class TestDispatch:

    def test_supported_extensions(self) -> None:
        assert FormatConverter().supported_extensions == {".obj", ".stl"}

    @pytest.mark.parametrize("extension", [".obj", ".OBJ", ".stl", ".Stl"])
    def test_check_accepts_known_formats(self, extension: str) -> None:
        assert callable(FormatConverter().check(extension))

    @pytest.mark.parametrize("extension", [".dwg", ".DWG"])
    def test_dwg_not_implemented(self, extension: str) -> None:
        with pytest.raises(FormatNotImplementedError) as exc_info:
            FormatConverter().check(extension)
        assert exc_info.value.status_code == 501
        assert exc_info.value.message == "DWG conversion not implemented"

    @pytest.mark.parametrize("extension", [".fbx", ".txt", ""])
    def test_other_formats_unsupported(self, extension: str) -> None:
        with pytest.raises(UnsupportedFormatError) as exc_info:
            FormatConverter().check(extension)
        assert exc_info.value.status_code == 400

    def test_convert_uses_registered_converter(self, tmp_path: Path) -> None:
        calls = []

        def fake(path: Path) -> dict:
            calls.append(path)
            return {"asset": {"version": "2.0"}, "meshes": []}

        converter = FormatConverter({".ply": fake})
        source = tmp_path / "a.ply"

        assert converter.convert(".PLY", source)["asset"]["version"] == "2.0"
        assert calls == [source]

    def test_converter_exception_becomes_conversion_failed(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        def broken(path: Path) -> dict:
            raise RuntimeError("mesh parser exploded")

        converter = FormatConverter({".obj": broken})

        with caplog.at_level(logging.ERROR, logger="app.services.converter"):
            with pytest.raises(ConversionFailedError) as exc_info:
                converter.convert(".obj", tmp_path / "a.obj")

        assert exc_info.value.message == "Conversion failed"
        assert "mesh parser exploded" not in exc_info.value.message
        assert "mesh parser exploded" in caplog.text

    def test_empty_obj_fails(self, tmp_path: Path) -> None:
        source = tmp_path / "empty.obj"
        source.write_bytes(b"# nothing here\n")

        with pytest.raises(ConversionFailedError):
            FormatConverter().convert(".obj", source)
