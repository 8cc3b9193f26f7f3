"""Tests for the read-only JSON navigation layer."""

import io
from pathlib import Path

import pytest

from chesspath.config.json_reader import JsonReader, JsonType
from chesspath.errors import ConfigError

DOC = """
{
    "name": "demo",
    "size": 8,
    "ratio": 0.5,
    "whole": 3.0,
    "enabled": true,
    "missing": null,
    "pieces": [
        {"kind": "rook", "square": "a1"},
        {"kind": "king", "square": "e1"}
    ]
}
"""


@pytest.fixture
def reader() -> JsonReader:
    return JsonReader(DOC)


class TestParsing:
    def test_from_string(self, reader: JsonReader) -> None:
        assert reader.access().type() == JsonType.OBJECT
        assert reader().type() == JsonType.OBJECT

    def test_from_stream(self) -> None:
        assert JsonReader(io.StringIO("[1, 2]")).access().length() == 2

    def test_closed_stream(self) -> None:
        stream = io.StringIO("{}")
        stream.close()
        with pytest.raises(ConfigError, match="bad state"):
            JsonReader(stream)

    def test_invalid_json(self) -> None:
        with pytest.raises(ConfigError, match="Error loading JSON"):
            JsonReader("{not json")

    def test_from_path(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text(DOC, encoding="utf-8")
        assert JsonReader.from_path(path).navigate("name").as_str() == "demo"

    def test_from_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read JSON file"):
            JsonReader.from_path(tmp_path / "absent.json")

    def test_from_path_not_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.json"
        path.write_bytes(b'{"name": "\xff\xfe"}')
        with pytest.raises(ConfigError, match="Cannot read JSON file"):
            JsonReader.from_path(path)


class TestNavigation:
    def test_types(self, reader: JsonReader) -> None:
        root = reader.access()
        assert root["name"].type() == JsonType.STRING
        assert root["size"].type() == JsonType.INTEGER
        assert root["ratio"].type() == JsonType.DOUBLE
        assert root["enabled"].type() == JsonType.BOOLEAN
        assert root["missing"].type() == JsonType.NULL
        assert root["pieces"].type() == JsonType.ARRAY

    def test_navigate_keys_and_indices(self, reader: JsonReader) -> None:
        assert reader.navigate("pieces", 1, "kind").as_str() == "king"

    def test_navigate_empty_path_is_root(self, reader: JsonReader) -> None:
        assert reader.navigate().path == "$"

    def test_path(self, reader: JsonReader) -> None:
        assert reader.navigate("pieces", 0, "square").path == "$.pieces[0].square"

    def test_parent(self, reader: JsonReader) -> None:
        kind = reader.navigate("pieces", 0, "kind")
        assert kind.parent().path == "$.pieces[0]"
        with pytest.raises(ConfigError, match="No parent"):
            reader.access().parent()

    def test_missing_key(self, reader: JsonReader) -> None:
        with pytest.raises(ConfigError, match=r"Missing key 'colour' at \$"):
            reader.navigate("colour")

    def test_index_out_of_range(self, reader: JsonReader) -> None:
        with pytest.raises(ConfigError, match="out of range"):
            reader.navigate("pieces", 2)
        with pytest.raises(ConfigError, match="out of range"):
            reader.navigate("pieces", -1)

    def test_wrong_container(self, reader: JsonReader) -> None:
        with pytest.raises(ConfigError, match="not an array"):
            reader.navigate("name", 0)
        with pytest.raises(ConfigError, match="not an object"):
            reader.navigate("pieces", "kind")

    def test_length(self, reader: JsonReader) -> None:
        assert reader.navigate("pieces").length() == 2
        assert reader.navigate("name").length() == 0

    def test_iteration(self, reader: JsonReader) -> None:
        kinds = [p["kind"].as_str() for p in reader.navigate("pieces")]
        assert kinds == ["rook", "king"]

    def test_object_view(self, reader: JsonReader) -> None:
        obj = reader.navigate("pieces", 0).object()
        assert set(obj) == {"kind", "square"}
        assert obj["square"].as_str() == "a1"
        assert reader.navigate("pieces").object() == {}

    def test_get_and_contains(self, reader: JsonReader) -> None:
        root = reader.access()
        assert "name" in root
        assert "colour" not in root
        assert root.get("colour") is None
        assert root.get("colour", 7) == 7
        assert root.get("size").as_int() == 8


class TestScalars:
    def test_string(self, reader: JsonReader) -> None:
        assert reader.navigate("name").as_str() == "demo"
        with pytest.raises(ConfigError, match=r"Expected string at \$\.size, got integer"):
            reader.navigate("size").as_str()

    def test_int(self, reader: JsonReader) -> None:
        assert reader.navigate("size").as_int() == 8
        assert reader.navigate("whole").as_int() == 3
        assert reader.navigate("enabled").as_int() == 1
        with pytest.raises(ConfigError):
            reader.navigate("ratio").as_int()
        with pytest.raises(ConfigError):
            reader.navigate("name").as_int()

    def test_float(self, reader: JsonReader) -> None:
        assert reader.navigate("ratio").as_float() == 0.5
        assert reader.navigate("size").as_float() == 8.0
        with pytest.raises(ConfigError):
            reader.navigate("enabled").as_float()

    def test_bool(self, reader: JsonReader) -> None:
        assert reader.navigate("enabled").as_bool() is True
        with pytest.raises(ConfigError, match="Expected boolean"):
            reader.navigate("size").as_bool()

    def test_null(self, reader: JsonReader) -> None:
        assert reader.navigate("missing").is_null()
        assert not reader.navigate("name").is_null()
