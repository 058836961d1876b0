from datetime import datetime
from pathlib import Path

import pytest

from promotable.errors import ErrorCode, PersistenceError, PropertiesFormatError
from promotable.properties import (
    parse_properties,
    read_properties,
    serialize_properties,
    write_properties,
)

STAMP = datetime(2026, 10, 18, 12, 0, 0)


def test_serialize_writes_header_timestamp_and_entries_in_order() -> None:
    encoded = serialize_properties(
        {"b.key": "2", "a.key": "1"},
        "Generated by promotable",
        timestamp=STAMP,
    )

    assert encoded.splitlines() == [
        "#Generated by promotable",
        "#Sun Oct 18 12:00:00 2026",
        "b.key=2",
        "a.key=1",
    ]


def test_serialize_escapes_special_characters() -> None:
    encoded = serialize_properties(
        {"a key": " lead=x:y#!", "path": "C:\\build\\out", "text": "caf\u00e9\n"},
        timestamp=STAMP,
    )
    lines = encoded.splitlines()[1:]

    assert lines == [
        "a\\ key=\\ lead\\=x\\:y\\#\\!",
        "path=C\\:\\\\build\\\\out",
        "text=caf\\u00E9\\n",
    ]


def test_parse_handles_comments_separators_and_continuations() -> None:
    raw = "\n".join(
        [
            "# comment",
            "! another comment",
            "",
            "key1 = value1",
            "key2:value2",
            "key3 value3",
            "multi = first \\",
            "        second",
            "empty=",
        ]
    )

    assert parse_properties(raw) == {
        "key1": "value1",
        "key2": "value2",
        "key3": "value3",
        "multi": "first second",
        "empty": "",
    }


def test_serialized_text_parses_back() -> None:
    properties = {
        "a key": " lead=x:y#!",
        "unicode": "caf\u00e9 \U0001d11e",
        "tabs": "a\tb",
        "trailing": "ends with backslash\\",
    }
    assert parse_properties(serialize_properties(properties, "header")) == properties


def test_parse_rejects_malformed_unicode_escape() -> None:
    with pytest.raises(PropertiesFormatError) as excinfo:
        parse_properties("key=\\u12G4")

    assert excinfo.value.code == ErrorCode.PROPERTIES.value


def test_write_and_read_file(tmp_path: Path) -> None:
    path = write_properties({"artifact.id": "g:a:jar:1.0"}, tmp_path / "out.properties", "header")

    assert path.read_bytes().isascii()
    assert read_properties(path) == {"artifact.id": "g:a:jar:1.0"}


def test_write_into_missing_directory_fails(tmp_path: Path) -> None:
    target = tmp_path / "missing" / "out.properties"
    with pytest.raises(PersistenceError) as excinfo:
        write_properties({"k": "v"}, target)

    assert isinstance(excinfo.value.__cause__, OSError)
    assert excinfo.value.context["path"] == str(target)


def test_read_missing_file_fails(tmp_path: Path) -> None:
    with pytest.raises(PersistenceError) as excinfo:
        read_properties(tmp_path / "absent.properties")

    assert excinfo.value.hint is not None


@pytest.mark.parametrize("separator", ["\x0b", "\x0c", "\x1c", "\x85", " "])
def test_parse_only_breaks_lines_on_newline_characters(separator: str) -> None:
    raw = f"k=a{separator}b\r\nother=1\rlast=2\n"
    assert parse_properties(raw) == {"k": f"a{separator}b", "other": "1", "last": "2"}


def test_lone_surrogate_is_written_as_unicode_escape() -> None:
    encoded = serialize_properties({"file": "caf\udce9.jar"}, timestamp=STAMP)

    assert encoded.splitlines()[1] == "file=caf\\uDCE9.jar"
    assert parse_properties(encoded) == {"file": "caf\udce9.jar"}
