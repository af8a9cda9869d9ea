"""Tests for reading and writing script files."""

from pathlib import Path

import pytest

from conftest import MINIMAL_SCRIPT
from inline_pyproject._errors import ScriptDecodeError
from inline_pyproject._source import (
    ScriptSource,
    decode_script,
    encode_script,
    load_script,
    save_script,
)
from inline_pyproject.editor import add_dependencies, find_block


class TestDecodeScript:
    """Tests for decode_script."""

    def test_utf8_default(self) -> None:
        source = decode_script("x = 'héllo'\n".encode())
        assert source.text == "x = 'héllo'\n"
        assert source.encoding == "utf-8"
        assert source.newline == "\n"

    def test_encoding_declaration(self) -> None:
        raw = "# -*- coding: latin-1 -*-\nx = 'café'\n".encode("latin-1")
        source = decode_script(raw)
        assert source.encoding in {"latin-1", "iso-8859-1"}
        assert "café" in source.text

    def test_crlf_normalised(self) -> None:
        raw = MINIMAL_SCRIPT.replace("\n", "\r\n").encode()
        source = decode_script(raw)
        assert source.newline == "\r\n"
        assert source.text == MINIMAL_SCRIPT
        assert find_block(source.text) is not None


    def test_mixed_line_endings_use_majority(self) -> None:
        source = decode_script(b"a\r\nb\nc\nd\n")
        assert source.newline == "\n"
        assert source.text == "a\nb\nc\nd\n"

    def test_invalid_utf8(self) -> None:
        with pytest.raises(ScriptDecodeError, match="cannot decode script") as exc_info:
            decode_script(b"x = 1\ny = '\xff'\n")
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_unknown_encoding_declaration(self) -> None:
        with pytest.raises(ScriptDecodeError) as exc_info:
            decode_script(b"# -*- coding: no-such-codec -*-\nx = 1\n")
        assert isinstance(exc_info.value.__cause__, SyntaxError)


class TestEncodeScript:
    """Tests for encode_script."""

    def test_restores_crlf(self) -> None:
        source = ScriptSource(text="a\nb\n", newline="\r\n")
        assert encode_script(source) == b"a\r\nb\r\n"

    def test_uses_declared_encoding(self) -> None:
        source = ScriptSource(text="x = 'café'\n", encoding="latin-1")
        assert encode_script(source) == "x = 'café'\n".encode("latin-1")

    def test_unchanged_mixed_endings_are_byte_identical(self) -> None:
        raw = b"a\r\nb\nc\r\nd\n"
        assert encode_script(decode_script(raw)) == raw

    def test_edit_keeps_line_endings_outside_the_change(self) -> None:
        raw = (MINIMAL_SCRIPT + "x = 1\r\ny = 2\n").encode()
        source = decode_script(raw)
        source.text = add_dependencies(source.text, ["numpy"])
        result = encode_script(source)
        assert result.endswith(b'"""\nimport requests\nx = 1\r\ny = 2\n')
        assert b'"numpy"' in result
        assert b"\r\n" not in result[: result.index(b"import requests")]

    def test_crlf_edit_inserting_lines(self) -> None:
        raw = b"import os\r\nprint(1)\r\n"
        source = decode_script(raw)
        source.text = add_dependencies(source.text, ["rich"])
        result = encode_script(source)
        assert result.endswith(b'"""\r\n\r\nimport os\r\nprint(1)\r\n')
        assert b"\n" not in result.replace(b"\r\n", b"")


class TestLoadSave:
    """Tests for load_script and save_script."""

    def test_roundtrip_is_byte_identical(self, tmp_path: Path) -> None:
        path = tmp_path / "script.py"
        raw = "# coding: latin-1\r\nx = 'café'\r\n".encode("latin-1")
        path.write_bytes(raw)
        save_script(path, load_script(path))
        assert path.read_bytes() == raw

    def test_utf8_bom(self, tmp_path: Path) -> None:
        path = tmp_path / "script.py"
        raw = b"\xef\xbb\xbf" + MINIMAL_SCRIPT.encode()
        path.write_bytes(raw)
        source = load_script(path)
        assert source.text == MINIMAL_SCRIPT
        save_script(path, source)
        assert path.read_bytes() == raw
