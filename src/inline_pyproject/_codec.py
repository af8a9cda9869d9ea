"""TOML decode/encode adapters for the inner text of a block."""

import re
import tomllib
from collections.abc import Callable, MutableMapping
from typing import Any, Protocol

import tomlkit
from tomlkit.exceptions import ParseError, TOMLKitError

from inline_pyproject._errors import TomlSyntaxError, UnencodableDocumentError
from inline_pyproject._ir import BlockMatch, Position

MetadataDocument = MutableMapping[str, Any]

_TOMLLIB_POSITION = re.compile(r"\s*\(at line (\d+), column (\d+)\)$")
_TOMLLIB_END = re.compile(r"\s*\(at end of document\)$")
_TOMLKIT_POSITION = re.compile(r" at line \d+ col \d+$")


class TomlCodec(Protocol):
    """A TOML engine usable by the adapter."""

    name: str

    def decode(self, text: str) -> MetadataDocument:
        """Parse *text*, raising TomlSyntaxError relative to *text*."""
        ...

    def encode(self, document: MetadataDocument) -> str:
        """Serialize *document* to TOML text."""
        ...


class TomlkitCodec:
    """Lossless codec: comments, ordering and whitespace survive a round-trip."""

    name = "tomlkit"

    def decode(self, text: str) -> MetadataDocument:
        try:
            return tomlkit.parse(text)
        except ParseError as exc:
            message = _TOMLKIT_POSITION.sub("", str(exc))
            # tomlkit counts lines with str.splitlines() and columns from 0
            position = _relative(text, exc.line, exc.col + 1, text.splitlines())
            raise TomlSyntaxError(message, position) from exc
        except TOMLKitError as exc:
            # raised without a location, e.g. for a repeated key
            raise TomlSyntaxError(str(exc), Position.at(text, 0)) from exc

    def encode(self, document: MetadataDocument) -> str:
        return tomlkit.dumps(document)


class TomllibCodec:
    """Decodes to plain dicts with the standard library; encodes with tomlkit."""

    name = "tomllib"

    def decode(self, text: str) -> MetadataDocument:
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise _from_tomllib(text, exc) from exc

    def encode(self, document: MetadataDocument) -> str:
        return tomlkit.dumps(document)


CODECS: dict[str, Callable[[], TomlCodec]] = {
    TomlkitCodec.name: TomlkitCodec,
    TomllibCodec.name: TomllibCodec,
}


def get_codec(name: str = TomlkitCodec.name) -> TomlCodec:
    """Return a new codec instance by name."""
    try:
        return CODECS[name]()
    except KeyError:
        choices = ", ".join(sorted(CODECS))
        raise ValueError(f"unknown TOML codec {name!r} (choose from {choices})") from None


def decode_block(match: BlockMatch, codec: TomlCodec | None = None) -> MetadataDocument:
    """Decode the inner text of *match*.

    Syntax errors are re-raised with positions pointing into the whole script.
    """
    codec = codec or TomlkitCodec()
    try:
        return codec.decode(match.inner_text)
    except TomlSyntaxError as exc:
        offset = match.inner_span.start + exc.position.offset
        raise TomlSyntaxError(exc.message, Position.at(match.source, offset)) from exc


def encode_document(document: MetadataDocument, codec: TomlCodec | None = None) -> str:
    """Encode *document* as inner text ready to be spliced into a block.

    Raises:
        UnencodableDocumentError: If the encoder rejects the document or its
            output contains a triple double-quote.
    """
    codec = codec or TomlkitCodec()
    try:
        text = codec.encode(document)
    except (TypeError, ValueError) as exc:
        raise UnencodableDocumentError(f"cannot encode metadata as TOML: {exc}") from exc
    index = text.find('"""')
    if index != -1:
        where = Position.at(text, index)
        raise UnencodableDocumentError(
            f'encoded metadata contains \'"""\' at {where}, which would end the block early'
        )
    if text and not text.endswith("\n"):
        text += "\n"
    return text


def _relative(
    text: str,
    line: int,
    column: int,
    lines: list[str] | None = None,
) -> Position:
    """Convert a 1-based line/column in *text* to a Position.

    *lines* is *text* split the way the parser counted lines, each taken to
    end in a one-character terminator. By default lines are split at newlines.
    """
    if lines is None:
        lines = text.split("\n")
    offset = sum(len(chunk) + 1 for chunk in lines[: max(line - 1, 0)]) + column - 1
    offset = max(0, min(offset, len(text)))
    return Position.at(text, offset)


def _from_tomllib(text: str, exc: tomllib.TOMLDecodeError) -> TomlSyntaxError:
    lineno = getattr(exc, "lineno", None)
    colno = getattr(exc, "colno", None)
    message = getattr(exc, "msg", None) or str(exc)
    if lineno is not None and colno is not None:
        return TomlSyntaxError(message, _relative(text, lineno, colno))
    found = _TOMLLIB_POSITION.search(message)
    if found:
        message = message[: found.start()]
        return TomlSyntaxError(message, _relative(text, int(found.group(1)), int(found.group(2))))
    message = _TOMLLIB_END.sub("", message)
    return TomlSyntaxError(message, Position.at(text, len(text)))
