"""Errors raised while locating, decoding and re-embedding metadata."""

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inline_pyproject._ir import BlockMatch, Position


class InlinePyprojectError(Exception):
    """Base class for all errors raised by inline_pyproject."""


class NoBlockFoundError(InlinePyprojectError):
    """The script has no ``__pyproject__`` block but one was required."""

    def __init__(self, message: str = "no __pyproject__ block found") -> None:
        super().__init__(message)


class MultipleBlocksError(InlinePyprojectError):
    """More than one ``__pyproject__`` block is present."""

    def __init__(self, matches: Sequence["BlockMatch"]) -> None:
        self.matches = list(matches)
        self.positions = [m.position for m in self.matches]
        where = "; ".join(str(p) for p in self.positions)
        super().__init__(
            f"found {len(self.matches)} __pyproject__ blocks, expected at most one ({where})"
        )


class EmbeddedDelimiterConflictError(InlinePyprojectError):
    """The inner TOML contains a triple double-quote sequence."""

    def __init__(self, position: "Position") -> None:
        self.position = position
        super().__init__(
            f'embedded metadata contains \'"""\' at {position}; '
            "use single-quoted multi-line strings (''') instead"
        )


class TomlSyntaxError(InlinePyprojectError):
    """The inner text is not valid TOML.

    ``position`` is relative to the decoded text when raised by a codec and
    absolute within the script once rebased by ``decode_block``.
    """

    def __init__(self, message: str, position: "Position") -> None:
        self.message = message
        self.position = position
        super().__init__(f"invalid TOML in __pyproject__ block: {message} ({position})")


class UnencodableDocumentError(InlinePyprojectError):
    """A document cannot be serialized safely into the block."""


class DynamicFieldConflictError(InlinePyprojectError):
    """A ``project`` key is both listed in ``dynamic`` and given a value."""

    def __init__(self, fields: Sequence[str]) -> None:
        self.fields = list(fields)
        super().__init__(
            "project fields listed in 'dynamic' must not also be set: "
            + ", ".join(self.fields)
        )


class MetadataTypeError(InlinePyprojectError):
    """A well-known key holds a value of the wrong TOML type."""

    def __init__(self, key: str, expected: str, value: object) -> None:
        self.key = key
        self.expected = expected
        super().__init__(f"'{key}' must be {expected}, got {value!r}")


class ScriptDecodeError(InlinePyprojectError):
    """Script bytes cannot be decoded as text."""
