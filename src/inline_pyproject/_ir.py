"""Data model for embedded ``__pyproject__`` blocks."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from inline_pyproject._metadata import array_value, project_table, table_value


class Span(NamedTuple):
    """A ``(start, end)`` character range, ``end`` exclusive."""

    start: int
    end: int

    def extract(self, text: str) -> str:
        """Return the substring of *text* covered by this span."""
        return text[self.start : self.end]


@dataclass(frozen=True)
class Position:
    """A location in a script, with 1-based line and column."""

    offset: int
    line: int
    column: int

    @classmethod
    def at(cls, text: str, offset: int) -> "Position":
        """Compute the line and column of *offset* within *text*."""
        line_start = text.rfind("\n", 0, offset) + 1
        return cls(
            offset=offset,
            line=text.count("\n", 0, offset) + 1,
            column=offset - line_start + 1,
        )

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True)
class BlockMatch:
    """One ``__pyproject__ = \"\"\"...\"\"\"`` region found in a script.

    ``full_span`` covers the assignment line through the closing delimiter.
    ``inner_span`` covers the lines strictly between the delimiter lines.
    """

    full_span: Span
    inner_span: Span
    has_trailing_backslash: bool = False
    source: str = field(default="", repr=False, compare=False)

    @property
    def inner_text(self) -> str:
        return self.inner_span.extract(self.source)

    @property
    def block_text(self) -> str:
        return self.full_span.extract(self.source)

    @property
    def position(self) -> Position:
        """Position of the assignment token."""
        return Position.at(self.source, self.full_span.start)

    @property
    def inner_position(self) -> Position:
        return Position.at(self.source, self.inner_span.start)


@dataclass
class ScriptMetadata:
    """Read-only view of the well-known ``[project]`` keys."""

    requires_python: str | None = None
    dependencies: list[str] = field(default_factory=list)
    name: str | None = None
    version: str | None = None
    dynamic: list[str] = field(default_factory=list)
    tool: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_document(cls, document: Mapping[str, Any] | None) -> "ScriptMetadata":
        """Build a view from a decoded metadata document."""
        if not document:
            return cls()
        project = project_table(document)
        return cls(
            requires_python=_plain(project.get("requires-python")),
            dependencies=[
                str(dep) for dep in array_value(project, "dependencies", "project.dependencies")
            ],
            name=_plain(project.get("name")),
            version=_plain(project.get("version")),
            dynamic=[str(key) for key in array_value(project, "dynamic", "project.dynamic")],
            tool=dict(table_value(document, "tool")),
        )


def _plain(value: Any) -> str | None:
    # tomlkit hands back str subclasses
    return None if value is None else str(value)
