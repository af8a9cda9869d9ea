"""Read and edit the ``__pyproject__`` block of a script.

Every function takes the full script text and returns new text; the script
is re-scanned on each call.
"""

import ast
import io
import re
from collections.abc import Callable, Iterable

from inline_pyproject._codec import (
    MetadataDocument,
    TomlCodec,
    TomlkitCodec,
    decode_block,
    encode_document,
)
from inline_pyproject._errors import NoBlockFoundError
from inline_pyproject._ir import BlockMatch
from inline_pyproject._locator import locate
from inline_pyproject._metadata import (
    array_value,
    drop_dependencies,
    merge_dependencies,
    project_table,
    table_value,
)
from inline_pyproject._splicer import render_block, replace_inner, splice
from inline_pyproject._validator import validate

_CODING_LINE = re.compile(r"^[ \t\f]*#.*?coding[:=][ \t]*[-\w.]+")


def find_block(source: str) -> BlockMatch | None:
    """Locate the script's block, or None if it has none."""
    return validate(locate(source))


def read_metadata(source: str, codec: TomlCodec | None = None) -> MetadataDocument | None:
    """Decode the script's embedded metadata.

    Returns:
        The decoded document, or None if the script has no block.
    """
    match = find_block(source)
    if match is None:
        return None
    return decode_block(match, codec)


def write_metadata(
    source: str,
    document: MetadataDocument,
    codec: TomlCodec | None = None,
) -> str:
    """Replace the script's metadata with *document*.

    If the script has no block, a new one is inserted after any shebang,
    encoding declaration and module docstring.
    """
    inner_text = encode_document(document, codec)
    match = find_block(source)
    if match is not None:
        return replace_inner(match, inner_text)
    return _insert_block(source, render_block(inner_text))


def edit_metadata(
    source: str,
    func: Callable[[MetadataDocument], None],
    codec: TomlCodec | None = None,
) -> str:
    """Apply *func* to the decoded metadata and write the result back.

    Scripts without a block start from an empty document.
    """
    match = find_block(source)
    if match is None:
        document = (codec or TomlkitCodec()).decode("")
    else:
        document = decode_block(match, codec)
    func(document)
    return write_metadata(source, document, codec)


def add_dependencies(
    source: str,
    requirements: Iterable[str],
    codec: TomlCodec | None = None,
) -> str:
    """Add requirements to ``project.dependencies``.

    A requirement for an already-listed package replaces the existing entry.
    """
    requirements = list(requirements)

    def _add(document: MetadataDocument) -> None:
        project = _project(document)
        if "dependencies" not in project:
            project["dependencies"] = []
        deps = array_value(project, "dependencies", "project.dependencies")
        merged = merge_dependencies([str(d) for d in deps], requirements)
        # edit in place so a tomlkit array keeps its layout
        for index, requirement in enumerate(merged):
            if index < len(deps):
                if deps[index] != requirement:
                    deps[index] = requirement
            else:
                deps.append(requirement)

    return edit_metadata(source, _add, codec)


def remove_dependencies(
    source: str,
    names: Iterable[str],
    codec: TomlCodec | None = None,
) -> str:
    """Remove requirements for the named packages from ``project.dependencies``."""
    names = list(names)

    def _remove(document: MetadataDocument) -> None:
        deps = array_value(project_table(document), "dependencies", "project.dependencies")
        if not deps:
            return
        kept = set(drop_dependencies([str(d) for d in deps], names))
        # delete in place so a tomlkit array keeps its layout
        for index in reversed(range(len(deps))):
            if str(deps[index]) not in kept:
                del deps[index]

    _require_block(source)
    return edit_metadata(source, _remove, codec)


def set_requires_python(source: str, specifier: str, codec: TomlCodec | None = None) -> str:
    """Set ``project.requires-python``."""

    def _set(document: MetadataDocument) -> None:
        _project(document)["requires-python"] = specifier

    return edit_metadata(source, _set, codec)


def strip_metadata(source: str) -> str:
    """Remove the block and the newline following it.

    Raises:
        NoBlockFoundError: If the script has no block.
    """
    match = _require_block(source)
    start, end = match.full_span
    if source.startswith("\n", end):
        end += 1
    return splice(source, (start, end), "")


def _require_block(source: str) -> BlockMatch:
    match = find_block(source)
    if match is None:
        raise NoBlockFoundError()
    return match


def _project(document: MetadataDocument) -> MetadataDocument:
    """Return the ``project`` table, creating it if needed."""
    if "project" not in document:
        document["project"] = {}
    # re-read: tomlkit converts the assigned dict into a table
    return table_value(document, "project")


def _insert_block(source: str, block: str) -> str:
    """Insert *block* after the script's header lines."""
    offset, separate = _insertion_point(source)
    prefix, rest = source[:offset], source[offset:]
    if prefix and not prefix.endswith("\n"):
        prefix += "\n"
    if separate:
        prefix += "\n"
    suffix = "\n" if not rest or rest.startswith("\n") else "\n\n"
    return prefix + block + suffix + rest


def _insertion_point(source: str) -> tuple[int, bool]:
    """Return the offset to insert at and whether to leave a blank line before it.

    The block goes after a shebang, an encoding declaration, the module
    docstring and any ``from __future__`` imports, which must stay first.
    """
    # split on "\n" only so line numbers agree with ast
    lines = io.StringIO(source).readlines()
    end_line = 0
    for index, line in enumerate(lines[:2]):
        if (index == 0 and line.startswith("#!")) or _CODING_LINE.match(line):
            end_line = index + 1
        else:
            break

    try:
        tree = ast.parse(source)
    except SyntaxError:
        tree = None
    separate = False
    if tree is not None:
        body = list(tree.body)
        if ast.get_docstring(tree, clean=False) is not None:
            end_line = max(body.pop(0).end_lineno or 0, end_line)
            separate = True
        for node in body:
            if not (isinstance(node, ast.ImportFrom) and node.module == "__future__"):
                break
            end_line = max(node.end_lineno or 0, end_line)
            separate = True
    return sum(len(line) for line in lines[:end_line]), separate
