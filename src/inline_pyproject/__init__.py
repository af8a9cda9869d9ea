"""Locate, decode and edit ``__pyproject__`` metadata blocks embedded in scripts."""

from inline_pyproject._codec import (
    MetadataDocument,
    TomlCodec,
    TomlkitCodec,
    TomllibCodec,
    decode_block,
    encode_document,
    get_codec,
)
from inline_pyproject._errors import (
    DynamicFieldConflictError,
    EmbeddedDelimiterConflictError,
    InlinePyprojectError,
    MetadataTypeError,
    MultipleBlocksError,
    NoBlockFoundError,
    ScriptDecodeError,
    TomlSyntaxError,
    UnencodableDocumentError,
)
from inline_pyproject._ir import BlockMatch, Position, ScriptMetadata, Span
from inline_pyproject._locator import iter_blocks, locate
from inline_pyproject._metadata import check_dynamic_fields
from inline_pyproject._splicer import render_block, replace_inner, splice
from inline_pyproject._validator import check_delimiters, validate
from inline_pyproject.editor import (
    add_dependencies,
    edit_metadata,
    find_block,
    read_metadata,
    remove_dependencies,
    set_requires_python,
    strip_metadata,
    write_metadata,
)

__all__ = [
    "BlockMatch",
    "DynamicFieldConflictError",
    "EmbeddedDelimiterConflictError",
    "InlinePyprojectError",
    "MetadataDocument",
    "MetadataTypeError",
    "MultipleBlocksError",
    "NoBlockFoundError",
    "Position",
    "ScriptDecodeError",
    "ScriptMetadata",
    "Span",
    "TomlCodec",
    "TomlSyntaxError",
    "TomlkitCodec",
    "TomllibCodec",
    "UnencodableDocumentError",
    "add_dependencies",
    "check_delimiters",
    "check_dynamic_fields",
    "decode_block",
    "edit_metadata",
    "encode_document",
    "find_block",
    "get_codec",
    "iter_blocks",
    "locate",
    "read_metadata",
    "remove_dependencies",
    "render_block",
    "replace_inner",
    "set_requires_python",
    "splice",
    "strip_metadata",
    "validate",
    "write_metadata",
]
