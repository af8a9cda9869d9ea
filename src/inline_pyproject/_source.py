"""Reading and writing script files for the CLI."""

import io
import logging
import tokenize
from dataclasses import dataclass, field
from pathlib import Path

from inline_pyproject._errors import ScriptDecodeError

logger = logging.getLogger(__name__)


@dataclass
class ScriptSource:
    """Decoded script text plus what is needed to write it back unchanged.

    ``text`` has CRLF normalised to ``\\n`` and is what callers edit.
    ``original`` is the decoded text as it was on disk.
    """

    text: str
    encoding: str = "utf-8"
    newline: str = "\n"
    original: str = field(default="", repr=False)


def decode_script(raw: bytes) -> ScriptSource:
    """Decode script bytes, honouring a PEP 263 encoding declaration.

    ``newline`` records the line ending most lines use.

    Raises:
        ScriptDecodeError: If the declaration names an unknown encoding or
            the bytes are not valid in the script's encoding.
    """
    try:
        # detect_encoding reports a UTF-8 BOM as "utf-8-sig"
        encoding, _ = tokenize.detect_encoding(io.BytesIO(raw).readline)
        original = raw.decode(encoding)
    except (SyntaxError, UnicodeDecodeError) as exc:
        raise ScriptDecodeError(f"cannot decode script: {exc}") from exc
    crlf = original.count("\r\n")
    newline = "\r\n" if crlf > original.count("\n") - crlf else "\n"
    logger.debug("decoded script as %s with %r line endings", encoding, newline)
    return ScriptSource(
        text=original.replace("\r\n", "\n"),
        encoding=encoding,
        newline=newline,
        original=original,
    )


def encode_script(source: ScriptSource) -> bytes:
    """Encode *source* for writing.

    Only the region of ``text`` that differs from ``original`` takes
    ``newline``; the text around it keeps its bytes as they were read.
    """
    original = source.original
    before = original.replace("\r\n", "\n")
    after = source.text
    head = _common_prefix_length(before, after)
    tail = _common_suffix_length(before, after, min(len(before), len(after)) - head)
    changed = after[head : len(after) - tail]
    if source.newline != "\n":
        changed = changed.replace("\n", source.newline)
    text = (
        original[: _original_offset(original, head)]
        + changed
        + original[_original_offset(original, len(before) - tail) :]
    )
    return text.encode(source.encoding)


def load_script(path: Path) -> ScriptSource:
    """Read *path* into a ScriptSource."""
    logger.debug("reading %s", path)
    return decode_script(path.read_bytes())


def save_script(path: Path, source: ScriptSource) -> None:
    """Write *source* back to *path* with its original encoding and newlines."""
    logger.debug("writing %s", path)
    path.write_bytes(encode_script(source))


def _common_prefix_length(a: str, b: str) -> int:
    limit = min(len(a), len(b))
    index = 0
    while index < limit and a[index] == b[index]:
        index += 1
    return index


def _common_suffix_length(a: str, b: str, limit: int) -> int:
    length = 0
    while length < limit and a[-1 - length] == b[-1 - length]:
        length += 1
    return length


def _original_offset(original: str, offset: int) -> int:
    """Map an offset in the normalised text back into *original*."""
    index = 0
    for _ in range(offset):
        # a CRLF is one character once normalised
        index += 2 if original.startswith("\r\n", index) else 1
    return index
