"""Reduce located blocks to at most one well-formed block."""

from collections.abc import Sequence

from inline_pyproject._errors import EmbeddedDelimiterConflictError, MultipleBlocksError
from inline_pyproject._ir import BlockMatch, Position

_TRIPLE_QUOTE = '"""'


def validate(matches: Sequence[BlockMatch], *, check: bool = True) -> BlockMatch | None:
    """Return the single block in *matches*, or None if there is none.

    Raises:
        MultipleBlocksError: If more than one block was found.
        EmbeddedDelimiterConflictError: If *check* is set and the block's
            inner text contains a triple double-quote.
    """
    if not matches:
        return None
    if len(matches) > 1:
        raise MultipleBlocksError(matches)
    match = matches[0]
    if check:
        check_delimiters(match)
    return match


def check_delimiters(match: BlockMatch) -> None:
    """Fail if the inner text would terminate the enclosing string early."""
    index = match.inner_text.find(_TRIPLE_QUOTE)
    if index != -1:
        offset = match.inner_span.start + index
        raise EmbeddedDelimiterConflictError(Position.at(match.source, offset))
