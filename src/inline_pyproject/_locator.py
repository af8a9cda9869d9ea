"""Scan script text for ``__pyproject__`` blocks."""

import re
from collections.abc import Iterator

from inline_pyproject._ir import BlockMatch, Span

BLOCK_PATTERN = re.compile(
    r'^__pyproject__ *= *"""(\\?)$(.+?)^"""$',
    re.MULTILINE | re.DOTALL,
)


def iter_blocks(text: str) -> Iterator[BlockMatch]:
    """Yield every non-overlapping block in *text*, in order.

    The body is matched non-greedily, so each block ends at the first
    column-0 ``\"\"\"`` line after its opening line.
    """
    for match in BLOCK_PATTERN.finditer(text):
        # group 2 always starts with the newline ending the opening line
        inner_start = match.start(2) + 1
        yield BlockMatch(
            full_span=Span(match.start(), match.end()),
            inner_span=Span(inner_start, match.end(2)),
            has_trailing_backslash=bool(match.group(1)),
            source=text,
        )


def locate(text: str) -> list[BlockMatch]:
    """Return all candidate blocks in *text*."""
    return list(iter_blocks(text))
