"""Replace one span of a script, leaving everything else untouched."""

from inline_pyproject._ir import BlockMatch, Span

BLOCK_OPENING = '__pyproject__ = """\n'
BLOCK_CLOSING = '"""'


def splice(original: str, span: Span | tuple[int, int], replacement: str) -> str:
    """Return *original* with ``original[start:end]`` replaced.

    Characters before ``start`` and from ``end`` onward are copied as-is.
    """
    start, end = span
    if not 0 <= start <= end <= len(original):
        raise ValueError(f"span {start}:{end} is outside a text of length {len(original)}")
    return original[:start] + replacement + original[end:]


def replace_inner(match: BlockMatch, inner_text: str) -> str:
    """Substitute *inner_text* for the inner span of *match*."""
    return splice(match.source, match.inner_span, inner_text)


def render_block(inner_text: str) -> str:
    """Build a complete block around already-encoded inner text.

    The result carries no newline after the closing delimiter.
    """
    if inner_text and not inner_text.endswith("\n"):
        inner_text += "\n"
    return BLOCK_OPENING + inner_text + BLOCK_CLOSING
