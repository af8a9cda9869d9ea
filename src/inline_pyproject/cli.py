"""CLI for inline-pyproject."""

import json
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import typer

from inline_pyproject._codec import TomlCodec, decode_block, get_codec
from inline_pyproject._errors import InlinePyprojectError
from inline_pyproject._metadata import check_dynamic_fields
from inline_pyproject._source import load_script, save_script
from inline_pyproject.editor import (
    add_dependencies,
    find_block,
    remove_dependencies,
    set_requires_python,
    strip_metadata,
)

logger = logging.getLogger(__name__)

app = typer.Typer()

EXIT_ERROR = 1
EXIT_NO_BLOCK = 2

_SCRIPT_HELP = "Path to the script"


def _script_argument() -> Any:
    return typer.Argument(..., exists=True, dir_okay=False, help=_SCRIPT_HELP)


@app.callback()
def main(
    ctx: typer.Context,
    codec: str = typer.Option(
        "tomlkit",
        envvar="INLINE_PYPROJECT_CODEC",
        help="TOML engine: tomlkit (keeps comments) or tomllib",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Inspect and edit __pyproject__ metadata embedded in Python scripts."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    try:
        ctx.obj = get_codec(codec)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--codec") from exc
    logger.debug("using %s codec", ctx.obj.name)


@app.command()
def show(
    ctx: typer.Context,
    script: Path = _script_argument(),
    as_json: bool = typer.Option(False, "--json", help="Print the decoded metadata as JSON"),
) -> None:
    """Print the embedded metadata of a script."""
    with _reporting_errors():
        source = load_script(script)
        match = find_block(source.text)
        if match is None:
            _no_block(script)
        document = decode_block(match, ctx.obj)
    if as_json:
        print(json.dumps(_plain(document), indent=2, default=str))
    else:
        print(match.inner_text, end="")


@app.command()
def check(
    ctx: typer.Context,
    script: Path = _script_argument(),
) -> None:
    """Validate the embedded metadata of a script."""
    with _reporting_errors():
        source = load_script(script)
        match = find_block(source.text)
        if match is None:
            _no_block(script)
        document = decode_block(match, ctx.obj)
        check_dynamic_fields(document)
    print(f"{script}: OK ({match.position})")


@app.command()
def add(
    ctx: typer.Context,
    script: Path = _script_argument(),
    requirements: list[str] = typer.Argument(..., help="Requirements to add"),
) -> None:
    """Add dependencies to the script's metadata, creating the block if needed."""
    codec: TomlCodec = ctx.obj
    _rewrite(script, lambda text: add_dependencies(text, requirements, codec))
    print(f"Added {', '.join(requirements)} to {script}")


@app.command()
def remove(
    ctx: typer.Context,
    script: Path = _script_argument(),
    names: list[str] = typer.Argument(..., help="Package names to remove"),
) -> None:
    """Remove dependencies from the script's metadata."""
    codec: TomlCodec = ctx.obj
    _rewrite(script, lambda text: remove_dependencies(text, names, codec))
    print(f"Removed {', '.join(names)} from {script}")


@app.command("set-python")
def set_python(
    ctx: typer.Context,
    script: Path = _script_argument(),
    specifier: str = typer.Argument(..., help="Version specifier, e.g. '>=3.11'"),
) -> None:
    """Set project.requires-python in the script's metadata."""
    codec: TomlCodec = ctx.obj
    _rewrite(script, lambda text: set_requires_python(text, specifier, codec))
    print(f"Set requires-python = {specifier!r} in {script}")


@app.command()
def strip(
    script: Path = _script_argument(),
) -> None:
    """Remove the metadata block from a script."""
    _rewrite(script, strip_metadata)
    print(f"Stripped metadata from {script}")


def _rewrite(script: Path, edit: Callable[[str], str]) -> None:
    """Apply *edit* to the script text; the file is only written on success."""
    with _reporting_errors():
        source = load_script(script)
        source.text = edit(source.text)
    save_script(script, source)


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Turn library errors into a message on stderr and a non-zero exit."""
    try:
        yield
    except InlinePyprojectError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(EXIT_ERROR) from exc


def _no_block(script: Path) -> None:
    typer.echo(f"{script}: no __pyproject__ block found", err=True)
    raise typer.Exit(EXIT_NO_BLOCK)


def _plain(value: Any) -> Any:
    """Convert tomlkit containers to plain Python values for JSON output."""
    unwrap = getattr(value, "unwrap", None)
    if unwrap is not None:
        return unwrap()
    return value
