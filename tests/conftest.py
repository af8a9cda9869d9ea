"""Pytest fixtures for inline-pyproject tests."""

from pathlib import Path

import pytest

EXAMPLES_DIR = Path(__file__).parent / "examples"
SCRIPTS_DIR = EXAMPLES_DIR / "scripts"

MINIMAL_SCRIPT = (
    '__pyproject__ = """\n'
    "[project]\n"
    'requires-python = ">=3.11"\n'
    'dependencies = ["requests<3", "rich"]\n'
    '"""\n'
    "import requests\n"
)


def _get_example_files(prefix: str) -> list[Path]:
    """Get all example scripts whose name starts with *prefix*."""
    return sorted(SCRIPTS_DIR.glob(f"{prefix}_*.py"))


VALID_EXAMPLES = _get_example_files("valid")
INVALID_EXAMPLES = _get_example_files("invalid")
PLAIN_EXAMPLES = _get_example_files("plain")


@pytest.fixture(params=VALID_EXAMPLES, ids=lambda p: p.stem)
def valid_example(request: pytest.FixtureRequest) -> Path:
    """Parametrized fixture yielding each script with one well-formed block."""
    return request.param


@pytest.fixture(params=PLAIN_EXAMPLES, ids=lambda p: p.stem)
def plain_example(request: pytest.FixtureRequest) -> Path:
    """Parametrized fixture yielding each script without a block."""
    return request.param


@pytest.fixture
def script_file(tmp_path: Path) -> Path:
    """A writable copy of the minimal script."""
    path = tmp_path / "script.py"
    path.write_text(MINIMAL_SCRIPT)
    return path
