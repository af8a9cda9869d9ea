"""Helpers for the ``[project]`` table of a decoded metadata document."""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from inline_pyproject._errors import DynamicFieldConflictError, MetadataTypeError

_NAME_SEPARATOR = re.compile(r"[><=!~\[;@\s]")


def bare_name(requirement: str) -> str:
    """Return the package name at the front of a requirement string."""
    return _NAME_SEPARATOR.split(requirement, maxsplit=1)[0].strip().lower()


def table_value(
    document: Mapping[str, Any],
    key: str,
    path: str | None = None,
) -> Mapping[str, Any]:
    """Return ``document[key]`` if it is a table, or an empty mapping if absent.

    Raises:
        MetadataTypeError: If the value is not a table.
    """
    value = document.get(key, {})
    if not isinstance(value, Mapping):
        raise MetadataTypeError(path or key, "a table", value)
    return value


def array_value(table: Mapping[str, Any], key: str, path: str | None = None) -> list[Any]:
    """Return ``table[key]`` if it is an array, or an empty list if absent."""
    value = table.get(key, [])
    if not isinstance(value, list):
        raise MetadataTypeError(path or key, "an array", value)
    return value


def project_table(document: Mapping[str, Any]) -> Mapping[str, Any]:
    return table_value(document, "project")


def check_dynamic_fields(document: Mapping[str, Any]) -> None:
    """Fail if a ``project`` key is both dynamic and given a literal value."""
    project = project_table(document)
    dynamic = array_value(project, "dynamic", "project.dynamic")
    conflicts = [str(key) for key in dynamic if key in project and key != "dynamic"]
    if conflicts:
        raise DynamicFieldConflictError(conflicts)


def merge_dependencies(deps: list[str], new: Iterable[str]) -> list[str]:
    """Append requirements from *new* whose package is not already listed.

    An existing requirement for the same package is replaced in place, so
    ``numpy>=2`` supersedes ``numpy``.
    """
    result = list(deps)
    for requirement in new:
        name = bare_name(requirement)
        for index, existing in enumerate(result):
            if bare_name(existing) == name:
                result[index] = requirement
                break
        else:
            result.append(requirement)
    return result


def drop_dependencies(deps: list[str], names: Iterable[str]) -> list[str]:
    """Remove every requirement whose package name is in *names*."""
    dropped = {bare_name(name) for name in names}
    return [dep for dep in deps if bare_name(dep) not in dropped]
