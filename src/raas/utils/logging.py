"""
Project metadata lookups used by the logging stack.

The JSON formatter stamps every record with the service name and version. Both
come from the installed distribution when available (containers, wheels) and
from the nearest `pyproject.toml` otherwise (editable checkouts).
"""

import tomllib
from functools import lru_cache
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any

_MISSING = object()


def find_pyproject(start: Path | str | None = None, max_up: int = 5) -> Path | None:
    """Walk up from `start` (default: this file) looking for pyproject.toml."""
    current = Path(start or __file__).resolve()
    if current.is_file():
        current = current.parent

    for _ in range(max_up + 1):
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        if current.parent == current:
            break
        current = current.parent
    return None


@lru_cache(maxsize=8)
def _load_cached(path: str) -> dict[str, Any]:
    with open(path, "rb") as fh:
        return tomllib.load(fh)


def load_pyproject_data(start: Path | str | None = None, max_up: int = 5) -> dict[str, Any]:
    """Parsed pyproject.toml, or an empty dict when none is found or it cannot be parsed."""
    path = find_pyproject(start, max_up)
    if path is None:
        return {}
    try:
        return _load_cached(str(path))
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def get_pyproject_value(dotted_key: str, start: Path | str | None = None, max_up: int = 5,
                        default: Any = None) -> Any:
    """
    Look up a dotted key such as "project.name".

    Returns `default` when any segment is missing.
    """
    node: Any = load_pyproject_data(start, max_up)
    for part in dotted_key.split("."):
        if not isinstance(node, dict):
            return default
        node = node.get(part, _MISSING)
        if node is _MISSING:
            return default
    return node


def get_project_name(start: Path | str | None = None, max_up: int = 5, default: str | None = "raas") -> str | None:
    return get_pyproject_value("project.name", start=start, max_up=max_up, default=default)


def get_project_version(
    start: Path | str | None = None,
    max_up: int = 5,
    default: str = "unknown",
    prefer_installed: bool = True,
) -> str:
    """
    Version of the running project.

    The installed distribution wins when `prefer_installed` is set; pyproject's
    `project.version` is the fallback, then `default`.
    """
    name = get_project_name(start=start, max_up=max_up, default=None)
    if prefer_installed and name:
        try:
            return importlib_metadata.version(name)
        except importlib_metadata.PackageNotFoundError:
            pass

    value = get_pyproject_value("project.version", start=start, max_up=max_up, default=None)
    return value if value is not None else default


__all__ = [
    "find_pyproject",
    "load_pyproject_data",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
