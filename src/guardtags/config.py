"""Scan options and their pyproject.toml loader."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .constants import PYPROJECT_TOOL_TABLE
from .errors import ConfigError

_KNOWN_FIELDS = frozenset({"exclude_prefixes", "include_private_modules"})


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Controls which parts of a library the surface scan visits.

    Attributes:
        exclude_prefixes: Dotted name prefixes of modules and classes to skip,
            e.g. instrumentation injected by coverage tools.
        include_private_modules: Also walk underscore-prefixed submodules.
    """

    exclude_prefixes: tuple[str, ...] = ()
    include_private_modules: bool = False

    def is_excluded(self, dotted_name: str) -> bool:
        return any(
            dotted_name == prefix or dotted_name.startswith(f"{prefix}.")
            for prefix in self.exclude_prefixes
        )


DEFAULT_SCAN_OPTIONS = ScanOptions()


def _require_string_list(table: dict[str, Any], field_name: str) -> tuple[str, ...]:
    value = table.get(field_name, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{field_name} must be a list of strings")
    if any(not item.strip() for item in value):
        raise ConfigError(f"{field_name} cannot contain empty entries")
    return tuple(item.strip() for item in value)


def _require_bool(table: dict[str, Any], field_name: str, default: bool) -> bool:
    value = table.get(field_name, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{field_name} must be a boolean")
    return value


def scan_options_from_table(table: dict[str, Any]) -> ScanOptions:
    """Validate a ``[tool.guardtags]`` table and build scan options."""
    unknown = sorted(set(table) - _KNOWN_FIELDS)
    if unknown:
        raise ConfigError(f"Unknown guardtags option(s): {', '.join(unknown)}")

    return ScanOptions(
        exclude_prefixes=_require_string_list(table, "exclude_prefixes"),
        include_private_modules=_require_bool(table, "include_private_modules", False),
    )


def load_scan_options(path: str | Path) -> ScanOptions:
    """Load scan options from a pyproject.toml file.

    A file without a ``[tool.guardtags]`` table yields default options.

    Raises:
        ConfigError: If the file cannot be read or holds invalid values
    """
    pyproject_path = Path(path)
    try:
        with pyproject_path.open("rb") as fh:
            data = tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"Failed to read config file: {pyproject_path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {exc}") from exc

    table = data.get("tool", {}).get(PYPROJECT_TOOL_TABLE)
    if table is None:
        return DEFAULT_SCAN_OPTIONS
    if not isinstance(table, dict):
        raise ConfigError(f"[tool.{PYPROJECT_TOOL_TABLE}] must be a table")
    return scan_options_from_table(table)
