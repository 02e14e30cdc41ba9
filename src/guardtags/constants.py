"""Literal constants used by guardtags."""

APP_NAME = "guardtags"

TAG_ATTRIBUTE = "__guard_tag__"
NON_GUARD_ATTRIBUTE = "__non_guard__"
# PEP 702 attribute, shared with warnings.deprecated.
DEPRECATED_ATTRIBUTE = "__deprecated__"

MIN_SHORTCUT_LENGTH = 2
DEFAULT_ORDER = 0

UNKNOWN_SIGNATURE = "(...)"

PYPROJECT_TOOL_TABLE = "guardtags"

ERROR_PREFIX = "ERROR:"
VIOLATION_PREFIX = "-"
