"""Guard function metadata and its consistency checks.

Only the tagging API is imported eagerly; guard libraries import this package
at runtime. Discovery and verification are imported from their modules.
"""

from .errors import (
    ArgumentError,
    ArgumentInvalidError,
    ArgumentMissingError,
    GuardTagsError,
    TagConflictError,
)
from .markers import deprecated, get_tag, guard_function, non_guard
from .tags import GuardTag

__all__ = [
    "ArgumentError",
    "ArgumentInvalidError",
    "ArgumentMissingError",
    "GuardTag",
    "GuardTagsError",
    "TagConflictError",
    "deprecated",
    "get_tag",
    "guard_function",
    "non_guard",
]
