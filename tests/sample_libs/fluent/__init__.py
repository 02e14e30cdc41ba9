"""Sample fluent guard library whose metadata is complete."""

from .arguments import Argument, ListArgument, StringArgument
from .numbers import in_range, positive

__all__ = ["Argument", "ListArgument", "StringArgument", "in_range", "positive"]
