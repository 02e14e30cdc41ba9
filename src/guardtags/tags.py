"""Guard function metadata tag."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import DEFAULT_ORDER, MIN_SHORTCUT_LENGTH
from .errors import ArgumentInvalidError, ArgumentMissingError


@dataclass(frozen=True, slots=True)
class GuardTag:
    """Metadata attached to one guard function.

    Attributes:
        group: The logical group that the function belongs to.
        shortcut: Optional alias of the function, at least two characters.
        order: Presentation priority of the function along its overloads.

    ``None`` is the absent value of ``group``; omitting the argument is a
    plain ``TypeError`` like any other missing positional argument.
    """

    group: str
    shortcut: str | None = None
    order: int = DEFAULT_ORDER

    def __post_init__(self) -> None:
        _validate_group(self.group)
        if self.shortcut is not None:
            _validate_shortcut(self.shortcut)
        _validate_order(self.order)


def _validate_group(group: object) -> None:
    if group is None:
        raise ArgumentMissingError("group", "Group is required")
    if not isinstance(group, str):
        raise ArgumentInvalidError("group", "Group must be a string")
    if not group.strip():
        raise ArgumentInvalidError("group", "Group cannot be empty or white-space")


def _validate_shortcut(shortcut: object) -> None:
    if not isinstance(shortcut, str):
        raise ArgumentInvalidError("shortcut", "Shortcut must be a string")
    if not shortcut.strip():
        raise ArgumentInvalidError("shortcut", "Shortcut cannot be empty or white-space")
    if len(shortcut) < MIN_SHORTCUT_LENGTH:
        raise ArgumentInvalidError(
            "shortcut",
            f"Shortcut must be at least {MIN_SHORTCUT_LENGTH} characters long",
        )


def _validate_order(order: object) -> None:
    # bool is an int subclass but never a meaningful order.
    if isinstance(order, bool) or not isinstance(order, int):
        raise ArgumentInvalidError("order", "Order must be an integer")
