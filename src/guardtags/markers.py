"""Decorators that attach guard metadata to library functions.

Guard libraries import this module at runtime, so it depends on the tag type
only. Discovery and consistency checks live in separate modules.
"""

from __future__ import annotations

import functools
import warnings
from typing import Any, Callable, TypeVar

from .constants import (
    DEFAULT_ORDER,
    DEPRECATED_ATTRIBUTE,
    NON_GUARD_ATTRIBUTE,
    TAG_ATTRIBUTE,
)
from .errors import TagConflictError
from .tags import GuardTag

F = TypeVar("F", bound=Callable[..., Any])


def _unwrap_method(obj: Any) -> Any:
    """Return the function behind a staticmethod/classmethod descriptor."""
    if isinstance(obj, (staticmethod, classmethod)):
        return obj.__func__
    return obj


def _describe(obj: Any) -> str:
    module = getattr(obj, "__module__", None) or "?"
    qualname = getattr(obj, "__qualname__", None) or repr(obj)
    return f"{module}.{qualname}"


def guard_function(
    group: str, shortcut: str | None = None, order: int = DEFAULT_ORDER
) -> Callable[[F], F]:
    """Mark a function as a guard of the given group.

    The tag is validated immediately, so a malformed tag fails when the
    decorated module is imported.
    """
    tag = GuardTag(group, shortcut, order)

    def decorate(func: F) -> F:
        target = _unwrap_method(func)
        existing = getattr(target, "__dict__", {}).get(TAG_ATTRIBUTE)
        # functools.wraps copies the wrapped function's tag onto wrappers;
        # only that copied tag may be replaced.
        inherited = getattr(getattr(target, "__wrapped__", None), TAG_ATTRIBUTE, None)
        if existing is not None and existing is not inherited:
            raise TagConflictError(f"{_describe(target)} already carries a guard tag")
        try:
            setattr(target, TAG_ATTRIBUTE, tag)
        except AttributeError as exc:
            raise TypeError(f"Cannot attach a guard tag to {_describe(target)}") from exc
        return func

    return decorate


def non_guard(func: F) -> F:
    """Exclude a public function from the guard coverage contract."""
    setattr(_unwrap_method(func), NON_GUARD_ATTRIBUTE, True)
    return func


def deprecated(reason: str) -> Callable[[F], F]:
    """Mark a function or class as deprecated.

    Functions are wrapped to emit ``DeprecationWarning`` when called. Classes
    are only marked. The ``__deprecated__`` attribute matches PEP 702, so
    objects decorated with ``warnings.deprecated`` are recognised as well.
    """
    if not isinstance(reason, str):
        raise TypeError(f"Expected a deprecation reason string, got {type(reason).__name__}")

    def decorate(obj: F) -> F:
        if isinstance(obj, type):
            setattr(obj, DEPRECATED_ATTRIBUTE, reason)
            return obj

        target = _unwrap_method(obj)

        @functools.wraps(target)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            warnings.warn(reason, DeprecationWarning, stacklevel=2)
            return target(*args, **kwargs)

        setattr(wrapper, DEPRECATED_ATTRIBUTE, reason)
        if isinstance(obj, staticmethod):
            return staticmethod(wrapper)  # type: ignore[return-value]
        if isinstance(obj, classmethod):
            return classmethod(wrapper)  # type: ignore[return-value]
        return wrapper  # type: ignore[return-value]

    return decorate


def get_tag(obj: Any) -> GuardTag | None:
    """Return the guard tag attached to *obj*, if any."""
    tag = getattr(_unwrap_method(obj), TAG_ATTRIBUTE, None)
    return tag if isinstance(tag, GuardTag) else None


def is_non_guard(obj: Any) -> bool:
    return getattr(_unwrap_method(obj), NON_GUARD_ATTRIBUTE, False) is True


def is_deprecated(obj: Any) -> bool:
    return getattr(_unwrap_method(obj), DEPRECATED_ATTRIBUTE, None) is not None
