"""Enumeration of a guard library's public surface.

Discovery and consistency checks only talk to the ``LibrarySurface``
protocol. ``ModuleSurface`` implements it by introspecting an importable
module or package; ``StaticSurface`` serves an explicit registration table.
"""

from __future__ import annotations

import functools
import importlib
import inspect
import logging
import pkgutil
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Iterable, Protocol, Union, runtime_checkable

from .config import DEFAULT_SCAN_OPTIONS, ScanOptions
from .constants import UNKNOWN_SIGNATURE
from .errors import LibraryLoadError
from .logging_utils import log_event
from .markers import get_tag, is_deprecated, is_non_guard
from .members import MemberFlags, MemberKind, MemberRef, Visibility
from .tags import GuardTag


@runtime_checkable
class LibrarySurface(Protocol):
    """Read-only view of the callable members a library exposes."""

    @property
    def name(self) -> str:
        ...

    def list_members(self) -> list[MemberRef]:
        ...

    def member_visibility(self, member: MemberRef) -> Visibility:
        ...

    def member_flags(self, member: MemberRef) -> MemberFlags:
        ...

    def attached_tag(self, member: MemberRef) -> GuardTag | None:
        ...


LibraryLike = Union[ModuleType, str, LibrarySurface]


@dataclass(frozen=True, slots=True)
class SurfaceEntry:
    """One row of a member registration table."""

    member: MemberRef
    visibility: Visibility = Visibility.PUBLIC
    flags: MemberFlags = MemberFlags.NONE
    tag: GuardTag | None = None


class _EntrySurface:
    """Shared lookups for surfaces backed by a member → entry table."""

    def __init__(self, name: str, entries: dict[MemberRef, SurfaceEntry]) -> None:
        self._name = name
        self._entries = entries

    @property
    def name(self) -> str:
        return self._name

    def _entry(self, member: MemberRef) -> SurfaceEntry:
        try:
            return self._entries[member]
        except KeyError:
            raise KeyError(f"Member is not part of {self._name}: {member}") from None

    def list_members(self) -> list[MemberRef]:
        return sorted(self._entries)

    def member_visibility(self, member: MemberRef) -> Visibility:
        return self._entry(member).visibility

    def member_flags(self, member: MemberRef) -> MemberFlags:
        return self._entry(member).flags

    def attached_tag(self, member: MemberRef) -> GuardTag | None:
        return self._entry(member).tag


class StaticSurface(_EntrySurface):
    """Surface built from an explicit, pre-generated registration table."""

    def __init__(self, name: str, entries: Iterable[SurfaceEntry]) -> None:
        table: dict[MemberRef, SurfaceEntry] = {}
        for entry in entries:
            if entry.member in table:
                raise ValueError(f"Duplicate surface entry: {entry.member}")
            table[entry.member] = entry
        super().__init__(name, table)


class ModuleSurface(_EntrySurface):
    """Surface of an importable module or package, read by introspection."""

    def __init__(self, library: ModuleType | str, options: ScanOptions | None = None) -> None:
        module = _resolve_module(library)
        self.options = options or DEFAULT_SCAN_OPTIONS
        modules = _iter_library_modules(module, self.options)
        collector = _MemberCollector(module.__name__, self.options)
        for submodule in modules:
            collector.visit_module(submodule)
        super().__init__(module.__name__, collector.build())
        log_event(
            "surface_scanned",
            level=logging.DEBUG,
            library=self.name,
            modules=len(modules),
            members=len(self._entries),
        )


def load_surface(library: LibraryLike, options: ScanOptions | None = None) -> LibrarySurface:
    """Return *library* as a surface, introspecting modules and module names."""
    if isinstance(library, (ModuleType, str)):
        return ModuleSurface(library, options)
    if isinstance(library, LibrarySurface):
        return library
    raise TypeError(f"Cannot scan object of type {type(library).__name__}")


def _resolve_module(library: ModuleType | str) -> ModuleType:
    if isinstance(library, ModuleType):
        return library
    try:
        return importlib.import_module(library)
    except ImportError as exc:
        raise LibraryLoadError(f"Failed to import library '{library}': {exc}") from exc


def _iter_library_modules(root: ModuleType, options: ScanOptions) -> list[ModuleType]:
    modules = [root]
    search_path = getattr(root, "__path__", None)
    if search_path is None:
        return modules

    prefix = f"{root.__name__}."
    for info in pkgutil.walk_packages(search_path, prefix=prefix):
        relative_parts = info.name[len(prefix):].split(".")
        if not options.include_private_modules and any(
            part.startswith("_") for part in relative_parts
        ):
            continue
        if options.is_excluded(info.name):
            continue
        try:
            modules.append(importlib.import_module(info.name))
        except ImportError as exc:
            raise LibraryLoadError(f"Failed to import module '{info.name}': {exc}") from exc
    return modules


def _signature(func: Any) -> str:
    try:
        return str(inspect.signature(func))
    except (TypeError, ValueError):
        return UNKNOWN_SIGNATURE


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _overloads(dispatcher: Any) -> list[tuple[Any, Any]]:
    """Return (dispatch type, implementation) pairs other than the base one."""
    registry = getattr(dispatcher, "registry", None)
    if registry is None or not hasattr(dispatcher, "dispatch"):
        return []
    return [(cls, impl) for cls, impl in registry.items() if cls is not object]


def _overload_signature(dispatch_type: Any, impl: Any) -> str:
    # Registrations may share parameter text; the dispatch type tells them apart.
    type_name = getattr(dispatch_type, "__qualname__", None) or repr(dispatch_type)
    return f"[{type_name}]{_signature(impl)}"


# Overload registrations share these flags with their dispatcher.
_DISPATCHER_FLAGS = MemberFlags.INHERITED | MemberFlags.EXCLUDED | MemberFlags.DEPRECATED


def _marker_flags(obj: Any) -> MemberFlags:
    flags = MemberFlags.NONE
    if is_non_guard(obj):
        flags |= MemberFlags.EXCLUDED
    if is_deprecated(obj):
        flags |= MemberFlags.DEPRECATED
    return flags


def _is_public_binding(module: ModuleType, attr_name: str) -> bool:
    if attr_name.startswith("_"):
        return False
    exported = getattr(module, "__all__", None)
    return exported is None or attr_name in exported


class _MemberCollector:
    """Accumulates surface entries while visiting the library's modules."""

    def __init__(self, library_name: str, options: ScanOptions) -> None:
        self.library_name = library_name
        self.options = options
        self.entries: dict[MemberRef, SurfaceEntry] = {}
        # Objects re-exported from several modules are listed once; any
        # public binding makes them public.
        self._bindings: dict[int, tuple[Any, bool]] = {}
        self._origins: dict[MemberRef, Any] = {}

    def _in_library(self, module_name: str | None) -> bool:
        if not module_name:
            return False
        return module_name == self.library_name or module_name.startswith(
            f"{self.library_name}."
        )

    def visit_module(self, module: ModuleType) -> None:
        for attr_name, obj in sorted(vars(module).items()):
            if isinstance(obj, ModuleType):
                continue
            if not (inspect.isclass(obj) or inspect.isroutine(obj)):
                continue
            public = _is_public_binding(module, attr_name)
            _, seen_public = self._bindings.get(id(obj), (obj, False))
            self._bindings[id(obj)] = (obj, seen_public or public)

    def build(self) -> dict[MemberRef, SurfaceEntry]:
        # Registered implementations are listed under their dispatcher.
        overload_ids = {
            id(impl) for obj, _ in self._bindings.values() for _, impl in _overloads(obj)
        }
        for obj, public in self._bindings.values():
            if id(obj) in overload_ids:
                continue
            if inspect.isclass(obj):
                self._add_class(obj, public)
            else:
                self._add_function(obj, public)
        return self.entries

    def _add(self, entry: SurfaceEntry, origin: Any) -> None:
        existing = self.entries.get(entry.member)
        if existing is not None:
            if inspect.unwrap(self._origins[entry.member]) is not inspect.unwrap(origin):
                raise LibraryLoadError(
                    f"Different callables share one member identity: {entry.member}"
                )
            if existing.visibility is Visibility.PUBLIC:
                return
        self.entries[entry.member] = entry
        self._origins[entry.member] = origin

    def _add_function(self, func: Any, public: bool) -> None:
        module_name = getattr(func, "__module__", None)
        name = getattr(func, "__name__", None)
        if not name or (module_name and self.options.is_excluded(module_name)):
            return

        flags = MemberFlags.STATIC | _marker_flags(func)
        if not self._in_library(module_name):
            flags |= MemberFlags.INHERITED
        if _is_dunder(name):
            flags |= MemberFlags.SPECIAL
        visibility = Visibility.PUBLIC if public else Visibility.NONPUBLIC
        owner = module_name or "?"

        self._add(
            SurfaceEntry(
                member=MemberRef(owner, name, _signature(func), MemberKind.FUNCTION),
                visibility=visibility,
                flags=flags,
                tag=get_tag(func),
            ),
            func,
        )
        for dispatch_type, impl in _overloads(func):
            self._add(
                SurfaceEntry(
                    member=MemberRef(
                        owner, name, _overload_signature(dispatch_type, impl), MemberKind.OVERLOAD
                    ),
                    visibility=visibility,
                    flags=MemberFlags.STATIC
                    | _marker_flags(impl)
                    | (flags & _DISPATCHER_FLAGS),
                    tag=get_tag(impl),
                ),
                impl,
            )

    def _add_class(self, cls: type, public: bool) -> None:
        if not self._in_library(cls.__module__):
            return
        owner = f"{cls.__module__}.{cls.__qualname__}"
        if self.options.is_excluded(owner):
            return

        class_public = public and not cls.__name__.startswith("_")
        class_flags = MemberFlags.DEPRECATED if is_deprecated(cls) else MemberFlags.NONE
        is_protocol = bool(getattr(cls, "_is_protocol", False))
        overload_ids = {
            id(impl)
            for raw in vars(cls).values()
            for _, impl in _overloads(getattr(raw, "dispatcher", None))
        }

        for attr_name, raw in vars(cls).items():
            if id(_unwrap(raw)) in overload_ids:
                continue
            resolved = _resolve_class_member(raw)
            if resolved is None:
                continue
            kind, func = resolved

            flags = class_flags | _marker_flags(raw)
            if kind is MemberKind.STATICMETHOD:
                flags |= MemberFlags.STATIC
            elif is_protocol or _is_abstract(raw, func) or _overrides_base(cls, attr_name):
                flags |= MemberFlags.VIRTUAL
            if kind is MemberKind.PROPERTY or _is_dunder(attr_name):
                flags |= MemberFlags.SPECIAL

            visibility = (
                Visibility.PUBLIC
                if class_public and not attr_name.startswith("_")
                else Visibility.NONPUBLIC
            )
            self._add(
                SurfaceEntry(
                    member=MemberRef(owner, attr_name, _signature(func), kind),
                    visibility=visibility,
                    flags=flags,
                    tag=get_tag(raw) or get_tag(func),
                ),
                raw,
            )

            dispatcher = getattr(raw, "dispatcher", None)
            for dispatch_type, impl in _overloads(dispatcher):
                self._add(
                    SurfaceEntry(
                        member=MemberRef(
                            owner,
                            attr_name,
                            _overload_signature(dispatch_type, impl),
                            MemberKind.OVERLOAD,
                        ),
                        visibility=visibility,
                        flags=_marker_flags(impl)
                        | (flags & (MemberFlags.VIRTUAL | _DISPATCHER_FLAGS)),
                        tag=get_tag(impl),
                    ),
                    impl,
                )


def _unwrap(raw: Any) -> Any:
    if isinstance(raw, (staticmethod, classmethod)):
        return raw.__func__
    return raw


def _resolve_class_member(raw: Any) -> tuple[MemberKind, Any] | None:
    if isinstance(raw, staticmethod):
        return MemberKind.STATICMETHOD, raw.__func__
    if isinstance(raw, classmethod):
        return MemberKind.CLASSMETHOD, raw.__func__
    if isinstance(raw, property):
        return MemberKind.PROPERTY, raw.fget
    if isinstance(raw, functools.cached_property):
        return MemberKind.PROPERTY, raw.func
    if isinstance(raw, functools.singledispatchmethod):
        return MemberKind.METHOD, raw.func
    if inspect.isfunction(raw):
        return MemberKind.METHOD, raw
    return None


def _is_abstract(raw: Any, func: Any) -> bool:
    return bool(
        getattr(raw, "__isabstractmethod__", False)
        or getattr(func, "__isabstractmethod__", False)
    )


def _overrides_base(cls: type, attr_name: str) -> bool:
    return any(
        attr_name in vars(base) for base in cls.__mro__[1:] if base is not object
    )
