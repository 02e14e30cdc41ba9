"""Consistency checks over a guard library's metadata.

Two invariants are verified:

* coverage: every eligible public member carries a guard tag;
* shortcut uniqueness: each shortcut belongs to exactly one method name.
  Overloads that share a method name may reuse one shortcut.

Checks return every violation found instead of raising, so a single run
reports all problems. ``assert_consistent`` turns a failing report into a
``ConsistencyError`` for test suites.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Mapping

from .config import ScanOptions
from .discovery import scan_surface
from .errors import ConsistencyError
from .logging_utils import log_event
from .members import MemberFlags, MemberRef, Visibility
from .surface import LibraryLike, LibrarySurface, load_surface
from .tags import GuardTag

_INELIGIBLE_FLAGS = (
    MemberFlags.INHERITED
    | MemberFlags.VIRTUAL
    | MemberFlags.SPECIAL
    | MemberFlags.EXCLUDED
    | MemberFlags.DEPRECATED
)


@dataclass(frozen=True, slots=True)
class MissingTagViolation:
    """An eligible member without a guard tag."""

    member: MemberRef

    def describe(self) -> str:
        return f"Missing guard tag: {self.member}"


@dataclass(frozen=True, slots=True)
class ShortcutCollisionViolation:
    """A shortcut shared by more than one method name."""

    shortcut: str
    method_names: tuple[str, ...]
    members: tuple[MemberRef, ...]

    def describe(self) -> str:
        return (
            f"Shortcut '{self.shortcut}' is shared by different methods: "
            f"{', '.join(self.method_names)}"
        )


Violation = MissingTagViolation | ShortcutCollisionViolation


@dataclass(frozen=True, slots=True)
class ConsistencyReport:
    library: str
    coverage: tuple[MissingTagViolation, ...]
    shortcuts: tuple[ShortcutCollisionViolation, ...]

    @property
    def ok(self) -> bool:
        return not self.coverage and not self.shortcuts

    @property
    def violations(self) -> tuple[Violation, ...]:
        return (*self.coverage, *self.shortcuts)


def is_eligible(surface: LibrarySurface, member: MemberRef) -> bool:
    if surface.member_visibility(member) is not Visibility.PUBLIC:
        return False
    return not surface.member_flags(member) & _INELIGIBLE_FLAGS


def eligible_members(surface: LibrarySurface) -> list[MemberRef]:
    """Public members declared by the library that must carry a tag."""
    return [member for member in surface.list_members() if is_eligible(surface, member)]


def _coverage_violations(
    surface: LibrarySurface, tags: Mapping[MemberRef, GuardTag]
) -> list[MissingTagViolation]:
    eligible = eligible_members(surface)
    violations = [MissingTagViolation(member) for member in eligible if member not in tags]
    log_event(
        "coverage_checked",
        level=logging.WARNING if violations else logging.INFO,
        library=surface.name,
        eligible=len(eligible),
        violations=len(violations),
    )
    return violations


def check_coverage(
    library: LibraryLike, options: ScanOptions | None = None
) -> list[MissingTagViolation]:
    """Report every eligible member that carries no guard tag."""
    surface = load_surface(library, options)
    return _coverage_violations(surface, scan_surface(surface))


def check_shortcut_uniqueness(
    tags: Mapping[MemberRef, GuardTag],
) -> list[ShortcutCollisionViolation]:
    """Report every shortcut whose carriers span more than one method name.

    Only exact shortcut text is compared; case variants and shortcuts reused
    across groups are not collisions.
    """
    by_shortcut: dict[str, dict[str, list[MemberRef]]] = defaultdict(lambda: defaultdict(list))
    for member, tag in tags.items():
        if tag.shortcut is None:
            continue
        by_shortcut[tag.shortcut][member.name].append(member)

    violations: list[ShortcutCollisionViolation] = []
    for shortcut in sorted(by_shortcut):
        names = by_shortcut[shortcut]
        if len(names) <= 1:
            continue
        violations.append(
            ShortcutCollisionViolation(
                shortcut=shortcut,
                method_names=tuple(sorted(names)),
                members=tuple(sorted(m for carriers in names.values() for m in carriers)),
            )
        )

    log_event(
        "shortcuts_checked",
        level=logging.WARNING if violations else logging.INFO,
        shortcuts=len(by_shortcut),
        violations=len(violations),
    )
    return violations


def verify(library: LibraryLike, options: ScanOptions | None = None) -> ConsistencyReport:
    """Run both checks against one snapshot of the library's surface."""
    started = time.perf_counter()
    surface = load_surface(library, options)
    tags = scan_surface(surface)
    report = ConsistencyReport(
        library=surface.name,
        coverage=tuple(_coverage_violations(surface, tags)),
        shortcuts=tuple(check_shortcut_uniqueness(tags)),
    )
    log_event(
        "verify_complete",
        level=logging.INFO if report.ok else logging.WARNING,
        library=report.library,
        ok=report.ok,
        violations=len(report.violations),
        elapsed_ms=round((time.perf_counter() - started) * 1000, 3),
    )
    return report


def assert_consistent(library: LibraryLike, options: ScanOptions | None = None) -> ConsistencyReport:
    """Raise ``ConsistencyError`` listing all violations, or return the report."""
    report = verify(library, options)
    if not report.ok:
        details = "\n".join(f"  {violation.describe()}" for violation in report.violations)
        raise ConsistencyError(
            f"Guard metadata of {report.library} is inconsistent:\n{details}", report
        )
    return report
