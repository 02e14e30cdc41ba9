"""Guard catalog built from discovered metadata."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Mapping

from .config import ScanOptions
from .consistency import check_shortcut_uniqueness
from .discovery import scan
from .errors import ConsistencyError
from .members import MemberRef
from .surface import LibraryLike
from .tags import GuardTag


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    member: MemberRef
    shortcut: str | None
    order: int


@dataclass(frozen=True, slots=True)
class CatalogSection:
    group: str
    entries: tuple[CatalogEntry, ...]


def build_catalog_from_tags(tags: Mapping[MemberRef, GuardTag]) -> list[CatalogSection]:
    grouped: dict[str, list[CatalogEntry]] = defaultdict(list)
    for member, tag in tags.items():
        grouped[tag.group].append(CatalogEntry(member, tag.shortcut, tag.order))

    return [
        CatalogSection(
            group=group,
            entries=tuple(
                sorted(
                    grouped[group],
                    key=lambda entry: (entry.member.name, entry.order, entry.member),
                )
            ),
        )
        for group in sorted(grouped)
    ]


def build_catalog(library: LibraryLike, options: ScanOptions | None = None) -> list[CatalogSection]:
    """Group a library's guard functions for documentation.

    Sections are sorted by group name. Entries within a section are sorted
    by method name, then by order hint, so overloads stay together.
    """
    return build_catalog_from_tags(scan(library, options))


def shortcut_index(tags: Mapping[MemberRef, GuardTag]) -> dict[str, str]:
    """Map each shortcut to the one method name that owns it."""
    collisions = check_shortcut_uniqueness(tags)
    if collisions:
        raise ConsistencyError(
            "Cannot index ambiguous shortcuts: "
            + "; ".join(violation.describe() for violation in collisions)
        )
    return {
        tag.shortcut: member.name
        for member, tag in sorted(tags.items(), key=lambda item: item[0])
        if tag.shortcut is not None
    }
