"""Discovery of tagged guard functions."""

from __future__ import annotations

from .config import ScanOptions
from .logging_utils import log_event
from .members import MemberRef, TaggedMember, Visibility
from .surface import LibraryLike, LibrarySurface, load_surface
from .tags import GuardTag


def _sort_key(item: tuple[MemberRef, GuardTag]) -> tuple[str, str, int, MemberRef]:
    member, tag = item
    return (tag.group, member.name, tag.order, member)


def scan_surface(surface: LibrarySurface) -> dict[MemberRef, GuardTag]:
    """Map every public member of *surface* that carries a tag to its tag."""
    found: list[tuple[MemberRef, GuardTag]] = []
    members = surface.list_members()
    for member in members:
        if surface.member_visibility(member) is not Visibility.PUBLIC:
            continue
        tag = surface.attached_tag(member)
        if tag is not None:
            found.append((member, tag))

    log_event(
        "scan_complete",
        library=surface.name,
        members=len(members),
        tagged=len(found),
    )
    return dict(sorted(found, key=_sort_key))


def scan(library: LibraryLike, options: ScanOptions | None = None) -> dict[MemberRef, GuardTag]:
    """Scan a library's public surface for guard tags.

    *library* may be a module, a dotted module name or a ``LibrarySurface``.
    Each call reads the library afresh and returns a new mapping; callers
    must not rely on its iteration order.
    """
    return scan_surface(load_surface(library, options))


def tagged_members(library: LibraryLike, options: ScanOptions | None = None) -> list[TaggedMember]:
    return [TaggedMember(member, tag) for member, tag in scan(library, options).items()]
