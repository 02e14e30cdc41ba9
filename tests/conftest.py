"""Pytest configuration and fixtures for guardtags tests."""

import logging

import pytest

from guardtags.members import MemberFlags, MemberKind, MemberRef, Visibility
from guardtags.surface import StaticSurface, SurfaceEntry
from guardtags.tags import GuardTag


@pytest.fixture(autouse=True)
def restore_guardtags_logger():
    """Undo logger changes made by setup_logging() during a test."""
    logger = logging.getLogger("guardtags")
    saved_handlers = list(logger.handlers)
    saved_level, saved_propagate = logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)
    logger.propagate = saved_propagate


@pytest.fixture
def member():
    """Build a member reference with sensible defaults."""

    def _member(name, owner="lib.Guard", signature="(self)", kind=MemberKind.METHOD):
        return MemberRef(owner, name, signature, kind)

    return _member


@pytest.fixture
def overload_surface(member):
    """Registration table with overloads that share one shortcut."""
    entries = [
        SurfaceEntry(member("not_null", signature="(self)"), tag=GuardTag("Null", "gnn")),
        SurfaceEntry(
            member("not_null", signature="(self, message)"),
            tag=GuardTag("Null", "gnn", order=1),
        ),
        SurfaceEntry(
            member("not_null", owner="lib.NullableGuard"),
            tag=GuardTag("Null", "gnn", order=2),
        ),
        SurfaceEntry(member("null", signature="(self)"), tag=GuardTag("Null", "gn")),
        SurfaceEntry(
            member("hidden", signature="(self)"),
            visibility=Visibility.NONPUBLIC,
        ),
        SurfaceEntry(
            member("__eq__", signature="(self, other)"),
            flags=MemberFlags.SPECIAL,
        ),
    ]
    return StaticSurface("lib", entries)
