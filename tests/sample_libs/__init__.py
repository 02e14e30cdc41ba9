"""Guard libraries used as scan targets in tests."""
