"""Guards kept for callers of the first release."""

from guardtags import deprecated


@deprecated("Use fluent.Argument instead.")
class LegacyGuard:
    def check(self, value):
        if value is None:
            raise ValueError("value cannot be None.")
        return value
