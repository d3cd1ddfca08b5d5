from __future__ import annotations


class FeedError(Exception):
    """Base exception for realtime feed failures."""


class FeedInvariantError(FeedError):
    """Raised when the raw entity stream breaks the two-entities-per-train layout."""

    def __init__(self, reason: str, *, pair_index: int | None = None) -> None:
        self.reason = reason
        self.pair_index = pair_index
        if pair_index is None:
            super().__init__(f"train feed invariant not met: {reason}")
        else:
            super().__init__(
                f"train feed invariant not met: {reason} (pair {pair_index})"
            )


InvariantError = FeedInvariantError
