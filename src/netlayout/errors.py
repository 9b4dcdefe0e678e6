"""Error accumulation and reporting for netlayout.

Validation never stops at the first problem. Each validator collects every
violation it finds into an ErrorAccumulator scoped by a human-readable prefix
(e.g. "bridge:br0", "network", "layout") and merges the results of the
validators it calls, so the final error names where each failure came from.
"""

import logging

logger = logging.getLogger(__name__)


class LayoutError(Exception):
    """Aggregated validation failure.

    Attributes:
        prefix: Scope the messages were collected under
        messages: Every violation found, in the order it was recorded
    """

    def __init__(self, prefix: str, messages: list[str]) -> None:
        self.prefix = prefix
        self.messages = list(messages)
        super().__init__(str(self))

    def __str__(self) -> str:
        return "\n".join(f"{self.prefix}: {message}" for message in self.messages)


class LayoutInvariantError(AssertionError):
    """An internal invariant of the validator was broken.

    Raised for combinations that input data cannot produce, never for
    user-facing validation failures.
    """


class ErrorAccumulator:
    """Collects validation errors under a common prefix."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        self.messages: list[str] = []

    def errorf(self, msg: str, *args: object) -> None:
        """Record a %-formatted error message."""
        message = msg % args if args else msg
        logger.debug("%s: %s", self.prefix, message)
        self.messages.append(message)

    def merge(self, other: LayoutError | None) -> None:
        """Fold a sub-validator's result into this one.

        Each merged message keeps the sub-validator's prefix so its origin
        is still visible once the final error is rendered.
        """
        if other is None:
            return
        for message in other.messages:
            self.messages.append(f"{other.prefix}: {message}")

    def empty(self) -> bool:
        return not self.messages

    def or_none(self) -> LayoutError | None:
        """Return the collected errors as a LayoutError, or None if there are none."""
        if self.empty():
            return None
        return LayoutError(self.prefix, self.messages)

    def __len__(self) -> int:
        return len(self.messages)
