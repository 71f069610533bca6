"""Chunk assembly: cumulative response text -> complete event records."""

import re

RECORD_DELIMITER = re.compile(r"\r\n\r\n|\r\r|\n\n")


class ChunkAssembler:
    """
    Splits a growing response body into complete records.

    The transport reports the cumulative text received so far. Only the
    unseen suffix is consumed on each call. The last segment after splitting
    is always held back, because transport boundaries rarely line up with
    record boundaries.

    Attributes:
        consumed_length: Characters of the cumulative text already consumed
        pending_tail: Trailing fragment not yet terminated by a blank line
    """

    def __init__(self) -> None:
        self.consumed_length = 0
        self.pending_tail = ""

    def reset(self) -> None:
        """Forget everything; called at the start of every attempt."""
        self.consumed_length = 0
        self.pending_tail = ""

    def feed(self, total: str) -> list[str]:
        """
        Consume newly available text.

        Args:
            total: Cumulative response text; must extend the previous value

        Returns:
            Complete, non-blank records in stream order
        """
        delta = total[self.consumed_length :]
        self.consumed_length += len(delta)

        parts = RECORD_DELIMITER.split(self.pending_tail + delta)
        self.pending_tail = parts.pop()
        return [part for part in parts if part.strip()]

    def flush(self) -> list[str]:
        """
        Release the pending tail at end of stream.

        Returns:
            The tail as a single record, or nothing if it is blank
        """
        tail, self.pending_tail = self.pending_tail, ""
        return [tail] if tail.strip() else []

    def __repr__(self) -> str:
        return (
            f"ChunkAssembler(consumed_length={self.consumed_length}, "
            f"pending_tail={self.pending_tail!r})"
        )


__all__ = ["RECORD_DELIMITER", "ChunkAssembler"]
