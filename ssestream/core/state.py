"""Connection lifecycle states."""

from enum import IntEnum


class ReadyState(IntEnum):
    """
    Lifecycle stage of a connection attempt.

    Transitions are forward-only within one attempt:
    INITIALIZING -> CONNECTING -> OPEN | CLOSED -> CLOSED.
    """

    INITIALIZING = -1
    CONNECTING = 0
    OPEN = 1
    CLOSED = 2


__all__ = ["ReadyState"]
