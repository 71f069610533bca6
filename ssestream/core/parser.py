"""
Event chunk parser.

Turns one delimiter-free record into a MessageEvent.

Reference: https://html.spec.whatwg.org/multipage/server-sent-events.html#dispatchMessage
"""

from dataclasses import dataclass
import re

from ssestream.core.events.base import EventKind, MessageEvent

FIELD_SEPARATOR = ":"
LINE_BREAK = re.compile(r"\r\n|\r|\n")
KNOWN_FIELDS = frozenset({"id", "event", "data", "retry"})


@dataclass
class EventFields:
    """Raw field values collected from one record."""

    id: str | None = None
    event: str | None = None
    data: str | None = None
    retry: str | None = None

    def apply(self, field: str, value: str) -> None:
        if field == "data" and self.data is not None:
            self.data += "\n" + value
        else:
            setattr(self, field, value)

    def to_event(self) -> MessageEvent:
        return MessageEvent(
            type=self.event or EventKind.MESSAGE.value,
            id=self.id,
            data=self.data if self.data is not None else "",
            retry=self.retry,
        )


def split_field(line: str) -> tuple[str, str] | None:
    """
    Split a line into (field, value).

    Returns:
        None for a comment line, otherwise the field name and its value with
        at most one leading space removed
    """
    index = line.find(FIELD_SEPARATOR)
    if index == 0:
        return None
    if index < 0:
        return line, ""

    value = line[index + 1 :]
    if value.startswith(" "):
        value = value[1:]
    return line[:index], value


def parse_fields(chunk: str) -> EventFields:
    """Collect recognized fields from a record; anything else is skipped."""
    fields = EventFields()
    for line in LINE_BREAK.split(chunk):
        split = split_field(line)
        if split is None:
            continue
        name, value = split
        if name in KNOWN_FIELDS:
            fields.apply(name, value)
    return fields


def parse_event_chunk(chunk: str | None) -> MessageEvent | None:
    """
    Parse one record into an event.

    Args:
        chunk: Record text without the trailing blank line

    Returns:
        MessageEvent, or None for an empty or whitespace-only record

    Example:
        >>> event = parse_event_chunk("id: 5\\nevent: update\\ndata: hello")
        >>> (event.type, event.id, event.data)
        ('update', '5', 'hello')
    """
    if not chunk or not chunk.strip():
        return None
    return parse_fields(chunk).to_event()


__all__ = [
    "FIELD_SEPARATOR",
    "KNOWN_FIELDS",
    "EventFields",
    "parse_event_chunk",
    "parse_fields",
    "split_field",
]
