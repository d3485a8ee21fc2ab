"""Captured slices of the event stream: fragments, headings and block references."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from ..errors import InvalidHeadingEvent
from .events import Event, EventKind

BLOCK_REF_SEPARATOR = "#^"


@dataclass(frozen=True)
class Fragment:
    """An immutable run of events lifted out of a document."""

    events: tuple[Event, ...] = ()

    @classmethod
    def from_events(cls, events: Iterable[Event]) -> "Fragment":
        return cls(tuple(events))

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    def __bool__(self) -> bool:
        return bool(self.events)

    def plain_text(self) -> str:
        """Text and code content joined; breaks become spaces, markup is dropped."""
        parts = []
        for event in self.events:
            if event.kind in (EventKind.TEXT, EventKind.CODE):
                parts.append(event.content)
            elif event.kind in (EventKind.SOFT_BREAK, EventKind.HARD_BREAK):
                parts.append(" ")
        return "".join(parts)

    def __str__(self) -> str:
        return self.plain_text()


_HEADING_LEAVES = frozenset({EventKind.TEXT, EventKind.CODE, EventKind.FOOTNOTE_REFERENCE})


def _is_heading_event(event: Event) -> bool:
    if event.kind in _HEADING_LEAVES:
        return True
    if event.kind in (EventKind.START, EventKind.END):
        return event.tag is not None and event.tag.is_inline
    return False


@dataclass(frozen=True)
class Heading:
    """A fragment restricted to inline events (text, code, emphasis, links...)."""

    events: tuple[Event, ...] = ()

    @classmethod
    def from_fragment(cls, fragment: Fragment) -> "Heading":
        """Raises ``InvalidHeadingEvent`` on the first block-level event."""
        for event in fragment:
            if not _is_heading_event(event):
                raise InvalidHeadingEvent(event)
        return cls(fragment.events)

    def try_as_str(self) -> str | None:
        """The heading text if it is exactly one text event."""
        if len(self.events) == 1 and self.events[0].is_text:
            return self.events[0].content
        return None

    def plain_text(self) -> str:
        """Concatenated text and code content, markup ignored."""
        return "".join(
            event.content for event in self.events if event.kind in (EventKind.TEXT, EventKind.CODE)
        )

    def __str__(self) -> str:
        # Display form keeps code spans recognisable.
        parts = []
        for event in self.events:
            if event.kind is EventKind.TEXT:
                parts.append(event.content)
            elif event.kind is EventKind.CODE:
                parts.append(f"`{event.content}`")
        return "".join(parts)


@dataclass(frozen=True)
class BlockRef:
    """A raw ``[[link#^id]]`` or ``![[link#^id]]`` pointer, target not yet checked."""

    link: str
    id: str
    embedded: bool = False

    @classmethod
    def from_events(cls, events: Sequence[Event]) -> "BlockRef | None":
        """Match the five-event bracket pattern; ``None`` if it does not match."""
        if len(events) != 5 or not all(event.is_text for event in events):
            return None

        opener, second, body, close_one, close_two = (event.content for event in events)
        if opener not in ("[", "![") or second != "[":
            return None
        if close_one != "]" or close_two != "]":
            return None

        idx = body.find(BLOCK_REF_SEPARATOR)
        if idx < 0:
            return None

        return cls(
            link=body[:idx],
            id=body[idx + len(BLOCK_REF_SEPARATOR):],
            embedded=opener == "![",
        )

    def __str__(self) -> str:
        bang = "!" if self.embedded else ""
        return f"{bang}[[{self.link}{BLOCK_REF_SEPARATOR}{self.id}]]"
