"""Structured parser over the Markdown event stream.

``Parser`` has single event lookahead: every combinator decides what to do from
the next event alone, so nothing ever needs to backtrack. Failed ``expect``
calls leave the cursor where it was; combinators that consume a start event and
then fail do not rewind.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, TypeVar

from ..errors import CouldntParseHeading, InvalidHeadingEvent, ParseError, UnexpectedEvent
from .events import Event, EventKind, Tag
from .fragment import Fragment, Heading
from .tokens import iter_events

T = TypeVar("T")

_NOTHING = object()


class Parser:
    """Cursor over a stream of ``Event``s."""

    def __init__(self, events: Iterable[Event]):
        self._events = iter(events)
        self._peeked: object = _NOTHING

    @classmethod
    def from_text(cls, text: str) -> "Parser":
        return cls(iter_events(text))

    # -- cursor ------------------------------------------------------------

    def peek(self) -> Event | None:
        """Next event without consuming it, ``None`` at end of stream."""
        if self._peeked is _NOTHING:
            self._peeked = next(self._events, None)
        return self._peeked  # type: ignore[return-value]

    def at_end(self) -> bool:
        return self.peek() is None

    def __iter__(self) -> Iterator[Event]:
        return self

    def __next__(self) -> Event:
        event = self.peek()
        if event is None:
            raise StopIteration
        self._peeked = _NOTHING
        return event

    # -- primitives --------------------------------------------------------

    def _expect_where(self, matches: Callable[[Event], bool], expected: Event) -> Event:
        actual = self.peek()
        if actual is None or not matches(actual):
            raise UnexpectedEvent(expected, actual)
        return next(self)

    def expect(self, event: Event) -> Event:
        """Consume the next event iff it equals ``event``."""
        return self._expect_where(lambda actual: actual == event, event)

    def expect_start(self, tag: Tag) -> Event:
        return self.expect(Event.start(tag))

    def expect_end(self, tag: Tag) -> Event:
        return self.expect(Event.end(tag))

    def expect_text(self) -> str:
        """Consume one text event, whatever it says."""
        event = self._expect_where(lambda actual: actual.is_text, Event.text(" "))
        return event.content

    def consume_until(self, boundary: Event) -> Fragment:
        """Collect events until ``boundary`` is next or the stream ends.

        The boundary itself is left in place; running out of input is not an error.
        """
        collected = []
        while True:
            event = self.peek()
            if event is None or event == boundary:
                break
            collected.append(next(self))
        return Fragment.from_events(collected)

    def parse_element(self, tag: Tag, body: Callable[["Parser"], T]) -> T:
        """Run ``body`` between a start and end ``tag``; both are required."""
        self.expect_start(tag)
        output = body(self)
        self.expect_end(tag)
        return output

    # -- document structures -----------------------------------------------

    def parse_heading(self, level: int) -> Heading:
        tag = Tag.heading(level)
        fragment = self.parse_element(tag, lambda p: p.consume_until(Event.end(tag)))
        try:
            return Heading.from_fragment(fragment)
        except InvalidHeadingEvent as e:
            raise CouldntParseHeading(e) from e

    def _parse_general_list(self, item_parser: Callable[["Parser"], T]) -> list[T]:
        tag = Tag.bullet_list()
        self.expect_start(tag)

        items: list[T] = []
        while True:
            try:
                self.expect_end(tag)
                break
            except UnexpectedEvent:
                pass
            # Best effort: a broken item ends the list instead of failing it.
            try:
                items.append(item_parser(self))
            except ParseError:
                break
        return items

    def parse_list(self) -> list[Fragment]:
        """Parse an unordered list into one fragment per item."""
        return self._parse_general_list(Parser._parse_item)

    def parse_tasklist(self) -> list[tuple[bool | None, Fragment]]:
        """Parse an unordered list whose items may start with a task marker.

        Each item is ``(checked, fragment)``; ``checked`` is ``None`` for items
        without a marker.
        """
        return self._parse_general_list(Parser._parse_task_item)

    def _parse_item(self) -> Fragment:
        tag = Tag.item()
        return self.parse_element(tag, lambda p: p.consume_until(Event.end(tag)))

    def _parse_task_item(self) -> tuple[bool | None, Fragment]:
        tag = Tag.item()

        def body(p: "Parser") -> tuple[bool | None, Fragment]:
            checked = None
            marker = p.peek()
            if marker is not None and marker.kind is EventKind.TASK_LIST_MARKER:
                checked = next(p).checked
            return checked, p.consume_until(Event.end(tag))

        return self.parse_element(tag, body)

    def parse_tags(self) -> list[str]:
        """Parse a paragraph of ``#hashtags``; other words are ignored."""
        text = self.parse_element(Tag.paragraph(), Parser.expect_text)
        return [word[1:] for word in text.split(" ") if word.startswith("#")]
