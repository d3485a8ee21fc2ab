"""Markdown event model, token stream and structured parser."""

from .events import Event, EventKind, Tag, TagKind
from .fragment import BlockRef, Fragment, Heading
from .parser import Parser
from .tokens import iter_events

__all__ = [
    "BlockRef",
    "Event",
    "EventKind",
    "Fragment",
    "Heading",
    "Parser",
    "Tag",
    "TagKind",
    "iter_events",
]
