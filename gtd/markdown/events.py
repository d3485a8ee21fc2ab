"""Markdown event vocabulary.

A document is read as a flat sequence of events: start/end of a container tag,
leaf events (text, code span, breaks, rules) and task-list markers. Events are
frozen and compare structurally, so a parser can ask "is the next event exactly
this one?" without caring where it came from.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TagKind(str, Enum):
    """Container kinds that open and close."""

    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BLOCK_QUOTE = "block_quote"
    CODE_BLOCK = "code_block"
    LIST = "list"
    ITEM = "item"
    FOOTNOTE_DEFINITION = "footnote_definition"
    TABLE = "table"
    TABLE_HEAD = "table_head"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    STRIKETHROUGH = "strikethrough"
    LINK = "link"
    IMAGE = "image"


# Tags allowed inside a heading
INLINE_TAGS = frozenset(
    {TagKind.EMPHASIS, TagKind.STRONG, TagKind.STRIKETHROUGH, TagKind.LINK, TagKind.IMAGE}
)


@dataclass(frozen=True)
class Tag:
    """A container tag with its parameters.

    ``level`` is the heading level, ``start`` the first number of an ordered list
    (``None`` for bullet lists), ``dest``/``title`` belong to links and images and
    ``label`` to footnote definitions and fenced code blocks.
    """

    kind: TagKind
    level: int | None = None
    start: int | None = None
    dest: str = ""
    title: str = ""
    label: str = ""

    @classmethod
    def paragraph(cls) -> "Tag":
        return cls(TagKind.PARAGRAPH)

    @classmethod
    def heading(cls, level: int) -> "Tag":
        return cls(TagKind.HEADING, level=level)

    @classmethod
    def block_quote(cls) -> "Tag":
        return cls(TagKind.BLOCK_QUOTE)

    @classmethod
    def code_block(cls, info: str = "") -> "Tag":
        return cls(TagKind.CODE_BLOCK, label=info)

    @classmethod
    def bullet_list(cls) -> "Tag":
        return cls(TagKind.LIST)

    @classmethod
    def ordered_list(cls, start: int = 1) -> "Tag":
        return cls(TagKind.LIST, start=start)

    @classmethod
    def item(cls) -> "Tag":
        return cls(TagKind.ITEM)

    @classmethod
    def footnote_definition(cls, label: str) -> "Tag":
        return cls(TagKind.FOOTNOTE_DEFINITION, label=label)

    @classmethod
    def emphasis(cls) -> "Tag":
        return cls(TagKind.EMPHASIS)

    @classmethod
    def strong(cls) -> "Tag":
        return cls(TagKind.STRONG)

    @classmethod
    def strikethrough(cls) -> "Tag":
        return cls(TagKind.STRIKETHROUGH)

    @classmethod
    def link(cls, dest: str, title: str = "") -> "Tag":
        return cls(TagKind.LINK, dest=dest, title=title)

    @classmethod
    def image(cls, dest: str, title: str = "") -> "Tag":
        return cls(TagKind.IMAGE, dest=dest, title=title)

    @property
    def is_inline(self) -> bool:
        return self.kind in INLINE_TAGS

    def describe(self) -> str:
        if self.kind is TagKind.HEADING:
            return f"level {self.level} heading"
        if self.kind is TagKind.LIST:
            return "unordered list" if self.start is None else "ordered list"
        if self.kind is TagKind.ITEM:
            return "list item"
        return self.kind.value.replace("_", " ")


class EventKind(str, Enum):
    START = "start"
    END = "end"
    TEXT = "text"
    CODE = "code"
    HTML = "html"
    FOOTNOTE_REFERENCE = "footnote_reference"
    SOFT_BREAK = "soft_break"
    HARD_BREAK = "hard_break"
    RULE = "rule"
    TASK_LIST_MARKER = "task_list_marker"


@dataclass(frozen=True)
class Event:
    """One Markdown event.

    ``tag`` is set for start/end events, ``content`` for text, code, html and
    footnote references, ``checked`` for task-list markers.
    """

    kind: EventKind
    tag: Tag | None = None
    content: str = ""
    checked: bool = False

    @classmethod
    def start(cls, tag: Tag) -> "Event":
        return cls(EventKind.START, tag=tag)

    @classmethod
    def end(cls, tag: Tag) -> "Event":
        return cls(EventKind.END, tag=tag)

    @classmethod
    def text(cls, content: str) -> "Event":
        return cls(EventKind.TEXT, content=content)

    @classmethod
    def code(cls, content: str) -> "Event":
        return cls(EventKind.CODE, content=content)

    @classmethod
    def html(cls, content: str) -> "Event":
        return cls(EventKind.HTML, content=content)

    @classmethod
    def footnote_reference(cls, label: str) -> "Event":
        return cls(EventKind.FOOTNOTE_REFERENCE, content=label)

    @classmethod
    def soft_break(cls) -> "Event":
        return cls(EventKind.SOFT_BREAK)

    @classmethod
    def hard_break(cls) -> "Event":
        return cls(EventKind.HARD_BREAK)

    @classmethod
    def rule(cls) -> "Event":
        return cls(EventKind.RULE)

    @classmethod
    def task_list_marker(cls, checked: bool) -> "Event":
        return cls(EventKind.TASK_LIST_MARKER, checked=checked)

    @property
    def is_text(self) -> bool:
        return self.kind is EventKind.TEXT

    def is_start_of(self, kind: TagKind) -> bool:
        return self.kind is EventKind.START and self.tag is not None and self.tag.kind is kind

    def describe(self) -> str:
        """Short human description used in parse errors."""
        if self.kind is EventKind.START:
            return f"start of {self.tag.describe()}"
        if self.kind is EventKind.END:
            return f"end of {self.tag.describe()}"
        if self.kind is EventKind.FOOTNOTE_REFERENCE:
            return "footnote reference"
        return self.kind.value.replace("_", " ")
