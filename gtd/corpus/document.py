"""Shared document header: ``# Title`` followed by a line of ``#tags``."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ParseError
from ..markdown.events import Event, Tag
from ..markdown.fragment import Heading
from ..markdown.parser import Parser


@dataclass
class Document:
    """Title and tags of a document plus the parser positioned after them."""

    title: Heading
    tags: list[str]
    parser: Parser

    @classmethod
    def parse(cls, text: str, strict_tags: bool = False) -> "Document":
        """Parse the header of ``text``.

        A document without a tag paragraph has no tags. A paragraph that is not
        a plain tag line is read as "no tags" too, unless ``strict_tags`` is set,
        in which case its parse error propagates.
        """
        parser = Parser.from_text(text)
        title = parser.parse_heading(1)

        tags: list[str] = []
        if parser.peek() == Event.start(Tag.paragraph()):
            try:
                tags = parser.parse_tags()
            except ParseError:
                if strict_tags:
                    raise

        return cls(title=title, tags=tags, parser=parser)
