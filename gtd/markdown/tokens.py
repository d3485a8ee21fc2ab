"""Token stream: flatten markdown-it tokens into ``Event`` sequences.

markdown-it produces a block token list whose ``inline`` tokens carry child
tokens. The parser wants one flat, ordered stream with matching start/end
events, so this module walks both levels and keeps a stack of open tags; every
closing event repeats the exact tag of its opener (ordered list start, link
destination) so the two compare equal.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Iterator

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from .events import Event, Tag, TagKind

# Unmatched brackets arrive as their own text events.
BRACKET_PATTERN = re.compile(r"(!\[|\[|\])")

TASK_CHECKBOX_CLASS = "task-list-item-checkbox"

_BLOCK_TAGS = {
    "paragraph": Tag.paragraph,
    "blockquote": Tag.block_quote,
    "list_item": Tag.item,
    "table": lambda: Tag(TagKind.TABLE),
    "thead": lambda: Tag(TagKind.TABLE_HEAD),
    "tr": lambda: Tag(TagKind.TABLE_ROW),
    "th": lambda: Tag(TagKind.TABLE_CELL),
    "td": lambda: Tag(TagKind.TABLE_CELL),
}

_INLINE_TAGS = {
    "em": Tag.emphasis,
    "strong": Tag.strong,
    "s": Tag.strikethrough,
}


@lru_cache(maxsize=1)
def default_markdown() -> MarkdownIt:
    """CommonMark with tables, strikethrough, footnotes and task lists."""
    return (
        MarkdownIt("commonmark")
        .enable("table")
        .enable("strikethrough")
        .use(footnote_plugin)
        .use(tasklists_plugin)
    )


def iter_events(text: str, md: MarkdownIt | None = None) -> Iterator[Event]:
    """Lazily yield the events of ``text``."""
    tokens = (md or default_markdown()).parse(text)
    yield from _block_events(tokens)


def split_brackets(content: str) -> list[str]:
    """Split a text run at ``[``, ``]`` and ``![``, dropping empty pieces."""
    return [piece for piece in BRACKET_PATTERN.split(content) if piece]


def _block_events(tokens: Iterable[Token]) -> Iterator[Event]:
    open_tags: list[Tag] = []

    for token in tokens:
        ttype = token.type

        if ttype == "inline":
            yield from _inline_events(token.children or [])
            continue

        if ttype.endswith("_open"):
            tag = _open_tag(token)
            if tag is None:
                continue
            open_tags.append(tag)
            if token.hidden:
                continue
            yield Event.start(tag)
            continue

        if ttype.endswith("_close"):
            if _open_tag(token, closing=True) is None:
                continue
            tag = open_tags.pop()
            if token.hidden:
                continue
            yield Event.end(tag)
            continue

        if ttype in ("fence", "code_block"):
            tag = Tag.code_block((token.info or "").strip())
            yield Event.start(tag)
            if token.content:
                yield Event.text(token.content)
            yield Event.end(tag)
        elif ttype == "html_block":
            yield Event.html(token.content)
        elif ttype == "hr":
            yield Event.rule()


def _open_tag(token: Token, closing: bool = False) -> Tag | None:
    """Tag for a block ``*_open`` token; ``None`` for wrappers we do not surface.

    With ``closing`` set only the kind matters; the real tag comes off the stack.
    """
    name = token.type.rsplit("_", 1)[0]

    if name == "heading":
        return Tag.heading(int(token.tag[1:]))
    if name == "bullet_list":
        return Tag.bullet_list()
    if name == "ordered_list":
        if closing:
            return Tag.ordered_list()
        return Tag.ordered_list(int(token.attrGet("start") or 1))
    if name == "footnote":
        label = (token.meta or {}).get("label") or ""
        return Tag.footnote_definition(str(label))
    factory = _BLOCK_TAGS.get(name)
    if factory is None:
        # tbody, footnote_block and anything a plugin adds
        return None
    return factory()


def _inline_events(children: list[Token]) -> Iterator[Event]:
    open_tags: list[Tag] = []
    after_marker = False

    for child in children:
        ctype = child.type

        if ctype == "text":
            content = child.content
            if after_marker:
                content = content.lstrip()
                after_marker = False
            for piece in split_brackets(content):
                yield Event.text(piece)
            continue
        after_marker = False

        if ctype == "code_inline":
            yield Event.code(child.content)
        elif ctype == "softbreak":
            yield Event.soft_break()
        elif ctype == "hardbreak":
            yield Event.hard_break()
        elif ctype == "footnote_ref":
            yield Event.footnote_reference(str((child.meta or {}).get("label") or ""))
        elif ctype == "html_inline":
            if TASK_CHECKBOX_CLASS in child.content:
                yield Event.task_list_marker('checked="checked"' in child.content)
                after_marker = True
            else:
                yield Event.html(child.content)
        elif ctype == "link_open":
            tag = Tag.link(str(child.attrGet("href") or ""), str(child.attrGet("title") or ""))
            open_tags.append(tag)
            yield Event.start(tag)
        elif ctype == "link_close":
            yield Event.end(open_tags.pop())
        elif ctype == "image":
            tag = Tag.image(str(child.attrGet("src") or ""), str(child.attrGet("title") or ""))
            yield Event.start(tag)
            yield from _inline_events(child.children or [])
            yield Event.end(tag)
        elif ctype.endswith("_open") and ctype[: -len("_open")] in _INLINE_TAGS:
            tag = _INLINE_TAGS[ctype[: -len("_open")]]()
            open_tags.append(tag)
            yield Event.start(tag)
        elif ctype.endswith("_close") and ctype[: -len("_close")] in _INLINE_TAGS:
            yield Event.end(open_tags.pop())
        elif child.content:
            # text_special and other leaf tokens
            for piece in split_brackets(child.content):
                yield Event.text(piece)
