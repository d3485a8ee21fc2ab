"""Context document grammar: a title, an optional tag line and one list of actions."""

from __future__ import annotations

from ..errors import InvalidActionId, InvalidName, ParseError
from ..markdown.fragment import BlockRef, Fragment
from ..models import ActionRef, Context, ContextAction, ContextName, LiteralAction, ReferenceAction
from .document import Document


def parse_context(name: str, text: str) -> Context:
    """Parse a context document named by its filename stem ``name``.

    Tags are read and discarded. A missing or broken action list means the
    context has no actions.
    """
    doc = Document.parse(text)

    try:
        items = doc.parser.parse_list()
    except ParseError:
        items = []

    return Context(
        name=ContextName(name),
        title=doc.title,
        actions=tuple(context_action(item) for item in items),
    )


def context_action(fragment: Fragment) -> ContextAction:
    """Classify a list item as a reference (``[[project#^id]]``) or literal text."""
    block_ref = BlockRef.from_events(fragment.events)
    if block_ref is None:
        return LiteralAction(fragment)

    try:
        target = ActionRef.from_block_ref(block_ref)
    except (InvalidName, InvalidActionId):
        target = None
    return ReferenceAction(block_ref=block_ref, target=target)
