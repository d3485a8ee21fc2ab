"""Project document grammar.

    # <title>
    #<status> #other #tags

    ## Goal | Info       free content up to the next ## heading
    ## Actions
    ### Active | Upcoming | Complete
    - action text ^abc123

Level-2 sections may come in any order. A repeated section replaces the earlier
one. "Action Items" is the old name of "Actions" and may also hold a flat task
list from the older document format.
"""

from __future__ import annotations

import logging

from ..errors import HasSectionWithNonStringTitle, HasUnexpectedSection, MissingStatus
from ..markdown.events import Event, Tag
from ..markdown.fragment import Fragment
from ..markdown.parser import Parser
from ..models import Action, ActionList, ActionStatus, Project, ProjectName, Status
from .document import Document

logger = logging.getLogger(__name__)

GOAL_SECTION = "Goal"
INFO_SECTION = "Info"
ACTIONS_SECTION = "Actions"
LEGACY_ACTIONS_SECTION = "Action Items"

STATUS_TAGS = {status.tag: status for status in Status}

_SECTION_START = Event.start(Tag.heading(2))
_SUBSECTION_START = Event.start(Tag.heading(3))
_LIST_START = Event.start(Tag.bullet_list())


def parse_project(name: str, text: str) -> Project:
    """Parse a project document named by its filename stem ``name``.

    Raises:
        InvalidName: ``name`` is not ``"<12-digit id> <title>"``
        MissingStatus: no status tag in the tag line
        HasSectionWithNonStringTitle, HasUnexpectedSection: bad section heading
        ParseError: any structural error from the parser
    """
    project_name = ProjectName.parse(name)
    doc = Document.parse(text, strict_tags=True)

    tags = list(doc.tags)
    status = take_status(tags)

    parser = doc.parser
    goal: Fragment | None = None
    info: Fragment | None = None
    actions = ActionList()

    while not parser.at_end():
        section = _section_title(parser, level=2)

        if section == GOAL_SECTION:
            goal = parser.consume_until(_SECTION_START)
        elif section == INFO_SECTION:
            info = parser.consume_until(_SECTION_START)
        elif section == ACTIONS_SECTION:
            actions = parse_actions(parser)
        elif section == LEGACY_ACTIONS_SECTION:
            logger.warning(
                'Project "%s" uses deprecated "%s" section; rename to "%s".',
                doc.title.plain_text(),
                LEGACY_ACTIONS_SECTION,
                ACTIONS_SECTION,
            )
            actions = parse_legacy_actions(parser)
        else:
            raise HasUnexpectedSection(section)

    return Project(
        name=project_name,
        title=doc.title,
        status=status,
        tags=tuple(tags),
        goal=goal,
        info=info,
        actions=actions,
    )


def take_status(tags: list[str]) -> Status:
    """Remove the first status tag from ``tags`` and return its status.

    Only the first status tag (by position) is taken; any later one stays in
    ``tags`` as an ordinary tag.
    """
    for idx, tag in enumerate(tags):
        status = STATUS_TAGS.get(tag)
        if status is not None:
            del tags[idx]
            return status
    raise MissingStatus()


def parse_actions(parser: Parser) -> ActionList:
    """Parse ``### Active|Upcoming|Complete`` subsections, each an optional list."""
    buckets: dict[ActionStatus, tuple[Action, ...]] = {}

    while parser.peek() == _SUBSECTION_START:
        title = _section_title(parser, level=3)
        try:
            status = ActionStatus(title)
        except ValueError:
            raise HasUnexpectedSection(title) from None

        items = parser.parse_list() if parser.peek() == _LIST_START else []
        buckets[status] = tuple(Action.from_fragment(item) for item in items)

    return ActionList(
        active=buckets.get(ActionStatus.ACTIVE, ()),
        upcoming=buckets.get(ActionStatus.UPCOMING, ()),
        complete=buckets.get(ActionStatus.COMPLETE, ()),
    )


def parse_legacy_actions(parser: Parser) -> ActionList:
    """Old-style section: either subsections or one flat task list.

    In a task list checked items are complete and everything else is active.
    """
    if parser.peek() != _LIST_START:
        return parse_actions(parser)

    active: list[Action] = []
    complete: list[Action] = []
    for checked, fragment in parser.parse_tasklist():
        action = Action.from_fragment(fragment)
        (complete if checked else active).append(action)
    return ActionList(active=tuple(active), complete=tuple(complete))


def _section_title(parser: Parser, level: int) -> str:
    heading = parser.parse_heading(level)
    title = heading.try_as_str()
    if title is None:
        raise HasSectionWithNonStringTitle(heading)
    return title
