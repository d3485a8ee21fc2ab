"""Data models for projects, contexts and their actions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union

from .errors import InvalidActionId, InvalidName
from .markdown.events import Event
from .markdown.fragment import BlockRef, Fragment, Heading

PROJECT_ID_LENGTH = 12
ACTION_ID_LENGTH = 6
ACTION_ID_MARKER = "^"

_PROJECT_ID = re.compile(rf"[0-9]{{{PROJECT_ID_LENGTH}}}")


class Status(str, Enum):
    """Project status, declared by exactly one reserved hashtag."""

    SOMEDAY = "someday"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"

    @property
    def tag(self) -> str:
        return self.value


class ActionStatus(str, Enum):
    """Which ``### `` subsection of a project's Actions an action is filed under."""

    ACTIVE = "Active"
    UPCOMING = "Upcoming"
    COMPLETE = "Complete"


@dataclass(frozen=True, order=True)
class ProjectName:
    """A project filename stem: ``"<12-digit id> <title>"``."""

    value: str

    def __post_init__(self) -> None:
        idx = self.value.find(" ")
        if idx < 0:
            raise InvalidName(self.value, "no space between ID and title")
        if not _PROJECT_ID.fullmatch(self.value[:idx]):
            raise InvalidName(self.value, f"ID must be exactly {PROJECT_ID_LENGTH} digits")

    @classmethod
    def parse(cls, value: str) -> "ProjectName":
        return cls(value)

    @property
    def id(self) -> str:
        return self.value[: self.value.index(" ")]

    @property
    def title(self) -> str:
        return self.value[self.value.index(" ") + 1 :]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class ContextName:
    """A context filename stem, taken as-is."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class ActionId:
    """Six-character block identifier (the ``abc123`` in ``^abc123``)."""

    value: str

    def __post_init__(self) -> None:
        if len(self.value) != ACTION_ID_LENGTH or any(c.isspace() for c in self.value):
            raise InvalidActionId(self.value)

    @classmethod
    def parse(cls, value: str) -> "ActionId":
        return cls(value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Action:
    """One project action: its text and optional trailing ``^id``."""

    text: Fragment
    id: ActionId | None = None

    @classmethod
    def from_fragment(cls, fragment: Fragment) -> "Action":
        """Split a trailing `` ^xxxxxx`` off the last text event, if there is one."""
        events = list(fragment)
        if not events or not events[-1].is_text:
            return cls(fragment)

        content = events[-1].content
        idx = content.rfind(ACTION_ID_MARKER)
        if idx < 0:
            return cls(fragment)

        try:
            action_id = ActionId.parse(content[idx + 1 :])
        except InvalidActionId:
            return cls(fragment)

        remaining = content[:idx].rstrip()
        events[-1:] = [Event.text(remaining)] if remaining else []
        return cls(Fragment.from_events(events), action_id)

    def __str__(self) -> str:
        text = self.text.plain_text()
        return f"{text} ^{self.id}" if self.id else text


@dataclass(frozen=True)
class ActionList:
    """Project actions partitioned into Active, Upcoming and Complete."""

    active: tuple[Action, ...] = ()
    upcoming: tuple[Action, ...] = ()
    complete: tuple[Action, ...] = ()

    def by_status(self, status: ActionStatus) -> tuple[Action, ...]:
        if status is ActionStatus.ACTIVE:
            return self.active
        if status is ActionStatus.UPCOMING:
            return self.upcoming
        return self.complete

    def actions(self) -> Iterator[tuple[Action, ActionStatus]]:
        for status in ActionStatus:
            for action in self.by_status(status):
                yield action, status

    def get(self, action_id: ActionId) -> tuple[Action, ActionStatus] | None:
        """First action carrying ``action_id`` and the category it is filed in."""
        for action, status in self.actions():
            if action.id == action_id:
                return action, status
        return None

    def __len__(self) -> int:
        return len(self.active) + len(self.upcoming) + len(self.complete)


@dataclass(frozen=True)
class ActionRef:
    """A block reference whose link is a project name and whose id is an ActionId."""

    project: ProjectName
    action_id: ActionId
    embedded: bool = False

    @classmethod
    def from_block_ref(cls, block_ref: BlockRef) -> "ActionRef":
        """Raises ``InvalidName`` or ``InvalidActionId``."""
        return cls(
            project=ProjectName.parse(block_ref.link),
            action_id=ActionId.parse(block_ref.id),
            embedded=block_ref.embedded,
        )

    def __str__(self) -> str:
        bang = "!" if self.embedded else ""
        return f"{bang}[[{self.project}#^{self.action_id}]]"


@dataclass(frozen=True)
class LiteralAction:
    """A context action written out as free text."""

    text: Fragment

    def __str__(self) -> str:
        return self.text.plain_text()


@dataclass(frozen=True)
class ReferenceAction:
    """A context action pointing into a project's action list.

    ``target`` is ``None`` when the bracket link is not a well-formed project
    name or action ID; such a reference can never resolve.
    """

    block_ref: BlockRef
    target: ActionRef | None = None

    def __str__(self) -> str:
        return str(self.block_ref)


ContextAction = Union[LiteralAction, ReferenceAction]


@dataclass(frozen=True)
class Project:
    """A parsed project document."""

    name: ProjectName
    title: Heading
    status: Status
    tags: tuple[str, ...] = ()
    goal: Fragment | None = None
    info: Fragment | None = None
    actions: ActionList = field(default_factory=ActionList)

    @property
    def id(self) -> str:
        return self.name.id

    def __str__(self) -> str:
        return str(self.name)


@dataclass(frozen=True)
class Context:
    """A parsed context document."""

    name: ContextName
    title: Heading
    actions: tuple[ContextAction, ...] = ()

    def references(self) -> Iterator[ReferenceAction]:
        for action in self.actions:
            if isinstance(action, ReferenceAction):
                yield action

    def __str__(self) -> str:
        return str(self.name)
