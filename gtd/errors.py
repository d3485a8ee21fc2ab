"""Exception taxonomy for parsing, loading and configuration.

Validation failures are not exceptions: rules report plain messages (see
``gtd.corpus.engine``). Everything here is fatal to the document or config file
being read, never to the whole corpus.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .markdown.events import Event


class GtdError(Exception):
    """Base class for all gtd errors."""


# ---------------------------------------------------------------------------
# Structural parse errors
# ---------------------------------------------------------------------------


class ParseError(GtdError):
    """A document could not be parsed."""


class UnexpectedEvent(ParseError):
    """The parser expected one event and found another (or end of file)."""

    def __init__(self, expected: "Event", actual: "Event | None"):
        self.expected = expected
        self.actual = actual
        got = "end of file" if actual is None else actual.describe()
        super().__init__(f"expected {expected.describe()}, got {got}")


class InvalidHeadingEvent(GtdError):
    """A block-level event appeared where only inline content is allowed."""

    def __init__(self, event: "Event"):
        self.event = event
        super().__init__(f"{event.describe()} is invalid in header")


class CouldntParseHeading(ParseError):
    """A heading contained an event that headings cannot hold."""

    def __init__(self, cause: InvalidHeadingEvent):
        self.cause = cause
        super().__init__(f"expected heading event, got {cause.event.describe()}")


# ---------------------------------------------------------------------------
# Grammar errors
# ---------------------------------------------------------------------------


class DocumentError(ParseError):
    """A document parsed as Markdown but broke the project/context grammar."""


class MissingStatus(DocumentError):
    def __init__(self) -> None:
        super().__init__("document doesn't have a status tag (#someday, #in-progress or #complete)")


class HasSectionWithNonStringTitle(DocumentError):
    def __init__(self, heading: object):
        self.heading = heading
        super().__init__(f"section title \"{heading}\" is not plain text")


class HasUnexpectedSection(DocumentError):
    def __init__(self, section: str):
        self.section = section
        super().__init__(f"unexpected section \"{section}\"")


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


class InvalidName(GtdError):
    """A filename stem is not a well-formed project name."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"\"{name}\" is not a valid project name: {reason}")


class InvalidActionId(GtdError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"\"{value}\" is not a valid action ID (expected 6 characters)")


class ConfigError(GtdError, ValueError):
    """Configuration file or option is malformed."""
