"""Tests for the project document grammar."""

import logging

import pytest

from gtd.corpus.project import parse_project, take_status
from gtd.errors import (
    HasSectionWithNonStringTitle,
    HasUnexpectedSection,
    InvalidName,
    MissingStatus,
    UnexpectedEvent,
)
from gtd.models import ActionId, ActionStatus, Status

NAME = "197001010000 Write paper"

FULL = """\
# Write paper
#in-progress #writing

## Goal

Get the paper *accepted*.

## Info

Notes go here.

## Actions

### Active

- Draft intro ^abc123
- Find a venue

### Upcoming

- Submit ^sub001

### Complete

- Pick a topic ^top001
"""


def test_full_project():
    project = parse_project(NAME, FULL)

    assert project.name.id == "197001010000"
    assert project.title.try_as_str() == "Write paper"
    assert project.status is Status.IN_PROGRESS
    assert project.tags == ("writing",)
    assert project.goal is not None
    assert project.goal.plain_text() == "Get the paper accepted."
    assert project.info is not None
    assert project.info.plain_text() == "Notes go here."

    actions = project.actions
    assert [str(a) for a in actions.active] == ["Draft intro ^abc123", "Find a venue"]
    assert actions.active[1].id is None
    assert actions.get(ActionId("sub001"))[1] is ActionStatus.UPCOMING
    assert actions.get(ActionId("top001"))[1] is ActionStatus.COMPLETE


def test_minimal_project():
    project = parse_project(NAME, "# Write paper\n#someday\n")
    assert project.status is Status.SOMEDAY
    assert project.goal is None
    assert project.info is None
    assert len(project.actions) == 0


def test_sections_in_any_order():
    text = "# T\n#complete\n\n## Actions\n\n### Complete\n\n- done\n\n## Goal\n\nA goal\n"
    project = parse_project(NAME, text)
    assert project.goal.plain_text() == "A goal"
    assert len(project.actions.complete) == 1


def test_empty_subsection_has_no_actions():
    text = "# T\n#in-progress\n\n## Actions\n\n### Active\n\n### Upcoming\n\n- later\n"
    project = parse_project(NAME, text)
    assert project.actions.active == ()
    assert len(project.actions.upcoming) == 1


def test_repeated_section_later_wins():
    text = "# T\n#someday\n\n## Goal\n\nfirst\n\n## Goal\n\nsecond\n"
    assert parse_project(NAME, text).goal.plain_text() == "second"


@pytest.mark.parametrize("position", [0, 1, 2])
def test_status_tag_removed_wherever_it_is(position):
    words = ["#a", "#b"]
    words.insert(position, "#in-progress")
    project = parse_project(NAME, f"# T\n{' '.join(words)}\n")
    assert project.status is Status.IN_PROGRESS
    assert project.tags == ("a", "b")


def test_only_first_status_tag_is_taken():
    tags = ["complete", "x", "someday"]
    assert take_status(tags) is Status.COMPLETE
    assert tags == ["x", "someday"]


def test_missing_status():
    with pytest.raises(MissingStatus):
        parse_project(NAME, "# T\n#writing\n")


def test_missing_tag_line_is_missing_status():
    with pytest.raises(MissingStatus):
        parse_project(NAME, "# T\n\n## Goal\n\ngoal\n")


def test_missing_title():
    with pytest.raises(UnexpectedEvent):
        parse_project(NAME, "#in-progress\n")


def test_invalid_name():
    with pytest.raises(InvalidName):
        parse_project("Write paper", "# Write paper\n#in-progress\n")


def test_unexpected_section():
    with pytest.raises(HasUnexpectedSection) as exc:
        parse_project(NAME, "# T\n#someday\n\n## Notes\n\ntext\n")
    assert exc.value.section == "Notes"


def test_unexpected_subsection():
    with pytest.raises(HasUnexpectedSection):
        parse_project(NAME, "# T\n#someday\n\n## Actions\n\n### Waiting\n\n- x\n")


def test_non_string_section_title():
    with pytest.raises(HasSectionWithNonStringTitle):
        parse_project(NAME, "# T\n#someday\n\n## `Goal`\n\ntext\n")


def test_legacy_action_items_tasklist(caplog):
    text = (
        "# Write paper\n#in-progress\n\n## Action Items\n\n"
        "- [ ] Draft intro ^abc123\n- [x] Pick a topic ^top001\n- Plain\n"
    )
    with caplog.at_level(logging.WARNING, logger="gtd.corpus.project"):
        project = parse_project(NAME, text)

    assert [str(a) for a in project.actions.active] == ["Draft intro ^abc123", "Plain"]
    assert [str(a) for a in project.actions.complete] == ["Pick a topic ^top001"]
    assert 'deprecated "Action Items"' in caplog.text
    assert "Write paper" in caplog.text


def test_legacy_action_items_with_subsections():
    text = "# T\n#in-progress\n\n## Action Items\n\n### Active\n\n- go ^abc123\n"
    project = parse_project(NAME, text)
    assert project.actions.active[0].id == ActionId("abc123")
