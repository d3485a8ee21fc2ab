"""Tests for the registered rule set, including end-to-end scenarios."""

from conftest import PAPER

from gtd.corpus.rules import (
    RULE_DESCRIPTIONS,
    default_validator,
    orphaned_projects,
)


def run(corpus):
    docs = corpus.load()
    assert docs.failures == []
    return default_validator().run(docs)


def messages(report, kind, name):
    group = report.group(kind, name)
    return group.messages if group else []


# -----------------------------------------------------------------------------
# End-to-end scenarios
# -----------------------------------------------------------------------------


def test_scenario_linked_active_action_is_clean(paper_corpus):
    report = run(paper_corpus)
    assert report.ok
    assert report.lines() == []


def test_scenario_linked_action_not_active(corpus):
    corpus.project(PAPER, active=[], complete=["Draft intro ^abc123"])
    corpus.context("Computer", [f"![[{PAPER}#^abc123]]"])

    report = run(corpus)

    context_messages = messages(report, "context", "Computer")
    assert len(context_messages) == 1
    assert "action is not active in linked project" in context_messages[0]
    # The project itself is also flagged for having nothing active.
    assert messages(report, "project", PAPER) == ["is in progress but has no active actions"]


def test_scenario_duplicate_project_id(corpus):
    corpus.project("197001010000 Alpha", tags="#someday")
    corpus.project("197001010000 Beta", tags="#someday")

    report = run(corpus)

    assert messages(report, "project", "197001010000 Alpha") == []
    assert messages(report, "project", "197001010000 Beta") == [
        "has a duplicate ID 197001010000"
    ]


def test_scenario_unresolvable_reference(corpus):
    corpus.context("Computer", ["[[Nonexistent Project#^abcdef]]"])

    report = run(corpus)

    assert messages(report, "context", "Computer") == [
        "[[Nonexistent Project#^abcdef]] is not a valid link to project"
    ]


def test_validation_is_deterministic(corpus):
    corpus.project("197001010000 Alpha", tags="#complete", active=["open ^aaaaaa"])
    corpus.project("197001010000 Beta", tags="#someday")
    corpus.context("Computer", ["[[197001010000 Alpha#^aaaaaa]]", "[[197001010000 Alpha#^aaaaaa]]"])
    docs = corpus.load()
    validator = default_validator()

    assert validator.run(docs).lines() == validator.run(docs).lines()
    assert default_validator().run(docs).lines() == validator.run(docs).lines()


# -----------------------------------------------------------------------------
# Individual rules
# -----------------------------------------------------------------------------


def test_title_mismatch(corpus):
    corpus.project(PAPER, text="# Write a paper\n#someday\n")
    report = run(corpus)
    assert messages(report, "project", PAPER) == [
        'body title "Write a paper" does not match name title "Write paper"'
    ]


def test_title_with_code_span_matches_plain_name(corpus):
    corpus.project("197001010000 Ship v2", text="# Ship `v2`\n#someday\n")
    assert run(corpus).ok


def test_complete_project_with_open_actions(corpus):
    corpus.project(PAPER, tags="#complete", upcoming=["Later"], complete=["Done"])
    report = run(corpus)
    assert messages(report, "project", PAPER) == [
        "is complete but has at least one uncompleted action"
    ]


def test_complete_project_with_only_complete_actions(corpus):
    corpus.project(PAPER, tags="#complete", complete=["Done"])
    assert run(corpus).ok


def test_in_progress_without_active(corpus):
    corpus.project(PAPER, upcoming=["Later"])
    report = run(corpus)
    assert messages(report, "project", PAPER) == ["is in progress but has no active actions"]


def test_someday_project_needs_no_actions(corpus):
    corpus.project(PAPER, tags="#someday")
    assert run(corpus).ok


def test_linked_project_not_in_progress(corpus):
    corpus.project(PAPER, tags="#someday", active=["Draft ^abc123"])
    corpus.context("Computer", [f"[[{PAPER}#^abc123]]"])

    report = run(corpus)

    (message,) = messages(report, "context", "Computer")
    assert "is someday, not in progress" in message


def test_linked_action_missing(paper_corpus):
    paper_corpus.context("Phone", [f"[[{PAPER}#^zzz999]]"])

    report = run(paper_corpus)

    assert messages(report, "context", "Phone") == [
        f"[[{PAPER}#^zzz999]]: {PAPER} does not have the referenced action"
    ]


def test_duplicate_action_reference(paper_corpus):
    paper_corpus.context("Phone", [f"[[{PAPER}#^abc123]]"])

    report = run(paper_corpus)

    assert messages(report, "context", "Computer") == []
    assert messages(report, "context", "Phone") == [
        f"[[{PAPER}#^abc123]]: action ^abc123 is referenced more than once"
    ]


def test_literal_actions_are_never_flagged(paper_corpus):
    paper_corpus.context("Errands", ["Buy milk", "[[not a ref]]"])
    assert run(paper_corpus).ok


def test_orphaned_active_action(corpus):
    corpus.project(PAPER, active=["Draft intro ^abc123", "Find venue"])
    corpus.context("Computer", [f"[[{PAPER}#^abc123]]"])

    report = run(corpus)

    assert report.groups == []
    assert report.messages == [f'{PAPER} has an active action not in any context: "Find venue"']


def test_skip_rule(corpus):
    corpus.project(PAPER, active=["Find venue"])
    docs = corpus.load()
    assert not default_validator().run(docs).ok
    assert default_validator(skip=["orphaned-action"]).run(docs).ok


def test_every_rule_is_described():
    assert default_validator().rule_ids == list(RULE_DESCRIPTIONS)


def test_orphaned_projects(paper_corpus):
    paper_corpus.project("197001010001 Taxes", active=["File ^tax001"])
    paper_corpus.project("197001010002 Garden", tags="#someday")

    orphans = orphaned_projects(paper_corpus.load())

    assert [str(p.name) for p in orphans] == ["197001010001 Taxes"]
