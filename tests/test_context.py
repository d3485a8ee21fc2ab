"""Tests for the context document grammar."""

from gtd.corpus.context import parse_context
from gtd.markdown import BlockRef
from gtd.models import ActionId, LiteralAction, ProjectName, ReferenceAction

TEXT = """\
# Computer
#context

- ![[197001010000 Write paper#^abc123]]
- [[197001010001 Taxes#^tax001]]
- Check email
- [[Nonexistent Project#^abcdef]]
- [[No block ref here]]
"""


def test_context_actions_are_classified():
    context = parse_context("Computer", TEXT)

    assert str(context.name) == "Computer"
    assert context.title.try_as_str() == "Computer"

    embedded, plain, literal, bad_link, no_ref = context.actions

    assert isinstance(embedded, ReferenceAction)
    assert embedded.block_ref.embedded
    assert embedded.target.project == ProjectName("197001010000 Write paper")
    assert embedded.target.action_id == ActionId("abc123")

    assert isinstance(plain, ReferenceAction)
    assert not plain.block_ref.embedded

    assert isinstance(literal, LiteralAction)
    assert str(literal) == "Check email"

    assert isinstance(bad_link, ReferenceAction)
    assert bad_link.block_ref == BlockRef("Nonexistent Project", "abcdef")
    assert bad_link.target is None

    assert isinstance(no_ref, LiteralAction)


def test_references_yields_only_references():
    context = parse_context("Computer", TEXT)
    assert len(list(context.references())) == 3


def test_context_without_list_has_no_actions():
    context = parse_context("Errands", "# Errands\n#context\n\nNothing yet.\n")
    assert context.actions == ()


def test_context_without_tags():
    context = parse_context("Errands", "# Errands\n\n- Buy milk\n")
    assert [str(a) for a in context.actions] == ["Buy milk"]


def test_reference_with_plain_link():
    context = parse_context("@computer", "# @computer\n\n- foo\n- ![[bar#^baz]]\n")
    literal, reference = context.actions
    assert str(literal) == "foo"
    assert reference.block_ref == BlockRef("bar", "baz", embedded=True)
    assert reference.target is None
