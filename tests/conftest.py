"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from gtd.corpus.loader import Documents, load_corpus

PAPER = "197001010000 Write paper"


def project_text(
    title: str,
    tags: str = "#in-progress",
    *,
    goal: str | None = None,
    active: list[str] | None = None,
    upcoming: list[str] | None = None,
    complete: list[str] | None = None,
) -> str:
    """Render a project document in the current format."""
    lines = [f"# {title}", tags, ""]
    if goal is not None:
        lines += ["## Goal", goal, ""]

    sections = [("Active", active), ("Upcoming", upcoming), ("Complete", complete)]
    if any(items is not None for _, items in sections):
        lines += ["## Actions", ""]
        for heading, items in sections:
            if items is None:
                continue
            lines += [f"### {heading}", ""]
            lines += [f"- {item}" for item in items]
            lines.append("")
    return "\n".join(lines)


def context_text(title: str, items: list[str]) -> str:
    return "\n".join([f"# {title}", "#context", "", *(f"- {item}" for item in items), ""])


class CorpusBuilder:
    """Writes project and context documents under a temporary corpus root."""

    def __init__(self, root: Path):
        self.root = root
        self.projects = root / "Projects"
        self.contexts = root / "Contexts"
        self.projects.mkdir(parents=True)
        self.contexts.mkdir(parents=True)

    def project(self, name: str, text: str | None = None, **kwargs) -> Path:
        if text is None:
            text = project_text(name.split(" ", 1)[1], **kwargs)
        path = self.projects / f"{name}.md"
        path.write_text(text, encoding="utf-8")
        return path

    def context(self, name: str, items: list[str] | None = None, text: str | None = None) -> Path:
        if text is None:
            text = context_text(name, items or [])
        path = self.contexts / f"{name}.md"
        path.write_text(text, encoding="utf-8")
        return path

    def load(self) -> Documents:
        return load_corpus(self.root)


@pytest.fixture
def corpus(tmp_path: Path) -> CorpusBuilder:
    """Empty corpus with Projects/ and Contexts/ directories."""
    return CorpusBuilder(tmp_path / "gtd")


@pytest.fixture
def paper_corpus(corpus: CorpusBuilder) -> CorpusBuilder:
    """One in-progress project whose active action is referenced from a context."""
    corpus.project(PAPER, active=["Draft intro ^abc123"])
    corpus.context("Computer", [f"![[{PAPER}#^abc123]]"])
    return corpus
