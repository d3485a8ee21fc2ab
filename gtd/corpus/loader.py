"""Corpus loading: read every project and context document under a root."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, TypeVar

import frontmatter
import yaml

from ..config import GtdConfig, load_config
from ..errors import GtdError
from ..models import (
    Context,
    ContextAction,
    ContextName,
    Project,
    ProjectName,
    ReferenceAction,
)
from .context import parse_context
from .project import parse_project

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Errors a single document may raise without stopping the rest of the load.
DOCUMENT_ERRORS = (OSError, ValueError, yaml.YAMLError, GtdError)


@dataclass(frozen=True)
class LoadError:
    """A document that could not be loaded."""

    kind: str  # "project" or "context"
    name: str
    cause: BaseException

    def __str__(self) -> str:
        return f"{self.kind} {self.name}: {self.cause}"


@dataclass
class Documents:
    """The loaded corpus: projects and contexts in load order, plus failures."""

    projects: dict[ProjectName, Project] = field(default_factory=dict)
    contexts: dict[ContextName, Context] = field(default_factory=dict)
    failures: list[LoadError] = field(default_factory=list)

    def all_projects(self) -> Iterator[Project]:
        return iter(self.projects.values())

    def all_contexts(self) -> Iterator[Context]:
        return iter(self.contexts.values())

    def project(self, name: ProjectName) -> Project | None:
        return self.projects.get(name)

    def resolve(self, action: ContextAction) -> Project | None:
        """Project a context action points at, if it is a reference that resolves."""
        if not isinstance(action, ReferenceAction) or action.target is None:
            return None
        return self.projects.get(action.target.project)


class Loader:
    """Reads documents from the project and context directories of a corpus root."""

    def __init__(self, root: Path, config: GtdConfig | None = None):
        self.root = root
        self.config = config or GtdConfig()
        self.project_dir = root / self.config.projects_dir
        self.context_dir = root / self.config.contexts_dir

    @staticmethod
    def list_documents(directory: Path) -> list[Path]:
        """Markdown files directly inside ``directory``, sorted by stem.

        Raises ``FileNotFoundError`` if the directory does not exist.
        """
        if not directory.is_dir():
            raise FileNotFoundError(f"No such directory: {directory}")
        paths = [
            p
            for p in directory.glob("*.md")
            if p.is_file() and not p.name.startswith(".")
        ]
        return sorted(paths, key=lambda p: p.stem)

    @staticmethod
    def read_document(path: Path) -> str:
        """Document text with any YAML frontmatter removed."""
        post = frontmatter.load(path)
        return post.content

    def load_project(self, path: Path) -> Project:
        return parse_project(path.stem, self.read_document(path))

    def load_context(self, path: Path) -> Context:
        return parse_context(path.stem, self.read_document(path))


def _load_all(
    kind: str,
    directory: Path,
    load: Callable[[Path], T],
    failures: list[LoadError],
) -> list[T]:
    try:
        paths = Loader.list_documents(directory)
    except OSError as e:
        logger.warning("Cannot list %s directory %s: %s", kind, directory, e)
        failures.append(LoadError(kind, directory.name, e))
        return []

    loaded: list[T] = []
    for path in paths:
        try:
            loaded.append(load(path))
        except DOCUMENT_ERRORS as e:
            logger.warning("Skipping %s %s: %s", kind, path.stem, e)
            failures.append(LoadError(kind, path.stem, e))
    return loaded


def load_corpus(root: Path, config: GtdConfig | None = None) -> Documents:
    """Load every project and context under ``root``.

    A document that fails to load is recorded in ``Documents.failures`` and
    left out; it never stops the rest of the corpus from loading.

    Args:
        root: Corpus root directory
        config: Directory layout; read from ``gtd.toml`` under ``root`` when omitted

    Returns:
        Documents with projects and contexts in filename order
    """
    if config is None:
        config = load_config(root)
    loader = Loader(root, config)
    docs = Documents()

    for project in _load_all("project", loader.project_dir, loader.load_project, docs.failures):
        docs.projects[project.name] = project
    for context in _load_all("context", loader.context_dir, loader.load_context, docs.failures):
        docs.contexts[context.name] = context

    logger.debug(
        "Loaded %d projects, %d contexts (%d failures) from %s",
        len(docs.projects),
        len(docs.contexts),
        len(docs.failures),
        root,
    )
    return docs
