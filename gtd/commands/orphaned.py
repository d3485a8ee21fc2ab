"""Orphaned command implementation."""

from pathlib import Path

from rich.console import Console

from ..config import load_config
from ..corpus.loader import load_corpus
from ..corpus.rules import orphaned_projects
from ..errors import ConfigError


def run_orphaned(root: Path) -> int:
    """List in-progress projects that no context references.

    Returns:
        Exit code (0 = success, 2 = bad configuration)
    """
    console = Console(stderr=True)
    out = Console()

    try:
        config = load_config(root)
    except ConfigError as e:
        console.print(f"Configuration error: {e}", style="bold red", markup=False, highlight=False)
        return 2

    documents = load_corpus(root, config)
    for failure in documents.failures:
        console.print(f"Failed to load {failure}", style="yellow", markup=False, highlight=False)

    projects = orphaned_projects(documents)
    if not projects:
        out.print("No orphaned projects found.", highlight=False)
        return 0

    out.print("Orphaned projects:", style="bold")
    for project in projects:
        out.print(f"- {project.name}", markup=False, highlight=False, soft_wrap=True)
    return 0
