"""Validate command implementation."""

import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..config import load_config
from ..corpus.engine import Report
from ..corpus.loader import Documents, load_corpus
from ..corpus.rules import RULE_DESCRIPTIONS, default_validator
from ..errors import ConfigError


def run_validate(
    root: Path,
    *,
    output_json: bool = False,
    skip: tuple[str, ...] = (),
) -> int:
    """Load the corpus under ``root`` and run every registered rule.

    Args:
        root: Corpus root directory
        output_json: Output the report as JSON instead of text
        skip: Rule ids to disable, on top of ``[validate] skip`` in gtd.toml

    Returns:
        Exit code (0 = clean, 1 = load failures or diagnostics, 2 = bad configuration)
    """
    console = Console(stderr=True)

    try:
        config = load_config(root)
        validator = default_validator(skip=(*config.skip_rules, *skip))
        console.print(f"Loading corpus from {root}...", style="dim", markup=False, highlight=False)
        documents = load_corpus(root, config)
        report = validator.run(documents)
    except ConfigError as e:
        console.print(f"Configuration error: {e}", style="bold red", markup=False, highlight=False)
        return 2

    if output_json:
        _output_json(documents, report)
    else:
        _print_human_output(console, documents, report)

    return 1 if documents.failures or not report.ok else 0


def _output_json(documents: Documents, report: Report) -> None:
    output = {
        "failures": [
            {"kind": f.kind, "name": f.name, "error": str(f.cause)} for f in documents.failures
        ],
        **report.to_dict(),
        "summary": {
            "projects": len(documents.projects),
            "contexts": len(documents.contexts),
            "failures": len(documents.failures),
            "diagnostics": report.count(),
        },
    }
    print(json.dumps(output, indent=2))


def _print_human_output(console: Console, documents: Documents, report: Report) -> None:
    out = Console()

    for failure in documents.failures:
        out.print(
            f"Failed to load {failure}",
            style="red",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

    for group in report.groups:
        out.print(group.name, style="bold", markup=False, highlight=False, soft_wrap=True)
        for message in group.messages:
            out.print(f"  - {message}", style="red", markup=False, highlight=False, soft_wrap=True)
    for message in report.messages:
        out.print(message, style="red", markup=False, highlight=False, soft_wrap=True)

    if report.ok and not documents.failures:
        out.print("✓ No problems found.", style="green")

    console.print()
    table = Table(title="Corpus Summary", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right")
    table.add_row("Projects", str(len(documents.projects)))
    table.add_row("Contexts", str(len(documents.contexts)))
    table.add_row("Load failures", str(len(documents.failures)))
    table.add_row("Diagnostics", str(report.count()))
    console.print(table)


def run_rules() -> int:
    """List the registered rule ids with their descriptions."""
    console = Console()

    for rule_id in default_validator().rule_ids:
        console.print(f"[bold]{rule_id}[/bold]  {RULE_DESCRIPTIONS[rule_id]}", highlight=False, soft_wrap=True)
    return 0
