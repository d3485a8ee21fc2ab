"""CLI entrypoint for gtd."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import CONFIG_FILENAME, DEFAULT_CONTEXTS_DIR, DEFAULT_PROJECTS_DIR


def _auto_detect_root(start: Path) -> Path | None:
    """Find a corpus root by walking up from `start`.

    A root holds a gtd.toml, or both a Projects/ and a Contexts/ directory.
    """
    cur = start.resolve()
    for p in (cur, *cur.parents):
        if (p / CONFIG_FILENAME).is_file():
            return p
        if (p / DEFAULT_PROJECTS_DIR).is_dir() and (p / DEFAULT_CONTEXTS_DIR).is_dir():
            return p
    return None


@click.group()
@click.version_option(__version__, prog_name="gtd")
@click.option(
    "--root",
    "-r",
    type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Path to the corpus root (defaults to auto-detected)",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, root: Path | None, verbose: bool) -> None:
    """gtd - structural validator for a Markdown task-management corpus.

    Projects live in Projects/, contexts in Contexts/, one Markdown file each.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)
    if ctx.invoked_subcommand == "rules":
        return

    if root is None:
        detected = _auto_detect_root(Path.cwd())
        if detected is None:
            raise click.ClickException(
                "Corpus not found. Pass --root /path/to/corpus or run from inside it."
            )
        root = detected

    if not root.exists() or not root.is_dir():
        raise click.BadParameter(f"Directory '{root}' does not exist.", param_hint="--root / -r")

    ctx.obj["root"] = root.resolve()


@cli.command()
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output results as JSON",
)
@click.option(
    "--skip",
    "skip",
    multiple=True,
    metavar="RULE_ID",
    help="Disable a rule (repeatable, see `gtd rules`)",
)
@click.pass_context
def validate(ctx: click.Context, output_json: bool, skip: tuple[str, ...]) -> None:
    """Check projects and contexts for structural and cross-document problems.

    Exits 1 when a document failed to load or any rule reported a problem.
    """
    from .commands.validate import run_validate

    exit_code = run_validate(ctx.obj["root"], output_json=output_json, skip=skip)
    sys.exit(exit_code)


@cli.command()
@click.pass_context
def orphaned(ctx: click.Context) -> None:
    """List in-progress projects that no context references."""
    from .commands.orphaned import run_orphaned

    exit_code = run_orphaned(ctx.obj["root"])
    sys.exit(exit_code)


@cli.command()
def rules() -> None:
    """List validation rules and what they check."""
    from .commands.validate import run_rules

    sys.exit(run_rules())


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
