"""Command line interface for inspecting and cleaning scratch directories."""

from pathlib import Path

import click

from scratchdir.config import ScratchConfig
from scratchdir.errors import ConfigurationError
from scratchdir.stale import cleanup_stale_scratch, list_scratch_dirs

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

base_option = click.option(
    "--base",
    "base",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Base scratch directory (default: $SCRATCHDIR_BASE or test_dir.tmp)",
)


def _resolve_base(base: Path | None) -> Path:
    if base is not None:
        return base
    return ScratchConfig.from_env().base_path


@click.group(name="scratchdir", context_settings=CONTEXT_SETTINGS)
def cli() -> None:
    """Manage scratch directories left behind by test runs."""
    pass


@cli.command("list")
@base_option
def list_cmd(base: Path | None) -> None:
    """List scratch directories under the base directory."""
    base_path = _resolve_base(base)
    entries = list_scratch_dirs(base_path)
    if not entries:
        click.echo(f"No scratch directories under {base_path}", err=True)
        return

    for entry in entries:
        click.echo(entry.name)


@cli.command("clean")
@base_option
@click.option(
    "--max-age",
    type=click.FloatRange(min=0),
    default=0,
    show_default=True,
    help="Only remove directories older than this many seconds",
)
@click.option("--dry-run", is_flag=True, help="Show what would be removed without removing it")
def clean_cmd(base: Path | None, max_age: float, dry_run: bool) -> None:
    """Remove stale scratch directories under the base directory.

    Do not run this while tests that use the base directory are running:
    live scratch directories are indistinguishable from stale ones.
    """
    base_path = _resolve_base(base)
    try:
        removed = cleanup_stale_scratch(base_path, max_age_seconds=max_age, dry_run=dry_run)
    except ConfigurationError as e:
        click.echo(click.style("Error: ", fg="red") + str(e), err=True)
        raise SystemExit(1) from e

    verb = "Would remove" if dry_run else "Removed"
    for entry in removed:
        click.echo(f"{verb} {entry}")
    noun = "directory" if len(removed) == 1 else "directories"
    click.echo(click.style(f"{verb} {len(removed)} scratch {noun}", fg="green"))
