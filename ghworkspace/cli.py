"""CLI commands for ghworkspace."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from ghworkspace import __version__
from ghworkspace.clone import CloneOrchestrator, CloneSummary
from ghworkspace.errors import (
    ListCancelledError,
    NotAuthenticatedError,
    SettingsError,
    WorkspaceError,
)
from ghworkspace.log import console, setup_logging
from ghworkspace.models.config import CloneConfig, Settings
from ghworkspace.models.workspace import Editor
from ghworkspace.update import check_for_updates, run_upgrade


def get_orchestrator(ctx: click.Context) -> CloneOrchestrator:
    orchestrator = ctx.obj.get("orchestrator")
    return orchestrator if orchestrator is not None else CloneOrchestrator()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Settings file (default: per-user config.yaml)",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """ghworkspace - Clone and keep in sync all repositories of a GitHub user or organization."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    try:
        ctx.obj["settings"] = Settings.load(config_path)
    except SettingsError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        ctx.exit(1)


@main.command()
@click.argument("owner")
@click.argument(
    "destination",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option("--limit", "-l", type=click.IntRange(min=0), default=None,
              help="Maximum number of repositories to clone")
@click.option("--processes", "-p", type=click.IntRange(min=1), default=None,
              help="Concurrent clone processes (default: logical CPUs - 1)")
@click.option("--prune/--no-prune", default=None,
              help="Delete folders of repositories that no longer belong to the owner")
@click.option("--editor", "-e", type=click.Choice([e.value for e in Editor]), default=None,
              help="Workspace file to generate (default: code)")
@click.pass_context
def clone(
    ctx: click.Context,
    owner: str,
    destination: Path | None,
    limit: int | None,
    processes: int | None,
    prune: bool | None,
    editor: str | None,
) -> None:
    """Clone all repositories of OWNER into DESTINATION.

    DESTINATION defaults to a folder named after the owner. When it already
    exists, folders of repositories that were deleted or transferred are
    removed first (disable with --no-prune), and folders that are not empty
    are left untouched.
    """
    settings: Settings = ctx.obj["settings"]
    config = CloneConfig.from_settings(
        settings,
        target_folder=destination,
        limit=limit,
        processes=processes,
        prune=prune,
        editor=Editor(editor) if editor else None,
    )
    orchestrator = get_orchestrator(ctx)

    try:
        summary = asyncio.run(orchestrator.clone(owner, config))
    except NotAuthenticatedError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        console.print("[dim]Run [bold]gh auth login[/bold] and try again.[/dim]")
        ctx.exit(1)
    except ListCancelledError:
        console.print("[red]Command got cancelled.[/red]")
        ctx.exit(1)
    except WorkspaceError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        ctx.exit(1)

    _print_summary(summary)


def _print_summary(summary: CloneSummary) -> None:
    table = Table(title=f"Clone Results: {summary.target_folder}")
    table.add_column("Outcome", style="cyan")
    table.add_column("Repositories", justify="right", style="green")

    table.add_row("Total", str(summary.total))
    table.add_row("Cloned", str(summary.cloned))
    table.add_row("Skipped (not empty)", str(len(summary.skipped)))
    table.add_row("Failed", str(summary.failed - len(summary.skipped)))
    if summary.pruned is not None:
        table.add_row("Pruned", str(len(summary.pruned.removed)))

    console.print(table)

    if summary.workspace_file:
        console.print(f"[dim]Workspace file: {summary.workspace_file}[/dim]")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Display version information."""
    settings: Settings = ctx.obj["settings"]
    console.print(__version__)

    if settings.update_check and asyncio.run(check_for_updates()):
        console.print(
            "[yellow]A new version is available! "
            "Run `ghworkspace update` to update to the latest version.[/yellow]"
        )


@main.command()
@click.pass_context
def update(ctx: click.Context) -> None:
    """Update ghworkspace to the latest version."""
    if not asyncio.run(check_for_updates()):
        console.print("[green]ghworkspace is already up-to-date[/green]")
        console.print(f"[dim]Version: {__version__}[/dim]")
        return

    console.print("Starting update process...")
    returncode = run_upgrade()
    if returncode != 0:
        console.print(f"[red]Update failed (pip exited with {returncode})[/red]")
        ctx.exit(returncode)
    console.print("[green]Updated. Run `ghworkspace version` to check.[/green]")


main.add_command(update, name="upgrade")


if __name__ == "__main__":
    main()
