"""CLI for cc-convo."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from cc_convo import __version__, config
from cc_convo.display import (
    console,
    display_event,
    format_json_output,
    print_projects,
    print_search_results,
    print_session_header,
    print_sessions,
    print_stats,
)
from cc_convo.export import export_session
from cc_convo.models import NormalizedEvent
from cc_convo.parser import parse_file
from cc_convo.search import search_session
from cc_convo.sessions import (
    discover_sessions,
    find_session_file,
    list_projects,
    list_sessions,
    select_projects,
)
from cc_convo.stats import collect_stats, period_start

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="cc-convo",
    help="Browse, search and analyze Claude Code conversations.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"cc-convo {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr so they never mix with --json output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Log skipped lines and parse counts")
    ] = False,
) -> None:
    """Browse, search and analyze Claude Code conversations."""
    configure_logging(verbose)


def _require_projects_dir() -> Path:
    projects_dir = config.PROJECTS_DIR
    if not projects_dir.is_dir():
        console.print(f"[red]No Claude projects directory found at {projects_dir}[/red]")
        raise typer.Exit(1)
    return projects_dir


def _load_session(session: str) -> tuple[Path, list[NormalizedEvent]]:
    """Locate a session by id prefix and parse it, or exit."""
    path = find_session_file(_require_projects_dir(), session)
    if path is None:
        console.print(f"[red]Session '{session}' not found[/red]")
        raise typer.Exit(1)
    try:
        events = parse_file(path)
    except OSError as exc:
        console.print(f"[red]Could not read {path}: {exc}[/red]")
        raise typer.Exit(1) from exc
    return path, events


@app.command("list")
def list_command(
    project: Annotated[
        str | None, typer.Argument(help="Project directory name (or substring)")
    ] = None,
) -> None:
    """List projects, or the sessions of one project."""
    projects_dir = _require_projects_dir()

    if project is None:
        print_projects(list_projects(projects_dir))
        return

    project_dirs = select_projects(projects_dir, project)
    if not project_dirs:
        console.print(f"[red]Project '{project}' not found[/red]")
        raise typer.Exit(1)

    for project_dir in project_dirs:
        print_sessions(project_dir.name, list_sessions(project_dir))


@app.command()
def show(
    session: Annotated[str, typer.Argument(help="Session ID (can be partial) or name")],
    show_thinking: Annotated[
        bool, typer.Option("--show-thinking", help="Show thinking blocks")
    ] = False,
    limit: Annotated[
        int, typer.Option("--limit", "-n", help="Number of messages (0 for all)")
    ] = 50,
) -> None:
    """Show a conversation."""
    path, events = _load_session(session)
    if not events:
        console.print("[red]No events found in session[/red]")
        return

    print_session_header(path.stem, events)
    console.print()

    shown = events if limit <= 0 else events[:limit]
    for i, event in enumerate(shown):
        display_event(event, show_thinking=show_thinking)
        if i < len(shown) - 1:
            console.print()

    if len(events) > len(shown):
        console.print(
            f"\n[dim]... {len(events) - len(shown)} more messages "
            "(use --limit 0 to show all)[/dim]"
        )


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Search query")],
    project: Annotated[
        str | None, typer.Option("--project", "-p", help="Filter by project (name substring)")
    ] = None,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Number of sessions")] = 10,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Search conversations."""
    if not query.strip():
        console.print("[red]Error: Query required[/red]")
        raise typer.Exit(1)

    projects_dir = _require_projects_dir()
    project_dirs = select_projects(projects_dir, project)
    if project is not None and not project_dirs:
        console.print(f"[red]Project '{project}' not found[/red]")
        raise typer.Exit(1)

    results = []
    for project_dir in project_dirs:
        for path in discover_sessions(project_dir):
            try:
                matches = search_session(path, query)
            except OSError as exc:
                logger.warning("Could not read %s: %s", path, exc)
                continue
            if matches:
                results.append((project_dir.name, path.stem, matches))

    # Best session first; stable, so ties keep directory order
    results.sort(key=lambda r: r[2][0].score, reverse=True)
    if limit > 0:
        results = results[:limit]

    if json_output:
        format_json_output(query, results)
    else:
        print_search_results(query, results)


@app.command()
def stats(
    period: Annotated[
        str, typer.Option("--period", help="Time period (day, week, month, all)")
    ] = "week",
) -> None:
    """Show usage statistics."""
    try:
        since = period_start(period)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    usage = collect_stats(_require_projects_dir(), since)
    print_stats(usage, period)


@app.command()
def export(
    session: Annotated[str, typer.Argument(help="Session ID (can be partial) or name")],
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Output file (default: <session>.md)")
    ] = None,
    include_thinking: Annotated[
        bool, typer.Option("--include-thinking", help="Include thinking blocks")
    ] = False,
    include_tools: Annotated[
        bool, typer.Option("--include-tools", help="Include tool usage")
    ] = False,
) -> None:
    """Export a conversation to Markdown."""
    path, events = _load_session(session)
    if not events:
        console.print("[red]No events found in session[/red]")
        raise typer.Exit(1)

    output_path = output or Path(f"{session}.md")
    content = export_session(path.stem, events, output_path, include_thinking, include_tools)

    console.print(f"[green]Exported to: {output_path}[/green]")
    console.print(f"   {len(events)} messages")
    console.print(f"   {len(content.encode('utf-8'))} bytes")


if __name__ == "__main__":
    app()
