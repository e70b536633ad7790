"""Terminal rendering with Rich."""

import json
from datetime import datetime, timedelta, timezone

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from cc_convo.config import MATCHES_PER_SESSION, estimate_cost
from cc_convo.models import NormalizedEvent, ProjectInfo, SearchMatch, Session
from cc_convo.names import session_name
from cc_convo.snippets import highlight_matches
from cc_convo.stats import PERIOD_LABELS, WEEKDAYS, UsageStats

console = Console()

ROLE_STYLES = {
    "user": "bold bright_cyan",
    "assistant": "bold bright_green",
    "system": "bold bright_yellow",
}


def format_time_ago(time: datetime, now: datetime | None = None) -> str:
    """Relative time such as "3 hours ago"."""
    if now is None:
        now = datetime.now(tz=timezone.utc)
    if time.tzinfo is None:
        time = time.replace(tzinfo=timezone.utc)

    seconds = int((now - time).total_seconds())
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        amount, unit = seconds // 60, "minute"
    elif seconds < 86400:
        amount, unit = seconds // 3600, "hour"
    else:
        amount, unit = seconds // 86400, "day"
    return f"{amount} {unit}{'' if amount == 1 else 's'} ago"


def format_duration(delta: timedelta) -> str:
    total = max(int(delta.total_seconds()), 0)
    return f"{total // 60}m {total % 60}s"


def format_local(time: datetime, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    """Format a timestamp in the local timezone."""
    return time.astimezone().strftime(fmt)


def format_mb(size_bytes: int) -> str:
    return f"{size_bytes / 1_000_000:.1f} MB"


def session_totals(events: list[NormalizedEvent]) -> tuple[int, int]:
    """Total input and output tokens reported by assistant events."""
    total_input = 0
    total_output = 0
    for event in events:
        if event.role == "assistant" and event.usage is not None:
            total_input += event.usage.input_tokens
            total_output += event.usage.output_tokens
    return total_input, total_output


def _role_style(role: str) -> str:
    return ROLE_STYLES.get(role.split(":", 1)[0], "bold white")


# --- list ---


def print_projects(projects: list[ProjectInfo]) -> None:
    console.print("[bold bright_blue]Projects:[/bold bright_blue]\n")
    for proj in projects:
        last = format_time_ago(proj.last_modified) if proj.last_modified else "never"
        console.print(
            f"  [bright_white]{escape(proj.name)}[/bright_white]"
            f"  [cyan]{proj.session_count:>3}[/cyan] sessions"
            f"  {format_mb(proj.size_bytes):>9}"
            f"  [dim]Last: {last}[/dim]"
        )


def print_sessions(project: str, sessions: list[Session]) -> None:
    console.print(f"[bold bright_blue]Sessions in {escape(project)}:[/bold bright_blue]\n")
    for session in sessions:
        preview = f'"{session.preview}..."' if session.preview else "(no preview available)"
        console.print(
            f"  [bright_white]{format_local(session.created_at, '%Y-%m-%d %H:%M')}[/bright_white]"
            f" │ {session.message_count:>4} msgs"
            f" │ {format_mb(session.size_bytes):>9}"
            f" │ [dim]{escape(preview)}[/dim]"
        )
        console.print(
            f"  [bright_magenta]{escape(session.name)}[/bright_magenta] [dim]{escape(session.id)}[/dim]\n"
        )


# --- show ---


def print_session_header(session_id: str, events: list[NormalizedEvent]) -> None:
    """Print a summary box for a session."""
    if not events:
        return

    first, last = events[0], events[-1]
    total_input, total_output = session_totals(events)
    cost = estimate_cost(total_input, total_output)

    lines = [
        f"[bright_white]ID: {escape(session_id)}[/bright_white]",
        f"Name: [bright_magenta]{escape(session_name(session_id))}[/bright_magenta]",
        f"Started: {format_local(first.timestamp, '%Y-%m-%d %H:%M:%S %Z')}",
        f"Duration: {format_duration(last.timestamp - first.timestamp)}",
        f"Messages: {len(events)}",
        f"Tokens: {total_input} in → {total_output} out",
        f"Est. Cost: ${cost:.2f}",
    ]
    console.print(Panel("\n".join(lines), title="Session", title_align="left", border_style="bright_blue"))


def display_event(event: NormalizedEvent, show_thinking: bool = False) -> None:
    """Print one timeline event."""
    header = Text()
    header.append(f"[{format_local(event.timestamp, '%H:%M:%S')}] ", style="dim")
    header.append(event.role.upper(), style=_role_style(event.role))
    console.print(header)

    if event.role.startswith("system:"):
        console.print(event.content, style="dim", markup=False, highlight=False)
        return

    if event.content:
        console.print(event.content, markup=False, highlight=False)

    if event.thinking is not None:
        if show_thinking:
            console.print("\n[bright_magenta][Thinking][/bright_magenta]")
            console.print(event.thinking, style="dim", markup=False, highlight=False)
        else:
            console.print(
                f"[dim]\\[Thinking - {len(event.thinking)} chars] (use --show-thinking to expand)[/dim]"
            )

    if event.tool_info is not None:
        tool = event.tool_info
        console.print(
            f"\n[bold bright_blue]\\[TOOL][/bold bright_blue] "
            f"[bright_white]{escape(tool.name)}[/bright_white] [dim]({escape(tool.id)})[/dim]"
        )
        for line in json.dumps(tool.input, indent=2).splitlines():
            console.print(f"  {line}", style="dim", markup=False, highlight=False)

    if event.usage is not None:
        console.print(
            f"\n[dim]Tokens: {event.usage.input_tokens} → {event.usage.output_tokens}"
            f" | Model: {escape(event.model or 'unknown')}[/dim]"
        )


# --- search ---

SessionMatches = tuple[str, str, list[SearchMatch]]  # (project, session id, matches)


def print_search_results(query: str, results: list[SessionMatches]) -> None:
    """Print matches grouped by session, best sessions first."""
    console.print(f'[bold bright_yellow]Searching for: "{escape(query)}"[/bold bright_yellow]\n')

    if not results:
        console.print("[dim]No matches found[/dim]")
        return

    total = sum(len(matches) for _, _, matches in results)
    console.print(
        f"[green]Found {total} match{'' if total == 1 else 'es'} across "
        f"{len(results)} session{'' if len(results) == 1 else 's'}:[/green]\n"
    )

    for project, session_id, matches in results:
        console.print(
            f"[bright_white]{escape(project)}[/bright_white]/[dim]{escape(session_id[:8])}[/dim] "
            f"[dim]\\[{format_local(matches[0].timestamp)}][/dim]"
        )
        for match in matches[:MATCHES_PER_SESSION]:
            label = match.role.split(":", 1)[0].upper()
            line = Text("  ")
            line.append(f"{label}:", style=_role_style(match.role))
            line.append(" ")
            line.append_text(highlight_matches(match.snippet, query))
            console.print(line)
        if len(matches) > MATCHES_PER_SESSION:
            console.print(f"  {len(matches) - MATCHES_PER_SESSION} more matches in this session")
        console.print()


def format_json_output(query: str, results: list[SessionMatches]) -> None:
    """Print search results as JSON for programmatic use."""
    output = {
        "query": query,
        "total_results": sum(len(matches) for _, _, matches in results),
        "sessions": [
            {
                "project": project,
                "session_id": session_id,
                "matches": [
                    {
                        "timestamp": match.timestamp.isoformat(),
                        "role": match.role,
                        "score": round(match.score, 4),
                        "snippet": match.snippet,
                    }
                    for match in matches
                ],
            }
            for project, session_id, matches in results
        ],
    }
    console.print_json(data=output)


# --- stats ---


def print_stats(stats: UsageStats, period: str) -> None:
    console.print(
        f"\n[bold bright_cyan]Claude Code Usage Statistics "
        f"({PERIOD_LABELS.get(period, period)})[/bold bright_cyan]"
    )
    console.print("═" * 60, style="bright_cyan")
    console.print()

    console.print("[bright_white]Sessions[/bright_white]:")
    console.print(f"  Total:          {stats.total_sessions}")
    if stats.total_sessions > 0:
        total_minutes = int(stats.total_duration.total_seconds()) // 60
        console.print(f"  Avg messages:   {stats.total_messages // stats.total_sessions} per session")
        console.print(f"  Total time:     {total_minutes // 60}h {total_minutes % 60}m")
        if stats.total_sessions > 1:
            console.print(f"  Avg duration:   {total_minutes // stats.total_sessions} minutes")
    console.print()

    console.print("[bright_white]Token Usage[/bright_white]:")
    console.print(f"  Input:          {stats.input_tokens:>10,} tokens")
    console.print(f"  Output:         {stats.output_tokens:>10,} tokens")
    console.print(f"  Total:          {stats.total_tokens:>10,} tokens")
    console.print()

    input_cost = estimate_cost(stats.input_tokens, 0)
    output_cost = estimate_cost(0, stats.output_tokens)
    console.print("[bright_white]Estimated Costs[/bright_white]:")
    console.print(f"  Input:          ${input_cost:>8.2f}")
    console.print(f"  Output:         ${output_cost:>8.2f}")
    console.print(f"  Total:          ${stats.estimated_cost:>8.2f}")
    if stats.total_sessions > 0:
        console.print(f"  Per session:    ${stats.estimated_cost / stats.total_sessions:>8.2f}")
    console.print()

    if stats.tool_usage:
        console.print("[bright_white]Most Used Tools[/bright_white]:")
        for i, (tool, count) in enumerate(stats.tool_usage.most_common(10), 1):
            console.print(f"  {i:2}. {escape(tool):<20} {count} calls")
        console.print()

    if stats.model_usage:
        console.print("[bright_white]Model Usage[/bright_white]:")
        for model, count in stats.model_usage.most_common():
            console.print(f"  {escape(model):<40} {count} messages")
        console.print()

    if stats.daily_activity:
        console.print("[bright_white]Activity by Day[/bright_white]:")
        max_activity = max(stats.daily_activity.values())
        for day in WEEKDAYS:
            count = stats.daily_activity.get(day, 0)
            bar_width = int(count / max_activity * 20)
            percentage = int(count / stats.total_sessions * 100)
            console.print(
                f"  {day} [bright_green]{'█' * bar_width}[/bright_green]"
                f"[dim]{'░' * (20 - bar_width)}[/dim] {percentage:>3}%"
            )
