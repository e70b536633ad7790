"""Markdown export of a conversation."""

import json
from pathlib import Path

from cc_convo.config import estimate_cost
from cc_convo.display import format_duration, format_local, session_totals
from cc_convo.models import NormalizedEvent


def render_markdown(
    session_id: str,
    events: list[NormalizedEvent],
    include_thinking: bool = False,
    include_tools: bool = False,
) -> str:
    """Render a session timeline as a Markdown document."""
    if not events:
        return "# Claude Code Conversation\n"

    first, last = events[0], events[-1]
    lines = [
        "# Claude Code Conversation",
        "",
        f"**Session ID**: {session_id}",
        f"**Date**: {format_local(first.timestamp, '%Y-%m-%d %H:%M:%S %Z')}",
        f"**Duration**: {format_duration(last.timestamp - first.timestamp)}",
        f"**Messages**: {len(events)}",
    ]

    total_input, total_output = session_totals(events)
    if total_input or total_output:
        cost = estimate_cost(total_input, total_output)
        lines.append(f"**Tokens**: {total_input:,} → {total_output:,} (${cost:.2f})")

    lines.extend(["", "---", ""])

    for event in events:
        lines.extend(_render_event(event, include_thinking, include_tools))

    return "\n".join(lines)


def _render_event(
    event: NormalizedEvent, include_thinking: bool, include_tools: bool
) -> list[str]:
    time = format_local(event.timestamp, "%H:%M:%S")

    if event.role == "user":
        return [f"## User [{time}]", "", event.content, ""]

    if event.role.startswith("system:"):
        return [f"## System [{time}]", "", f"> {event.content}", ""]

    if event.role != "assistant":
        return [f"## {event.role} [{time}]", "", event.content, ""]

    heading = f"## Assistant [{time}]"
    if event.model:
        heading += f" ({event.model})"
    lines = [heading, ""]

    if event.content:
        lines.extend([event.content, ""])

    if event.thinking is not None:
        if include_thinking:
            lines.extend(
                ["<details>", "<summary>Thinking</summary>", "", event.thinking, "", "</details>", ""]
            )
        else:
            lines.extend(["*[Thinking block omitted - use --include-thinking to include]*", ""])

    if include_tools and event.tool_info is not None:
        lines.extend(
            [
                f"### Tool: {event.tool_info.name}",
                "",
                "```json",
                json.dumps(event.tool_info.input, indent=2),
                "```",
                "",
            ]
        )

    if event.usage is not None:
        lines.extend([f"*Tokens: {event.usage.input_tokens} → {event.usage.output_tokens}*", ""])

    return lines


def export_session(
    session_id: str,
    events: list[NormalizedEvent],
    output_path: Path,
    include_thinking: bool = False,
    include_tools: bool = False,
) -> str:
    """Write a session as Markdown and return the written text."""
    content = render_markdown(session_id, events, include_thinking, include_tools)
    output_path.write_text(content, encoding="utf-8")
    return content
