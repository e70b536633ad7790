"""Data models for cc-convo."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from cc_convo.records import TokenUsage

# --- Timeline ---


@dataclass(frozen=True)
class ToolInfo:
    """The tool invocation retained on an assistant event."""

    name: str
    id: str
    input: Any


@dataclass(frozen=True)
class NormalizedEvent:
    """One entry of a conversation timeline."""

    timestamp: datetime
    role: str  # "user" | "assistant" | "system:<level>"
    content: str
    tool_info: ToolInfo | None = None
    thinking: str | None = None
    usage: TokenUsage | None = None
    model: str | None = None


@dataclass(frozen=True)
class SearchMatch:
    """A ranked search hit within one timeline."""

    timestamp: datetime
    role: str
    snippet: str
    score: float


# --- Session listing ---


@dataclass
class Session:
    """A Claude Code session (JSONL file)."""

    id: str
    path: Path
    project: str
    created_at: datetime
    updated_at: datetime
    message_count: int = 0
    size_bytes: int = 0
    preview: str = ""
    name: str = ""  # memorable hyphenated name derived from the id


@dataclass
class ProjectInfo:
    """A project directory holding session files."""

    name: str
    path: Path
    session_count: int
    size_bytes: int
    last_modified: datetime | None
