"""Usage statistics across sessions."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path

from cc_convo.config import estimate_cost
from cc_convo.models import NormalizedEvent
from cc_convo.parser import parse_file
from cc_convo.sessions import discover_projects, discover_sessions

logger = logging.getLogger(__name__)

PERIODS: dict[str, timedelta | None] = {
    "day": timedelta(days=1),
    "week": timedelta(days=7),
    "month": timedelta(days=30),
    "all": None,
}

PERIOD_LABELS = {
    "day": "Last 24 hours",
    "week": "Last 7 days",
    "month": "Last 30 days",
    "all": "All time",
}

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def period_start(period: str, now: datetime | None = None) -> datetime:
    """Start of a named reporting period.

    Raises:
        ValueError: If ``period`` is not one of day, week, month, all.
    """
    if period not in PERIODS:
        raise ValueError(f"Invalid period '{period}'. Use: {', '.join(PERIODS)}")
    delta = PERIODS[period]
    if delta is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    if now is None:
        now = datetime.now(tz=timezone.utc)
    return now - delta


@dataclass
class UsageStats:
    """Aggregated usage over the sessions of a period."""

    total_sessions: int = 0
    total_messages: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    total_duration: timedelta = field(default_factory=timedelta)
    tool_usage: Counter[str] = field(default_factory=Counter)
    model_usage: Counter[str] = field(default_factory=Counter)
    daily_activity: Counter[str] = field(default_factory=Counter)

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    @property
    def estimated_cost(self) -> float:
        return estimate_cost(self.input_tokens, self.output_tokens)

    def add_session(self, events: list[NormalizedEvent], since: datetime) -> None:
        """Count a session if it started within the period.

        Only events at or after ``since`` contribute messages, tokens,
        models and tools.
        """
        if not events:
            return
        session_start = events[0].timestamp
        if session_start < since:
            return

        self.total_sessions += 1
        self.daily_activity[WEEKDAYS[session_start.astimezone().weekday()]] += 1
        if len(events) > 1:
            self.total_duration += max(events[-1].timestamp - session_start, timedelta())

        for event in events:
            if event.timestamp < since:
                continue
            self.total_messages += 1
            if event.role != "assistant":
                continue
            if event.usage is not None:
                self.input_tokens += event.usage.input_tokens
                self.output_tokens += event.usage.output_tokens
            if event.model is not None:
                self.model_usage[event.model] += 1
            if event.tool_info is not None:
                self.tool_usage[event.tool_info.name] += 1


def collect_stats(projects_dir: Path, since: datetime) -> UsageStats:
    """Aggregate usage over every session file under ``projects_dir``."""
    stats = UsageStats()
    for project_dir in discover_projects(projects_dir):
        for path in discover_sessions(project_dir):
            try:
                events = parse_file(path)
            except OSError as exc:
                logger.warning("Could not read %s: %s", path, exc)
                continue
            stats.add_session(events, since)
    return stats
