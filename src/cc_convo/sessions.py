"""Discovery of projects and session files."""

import logging
from datetime import datetime, timezone
from pathlib import Path

from cc_convo.config import PREVIEW_CHARS
from cc_convo.models import NormalizedEvent, ProjectInfo, Session
from cc_convo.names import session_name
from cc_convo.parser import parse_file

logger = logging.getLogger(__name__)


def discover_projects(projects_dir: Path) -> list[Path]:
    """All project directories, sorted by name."""
    if not projects_dir.is_dir():
        return []
    return sorted(p for p in projects_dir.iterdir() if p.is_dir())


def discover_sessions(project_dir: Path) -> list[Path]:
    """All JSONL session files directly inside a project directory."""
    if not project_dir.is_dir():
        return []
    return sorted(project_dir.glob("*.jsonl"))


def select_projects(projects_dir: Path, project: str | None = None) -> list[Path]:
    """Project directories matching ``project``.

    An exact directory name wins; otherwise every directory whose name
    contains ``project`` is returned. Without a filter, all projects.
    """
    projects = discover_projects(projects_dir)
    if project is None:
        return projects
    exact = [p for p in projects if p.name == project]
    if exact:
        return exact
    return [p for p in projects if project in p.name]


def get_project_info(project_dir: Path) -> ProjectInfo:
    """Session count, total size and latest modification of a project."""
    count = 0
    total_size = 0
    last_modified: datetime | None = None

    for path in discover_sessions(project_dir):
        stat = path.stat()
        count += 1
        total_size += stat.st_size
        mtime = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
        if last_modified is None or mtime > last_modified:
            last_modified = mtime

    return ProjectInfo(
        name=project_dir.name,
        path=project_dir,
        session_count=count,
        size_bytes=total_size,
        last_modified=last_modified,
    )


def list_projects(projects_dir: Path) -> list[ProjectInfo]:
    """All projects, most recently modified first."""
    projects = [get_project_info(p) for p in discover_projects(projects_dir)]
    epoch = datetime.fromtimestamp(0, tz=timezone.utc)
    projects.sort(key=lambda p: p.last_modified or epoch, reverse=True)
    return projects


def first_user_message(events: list[NormalizedEvent], max_chars: int = PREVIEW_CHARS) -> str:
    """A one-line preview of the first non-empty user message."""
    for event in events:
        if event.role == "user" and event.content:
            return event.content[:max_chars].replace("\n", " ")
    return ""


def load_session(path: Path) -> Session | None:
    """Summarize a session file; None if it holds no events.

    Raises:
        OSError: If the file cannot be read.
    """
    events = parse_file(path)
    if not events:
        return None

    return Session(
        id=path.stem,
        path=path,
        project=path.parent.name,
        created_at=events[0].timestamp,
        updated_at=events[-1].timestamp,
        message_count=len(events),
        size_bytes=path.stat().st_size,
        preview=first_user_message(events),
        name=session_name(path.stem),
    )


def list_sessions(project_dir: Path) -> list[Session]:
    """Sessions of a project, newest first. Unreadable files are skipped."""
    sessions: list[Session] = []
    for path in discover_sessions(project_dir):
        try:
            session = load_session(path)
        except OSError as exc:
            logger.warning("Could not read %s: %s", path, exc)
            continue
        if session is not None:
            sessions.append(session)

    sessions.sort(key=lambda s: s.created_at, reverse=True)
    return sessions


def find_session_file(projects_dir: Path, session_id: str) -> Path | None:
    """Locate a session file across all projects.

    ``session_id`` is an id, an id prefix or a session name. An id prefix
    match wins over a name match.
    """
    if not session_id:
        return None
    paths = [
        path
        for project_dir in discover_projects(projects_dir)
        for path in discover_sessions(project_dir)
    ]
    for path in paths:
        if path.stem.startswith(session_id):
            return path
    for path in paths:
        if session_name(path.stem) == session_id:
            return path
    return None
