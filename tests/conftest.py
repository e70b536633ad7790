"""Pytest fixtures for cc-convo tests."""

import json
import tempfile
from pathlib import Path

import pytest

SESSION_ID = "3f2a9c1e-5b7d-4e2a-9f10-8c6d5e4b3a21"


def _metadata(uuid, timestamp, parent=None):
    return {
        "uuid": uuid,
        "parentUuid": parent,
        "sessionId": SESSION_ID,
        "timestamp": timestamp,
        "cwd": "/home/user/Code/webapp",
        "gitBranch": "main",
        "userType": "external",
        "version": "1.0.43",
    }


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_user():
    """Factory for raw user records."""

    def factory(content, uuid="msg-user", timestamp="2024-01-15T10:00:00Z", **extra):
        record = {
            "type": "user",
            **_metadata(uuid, timestamp),
            "message": {"role": "user", "content": content},
        }
        record.update(extra)
        return record

    return factory


@pytest.fixture
def make_assistant():
    """Factory for raw assistant records."""

    def factory(
        content,
        uuid="msg-assistant",
        timestamp="2024-01-15T10:00:05Z",
        model="claude-sonnet-4-20250514",
        usage=None,
    ):
        message = {
            "id": f"api-{uuid}",
            "type": "message",
            "role": "assistant",
            "model": model,
            "content": content,
            "stop_reason": "end_turn",
            "stop_sequence": None,
        }
        if usage is not None:
            message["usage"] = usage
        return {"type": "assistant", **_metadata(uuid, timestamp), "message": message}

    return factory


@pytest.fixture
def make_system():
    """Factory for raw system records."""

    def factory(content, level=None, uuid="msg-system", timestamp="2024-01-15T10:00:10Z"):
        record = {"type": "system", **_metadata(uuid, timestamp), "content": content}
        if level is not None:
            record["level"] = level
        return record

    return factory


@pytest.fixture
def sample_lines(make_user, make_assistant, make_system):
    """Lines of a realistic session file, including noise the parser must skip."""
    records = [
        {"type": "summary", "summary": "JWT authentication setup", "leafUuid": "msg-004"},
        make_user("How do I implement authentication?", uuid="msg-001"),
        make_assistant(
            [
                {"type": "thinking", "thinking": "They want a JWT example.", "signature": "sig"},
                {"type": "text", "text": "For authentication, you can use JWT tokens."},
                {
                    "type": "tool_use",
                    "id": "toolu_01",
                    "name": "Read",
                    "input": {"file_path": "/home/user/Code/webapp/auth.py"},
                },
            ],
            uuid="msg-002",
            timestamp="2024-01-15T10:00:05Z",
            usage={"input_tokens": 1200, "output_tokens": 300, "cache_read_input_tokens": 50},
        ),
        make_user(
            [{"type": "tool_result", "tool_use_id": "toolu_01", "content": "def login(): ..."}],
            uuid="msg-003",
            timestamp="2024-01-15T10:00:06Z",
        ),
        make_system("Conversation compacted", level="warning", timestamp="2024-01-15T10:00:30Z"),
        make_assistant(
            [{"type": "text", "text": "Here's an example of JWT authentication in Python."}],
            uuid="msg-004",
            timestamp="2024-01-15T10:01:10Z",
            usage={"input_tokens": 800, "output_tokens": 200},
        ),
    ]

    lines = [json.dumps(record) for record in records]
    # Noise: blank line, broken JSON, unknown record type, assistant without a model
    lines.insert(2, "")
    lines.insert(4, '{"type": "user", "message": {')
    lines.append(json.dumps({"type": "file-history-snapshot", "messageId": "x"}))
    broken = make_assistant([{"type": "text", "text": "lost"}], uuid="msg-005")
    del broken["message"]["model"]
    lines.append(json.dumps(broken))
    return lines


@pytest.fixture
def sample_session_jsonl(temp_dir, sample_lines):
    """Create a sample JSONL session file."""
    session_file = temp_dir / f"{SESSION_ID}.jsonl"
    session_file.write_text("\n".join(sample_lines) + "\n", encoding="utf-8")
    return session_file


@pytest.fixture
def projects_dir(temp_dir, sample_lines, make_user, make_assistant):
    """A ~/.claude/projects style tree with two projects."""
    root = temp_dir / "projects"

    webapp = root / "-home-user-Code-webapp"
    webapp.mkdir(parents=True)
    (webapp / f"{SESSION_ID}.jsonl").write_text("\n".join(sample_lines) + "\n", encoding="utf-8")

    cli_tool = root / "-home-user-Code-cli-tool"
    cli_tool.mkdir(parents=True)
    other = [
        make_user("Why does the parser crash on empty input?", uuid="o-1",
                  timestamp="2024-02-01T09:00:00Z"),
        make_assistant([{"type": "text", "text": "The tokenizer assumes one token."}],
                       uuid="o-2", timestamp="2024-02-01T09:00:04Z"),
    ]
    (cli_tool / "9b8c7d6e-0000-4000-8000-000000000001.jsonl").write_text(
        "\n".join(json.dumps(r) for r in other) + "\n", encoding="utf-8"
    )
    # A session with nothing decodable
    (cli_tool / "0a0a0a0a-0000-4000-8000-000000000002.jsonl").write_text(
        "not json\n", encoding="utf-8"
    )

    return root
