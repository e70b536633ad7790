"""Tests for Markdown export."""

import pytest

from cc_convo.export import export_session, render_markdown
from cc_convo.parser import parse_file

SESSION_ID = "3f2a9c1e-5b7d-4e2a-9f10-8c6d5e4b3a21"


@pytest.fixture
def events(sample_session_jsonl):
    return parse_file(sample_session_jsonl)


def test_header(events):
    markdown = render_markdown(SESSION_ID, events)

    assert markdown.startswith("# Claude Code Conversation\n")
    assert f"**Session ID**: {SESSION_ID}" in markdown
    assert "**Duration**: 1m 10s" in markdown
    assert "**Messages**: 5" in markdown
    assert "**Tokens**: 2,000 → 500" in markdown


def test_events_are_rendered_in_order(events):
    markdown = render_markdown(SESSION_ID, events)

    user = markdown.index("How do I implement authentication?")
    reply = markdown.index("For authentication, you can use JWT tokens.")
    system = markdown.index("> Conversation compacted")
    last = markdown.index("Here's an example of JWT authentication in Python.")
    assert user < reply < system < last
    assert markdown.count("## User [") == 2
    assert markdown.count("## Assistant [") == 2
    assert markdown.count("## System [") == 1
    assert "(claude-sonnet-4-20250514)" in markdown
    assert "*Tokens: 1200 → 300*" in markdown


def test_thinking_omitted_by_default(events):
    markdown = render_markdown(SESSION_ID, events)

    assert "They want a JWT example." not in markdown
    assert "*[Thinking block omitted - use --include-thinking to include]*" in markdown


def test_thinking_included(events):
    markdown = render_markdown(SESSION_ID, events, include_thinking=True)

    assert "<summary>Thinking</summary>" in markdown
    assert "They want a JWT example." in markdown


def test_tools_only_when_requested(events):
    assert "### Tool: Read" not in render_markdown(SESSION_ID, events)

    markdown = render_markdown(SESSION_ID, events, include_tools=True)

    assert "### Tool: Read" in markdown
    assert '"file_path": "/home/user/Code/webapp/auth.py"' in markdown


def test_empty_session():
    assert render_markdown(SESSION_ID, []) == "# Claude Code Conversation\n"


def test_export_session_writes_file(events, temp_dir):
    output = temp_dir / "out.md"

    content = export_session(SESSION_ID, events, output, include_thinking=True)

    assert output.read_text(encoding="utf-8") == content
    assert "They want a JWT example." in content
