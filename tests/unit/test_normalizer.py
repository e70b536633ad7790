"""Tests for the normalizer module."""

import json

import pytest

from cc_convo.decoder import decode_line
from cc_convo.models import ToolInfo
from cc_convo.normalizer import decode_and_normalize, normalize


def test_user_plain_text_is_verbatim(make_user):
    event = decode_and_normalize(json.dumps(make_user("  keep\n  spacing  ")))

    assert event.role == "user"
    assert event.content == "  keep\n  spacing  "
    assert event.tool_info is None
    assert event.thinking is None
    assert event.usage is None
    assert event.model is None


def test_user_blocks_join_text_and_tool_results(make_user):
    raw = make_user(
        [
            {"type": "text", "text": "first"},
            {
                "type": "image",
                "source": {"type": "base64", "media_type": "image/png", "data": "AAAA"},
            },
            {"type": "tool_result", "tool_use_id": "t1", "content": "second"},
            {"type": "text", "text": "third"},
        ]
    )

    event = decode_and_normalize(json.dumps(raw))

    assert event.content == "first\nsecond\nthird"


def test_user_image_only_has_empty_content(make_user):
    raw = make_user(
        [{"type": "image", "source": {"type": "base64", "media_type": "image/png", "data": "A"}}]
    )

    assert decode_and_normalize(json.dumps(raw)).content == ""


def test_assistant_text_blocks_are_newline_joined(make_assistant):
    raw = make_assistant([{"type": "text", "text": "one"}, {"type": "text", "text": "two"}])

    event = decode_and_normalize(json.dumps(raw))

    assert event.role == "assistant"
    assert event.content == "one\ntwo"
    assert event.model == "claude-sonnet-4-20250514"


def test_assistant_keeps_first_thinking_block(make_assistant):
    raw = make_assistant(
        [
            {"type": "thinking", "thinking": "first thought", "signature": "a"},
            {"type": "text", "text": "reply"},
            {"type": "thinking", "thinking": "second thought", "signature": "b"},
        ]
    )

    event = decode_and_normalize(json.dumps(raw))

    assert event.thinking == "first thought"


def test_assistant_keeps_last_tool_use(make_assistant):
    raw = make_assistant(
        [
            {"type": "tool_use", "id": "t1", "name": "Read", "input": {"file_path": "a.py"}},
            {"type": "tool_use", "id": "t2", "name": "Edit", "input": {"file_path": "b.py"}},
        ]
    )

    event = decode_and_normalize(json.dumps(raw))

    assert event.tool_info == ToolInfo(name="Edit", id="t2", input={"file_path": "b.py"})
    assert event.content == ""


def test_assistant_usage_is_copied(make_assistant):
    usage = {
        "input_tokens": 7,
        "output_tokens": 3,
        "cache_creation_input_tokens": 100,
        "cache_read_input_tokens": 20,
    }
    event = decode_and_normalize(json.dumps(make_assistant([], usage=usage)))

    assert event.usage.input_tokens == 7
    assert event.usage.output_tokens == 3
    assert event.usage.cache_creation_input_tokens == 100
    assert event.usage.cache_read_input_tokens == 20


def test_system_level_defaults_to_info(make_system):
    event = decode_and_normalize(json.dumps(make_system("started")))

    assert event.role == "system:info"
    assert event.content == "started"


def test_system_level_is_used_in_role(make_system):
    event = decode_and_normalize(json.dumps(make_system("api error", level="error")))

    assert event.role == "system:error"


def test_summary_produces_no_event():
    record = decode_line('{"type": "summary", "summary": "s"}')

    assert record is not None
    assert normalize(record) is None
    assert decode_and_normalize('{"type": "summary", "summary": "s"}') is None


def test_timestamp_is_carried(make_user):
    event = decode_and_normalize(json.dumps(make_user("x", timestamp="2024-03-01T08:30:00.250Z")))

    assert event.timestamp.isoformat() == "2024-03-01T08:30:00.250000+00:00"


def test_normalize_rejects_non_records():
    with pytest.raises(TypeError):
        normalize("not a record")


@pytest.mark.parametrize(
    "line",
    [
        "",
        "   ",
        "{}",
        "{",
        "}}}",
        "\x00\x01\x02",
        "\ud800",
        '{"type": "assistant", "message": null}',
        '{"type": "user", "message": {"role": "user"}}',
        '{"type": "user", "message": {"role": "user", "content": {"a": 1}}}',
        '{"type": "system", "content": ["x"]}',
        '{"type": ["user"]}',
        "1e999999",
        "9" * 10_000,
        '{"type": "assistant", "message": {"content": "should be a list"}}',
    ],
)
def test_decode_and_normalize_never_raises(line):
    assert decode_and_normalize(line) is None
