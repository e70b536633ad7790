"""Decode raw JSONL log lines into typed records.

The schema evolves between Claude Code versions, so decoding is
best-effort: a line that does not match a known shape is reported as
unparseable (``None``) and never stops the caller from reading the rest
of the file.
"""

from typing import Any

from pydantic import ValidationError

from cc_convo.records import DecodedRecord, RecordAdapter, UserContent, UserContentAdapter


def decode_line(line: str | bytes) -> DecodedRecord | None:
    """Decode one log line, or return None if it is unparseable."""
    try:
        return RecordAdapter.validate_json(line)
    except (ValidationError, ValueError):
        # Invalid JSON and invalid UTF-8 surface as ValidationError;
        # lone surrogates in a str fail to encode with a ValueError
        return None


def decode_record(obj: Any) -> DecodedRecord:
    """Decode an already-parsed JSON value.

    Raises:
        ValidationError: If the value does not match any record shape.
    """
    return RecordAdapter.validate_python(obj)


def decode_user_content(value: Any) -> UserContent:
    """Decode user message content: a plain string first, else a block list.

    Raises:
        ValidationError: If the value is neither.
    """
    return UserContentAdapter.validate_python(value)
