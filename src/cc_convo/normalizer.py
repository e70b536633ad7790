"""Convert decoded records into uniform timeline events."""

from cc_convo.decoder import decode_line
from cc_convo.models import NormalizedEvent, ToolInfo
from cc_convo.records import (
    AssistantRecord,
    DecodedRecord,
    SummaryRecord,
    SystemRecord,
    TextBlock,
    ThinkingBlock,
    ToolResultBlock,
    ToolUseBlock,
    UserRecord,
)

DEFAULT_SYSTEM_LEVEL = "info"


def normalize(record: DecodedRecord) -> NormalizedEvent | None:
    """Produce the timeline event for a record; summaries produce none."""
    if isinstance(record, UserRecord):
        return normalize_user(record)
    if isinstance(record, AssistantRecord):
        return normalize_assistant(record)
    if isinstance(record, SystemRecord):
        return normalize_system(record)
    if isinstance(record, SummaryRecord):
        return None
    raise TypeError(f"not a decoded record: {type(record).__name__}")


def decode_and_normalize(line: str | bytes) -> NormalizedEvent | None:
    """Decode one log line straight into a timeline event.

    Returns None for unparseable lines and for summary records.
    """
    record = decode_line(line)
    if record is None:
        return None
    return normalize(record)


def normalize_user(record: UserRecord) -> NormalizedEvent:
    content = record.message.content
    if isinstance(content, str):
        text = content
    else:
        parts = []
        for block in content:
            if isinstance(block, (TextBlock, ToolResultBlock)):
                parts.append(block.text)
            # images carry no text
        text = "\n".join(parts)

    return NormalizedEvent(
        timestamp=record.timestamp,
        role="user",
        content=text,
    )


def normalize_assistant(record: AssistantRecord) -> NormalizedEvent:
    """Fold the assistant's blocks into a single event.

    A message may carry several thinking or tool-use blocks but the event
    keeps one of each: the first thinking block and the last tool use.
    """
    texts: list[str] = []
    thinking: str | None = None
    tool_info: ToolInfo | None = None

    for block in record.message.content:
        if isinstance(block, TextBlock):
            texts.append(block.text)
        elif isinstance(block, ThinkingBlock):
            if thinking is None:
                thinking = block.thinking
        elif isinstance(block, ToolUseBlock):
            tool_info = ToolInfo(name=block.name, id=block.id, input=block.input)

    return NormalizedEvent(
        timestamp=record.timestamp,
        role="assistant",
        content="\n".join(texts),
        tool_info=tool_info,
        thinking=thinking,
        usage=record.message.usage,
        model=record.message.model,
    )


def normalize_system(record: SystemRecord) -> NormalizedEvent:
    level = record.level if record.level is not None else DEFAULT_SYSTEM_LEVEL
    return NormalizedEvent(
        timestamp=record.timestamp,
        role=f"system:{level}",
        content=record.content,
    )
