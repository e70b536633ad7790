"""Pydantic models for the records of a Claude Code session file.

Every line is a JSON object whose ``type`` selects one of ``summary``,
``user``, ``assistant`` or ``system``. Field types are strict (no bool
where an int is expected, no number where a string is expected), while
unknown extra fields are ignored so that newer Claude Code versions still
decode. Top-level record keys are camelCase; message and block keys are
snake_case, as the API writes them.
"""

from typing import Annotated, Any, Literal

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    TypeAdapter,
)
from pydantic.alias_generators import to_camel


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


# --- Content blocks ---


class TextBlock(FrozenModel):
    type: Literal["text"] = "text"
    text: StrictStr


class ThinkingBlock(FrozenModel):
    type: Literal["thinking"] = "thinking"
    thinking: StrictStr
    signature: StrictStr


class ToolUseBlock(FrozenModel):
    type: Literal["tool_use"] = "tool_use"
    id: StrictStr
    name: StrictStr
    input: Any  # required key, arbitrary JSON value (null included)


class ToolResultText(FrozenModel):
    type: Literal["text"]
    text: StrictStr


class ToolResultPart(FrozenModel):
    """A non-text part of tool output, such as an image."""

    type: StrictStr


ToolResultContentPart = Annotated[
    ToolResultText | ToolResultPart, Field(union_mode="left_to_right")
]


class ToolResultBlock(FrozenModel):
    """Output of a tool call, sent back on a user message.

    ``content`` is a string, a list of parts, or absent.
    """

    type: Literal["tool_result"] = "tool_result"
    tool_use_id: StrictStr
    content: Annotated[
        StrictStr | tuple[ToolResultContentPart, ...] | None,
        Field(union_mode="left_to_right"),
    ] = None
    is_error: StrictBool | None = None

    @property
    def text(self) -> str:
        """The textual output; list parts are newline-joined, images skipped."""
        if self.content is None:
            return ""
        if isinstance(self.content, str):
            return self.content
        return "\n".join(part.text for part in self.content if isinstance(part, ToolResultText))


class ImageSource(FrozenModel):
    type: StrictStr
    media_type: StrictStr
    data: StrictStr


class ImageBlock(FrozenModel):
    type: Literal["image"] = "image"
    source: ImageSource


UserBlock = Annotated[TextBlock | ImageBlock | ToolResultBlock, Field(discriminator="type")]
AssistantBlock = Annotated[TextBlock | ThinkingBlock | ToolUseBlock, Field(discriminator="type")]

# A plain string is tried first, then a list of blocks
UserContent = Annotated[StrictStr | tuple[UserBlock, ...], Field(union_mode="left_to_right")]


# --- Messages ---


class TokenUsage(FrozenModel):
    """Token counts reported on an assistant message."""

    input_tokens: StrictInt
    output_tokens: StrictInt
    cache_creation_input_tokens: StrictInt | None = None
    cache_read_input_tokens: StrictInt | None = None
    service_tier: StrictStr | None = None


class UserMessage(FrozenModel):
    role: StrictStr
    content: UserContent


class AssistantMessage(FrozenModel):
    id: StrictStr
    type: StrictStr
    role: StrictStr
    model: StrictStr
    content: tuple[AssistantBlock, ...]
    usage: TokenUsage | None = None
    stop_reason: StrictStr | None = None
    stop_sequence: StrictStr | None = None


# --- Records ---


class RecordModel(FrozenModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SummaryRecord(RecordModel):
    type: Literal["summary"]
    summary: StrictStr
    leaf_uuid: StrictStr | None = None
    timestamp: AwareDatetime | None = None


class EventRecord(RecordModel):
    """Fields shared by every user, assistant and system record."""

    uuid: StrictStr
    parent_uuid: StrictStr | None = None
    session_id: StrictStr
    timestamp: AwareDatetime
    cwd: StrictStr
    git_branch: StrictStr | None = None
    user_type: StrictStr | None = None
    version: StrictStr | None = None
    request_id: StrictStr | None = None
    is_sidechain: StrictBool | None = None
    is_meta: StrictBool | None = None


class UserRecord(EventRecord):
    type: Literal["user"]
    message: UserMessage
    tool_use_result: Any = None  # raw JSON, shape varies per tool
    is_compact_summary: StrictBool | None = None


class AssistantRecord(EventRecord):
    type: Literal["assistant"]
    message: AssistantMessage
    is_api_error_message: StrictBool | None = None


class SystemRecord(EventRecord):
    type: Literal["system"]
    content: StrictStr
    level: StrictStr | None = None


DecodedRecord = Annotated[
    SummaryRecord | UserRecord | AssistantRecord | SystemRecord,
    Field(discriminator="type"),
]

RecordAdapter: TypeAdapter[DecodedRecord] = TypeAdapter(DecodedRecord)
UserContentAdapter: TypeAdapter[UserContent] = TypeAdapter(UserContent)

