"""OpenAI-style chat completion models.

JSON ``null`` in any known field decodes to that field's zero value (``""``,
``0``, ``False``, empty list or empty object), including ``null`` entries inside
``messages`` and ``choices``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _null_items_as_empty(value: object) -> object:
    if isinstance(value, list):
        return [{} if item is None else item for item in value]
    return value


class Message(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: str = ""
    content: str = ""

    @field_validator("role", "content", mode="before")
    @classmethod
    def _null_text_as_empty(cls, value: object) -> object:
        # 工具调用类回复的 content 可能为 null
        return "" if value is None else value


class ChatCompletionRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    messages: list[Message] = Field(default_factory=list)
    stream: bool = False

    @field_validator("messages", mode="before")
    @classmethod
    def _null_messages_as_empty(cls, value: object) -> object:
        return [] if value is None else _null_items_as_empty(value)

    @field_validator("stream", mode="before")
    @classmethod
    def _null_stream_as_false(cls, value: object) -> object:
        return False if value is None else value


class Usage(BaseModel):
    model_config = ConfigDict(extra="allow")

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @field_validator("prompt_tokens", "completion_tokens", "total_tokens", mode="before")
    @classmethod
    def _null_count_as_zero(cls, value: object) -> object:
        return 0 if value is None else value


class Choice(BaseModel):
    model_config = ConfigDict(extra="allow")

    index: int = 0
    message: Message = Field(default_factory=Message)
    finish_reason: str = ""

    @field_validator("index", mode="before")
    @classmethod
    def _null_index_as_zero(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("message", mode="before")
    @classmethod
    def _null_message_as_empty(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("finish_reason", mode="before")
    @classmethod
    def _null_finish_reason_as_empty(cls, value: object) -> object:
        return "" if value is None else value


class ChatCompletionResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = ""
    object: str = "chat.completion"
    choices: list[Choice] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)

    @field_validator("id", "object", mode="before")
    @classmethod
    def _null_text_as_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("choices", mode="before")
    @classmethod
    def _null_choices_as_empty(cls, value: object) -> object:
        return [] if value is None else _null_items_as_empty(value)

    @field_validator("usage", mode="before")
    @classmethod
    def _null_usage_as_zero(cls, value: object) -> object:
        return {} if value is None else value
