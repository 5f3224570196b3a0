"""Deterministic placeholder replies used when no backend is configured."""

from __future__ import annotations

from collections.abc import Sequence

from infergate.core.models import ChatCompletionResponse, Choice, Message, Usage

ECHO_PREFIX = "Echo: "


def extract_last_user_message(messages: Sequence[Message]) -> str:
    for message in reversed(messages):
        if message.role == "user":
            return message.content
    return ""


def approximate_tokens(text: str) -> int:
    # 按 UTF-8 字节数估算，约 4 字节折算 1 个 token
    if not text:
        return 0
    return (len(text.encode("utf-8")) + 3) // 4


def build_echo_response(request_id: str, prompt: str) -> ChatCompletionResponse:
    reply = f"{ECHO_PREFIX}{prompt}"
    prompt_tokens = approximate_tokens(prompt)
    completion_tokens = approximate_tokens(reply)
    return ChatCompletionResponse(
        id=request_id,
        object="chat.completion",
        choices=[
            Choice(
                index=0,
                message=Message(role="assistant", content=reply),
                finish_reason="stop",
            )
        ],
        usage=Usage(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        ),
    )
