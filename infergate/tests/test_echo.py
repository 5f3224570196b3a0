import pytest

from infergate.core.echo import approximate_tokens, build_echo_response, extract_last_user_message
from infergate.core.models import Message


def _messages(*pairs: tuple[str, str]) -> list[Message]:
    return [Message(role=role, content=content) for role, content in pairs]


def test_extract_last_user_message_picks_latest_user_turn():
    messages = _messages(("user", "a"), ("assistant", "b"), ("user", "c"))
    assert extract_last_user_message(messages) == "c"


def test_extract_last_user_message_skips_trailing_non_user_turns():
    messages = _messages(("system", "s"), ("user", "question"), ("assistant", "answer"))
    assert extract_last_user_message(messages) == "question"


def test_extract_last_user_message_returns_empty_without_user_turn():
    assert extract_last_user_message([]) == ""
    assert extract_last_user_message(_messages(("assistant", "x"))) == ""


def test_extract_last_user_message_role_match_is_exact():
    assert extract_last_user_message(_messages(("User", "upper"))) == ""


@pytest.mark.parametrize(
    ("text", "expected"),
    [("", 0), ("a", 1), ("ab", 1), ("abcd", 1), ("abcde", 2), ("Echo: hi", 2)],
)
def test_approximate_tokens(text, expected):
    assert approximate_tokens(text) == expected


def test_approximate_tokens_counts_utf8_bytes():
    # 两个汉字共 6 个字节
    assert approximate_tokens("你好") == 2


def test_build_echo_response_shape_and_usage():
    resp = build_echo_response("req-1", "hi")

    assert resp.id == "req-1"
    assert resp.object == "chat.completion"
    assert len(resp.choices) == 1
    choice = resp.choices[0]
    assert choice.index == 0
    assert choice.message.role == "assistant"
    assert choice.message.content == "Echo: hi"
    assert choice.finish_reason == "stop"
    assert resp.usage.prompt_tokens == 1
    assert resp.usage.completion_tokens == 2
    assert resp.usage.total_tokens == 3


def test_build_echo_response_with_empty_prompt():
    resp = build_echo_response("req-2", "")
    assert resp.choices[0].message.content == "Echo: "
    assert resp.usage.prompt_tokens == 0
    assert resp.usage.completion_tokens == 2
    assert resp.usage.total_tokens == 2


def test_build_echo_response_is_deterministic():
    first = build_echo_response("req-3", "same prompt").model_dump_json()
    second = build_echo_response("req-3", "same prompt").model_dump_json()
    assert first == second
