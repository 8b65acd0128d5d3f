"""Tests for the in-process conversation history."""

from agent.memory import ConversationHistory


def test_system_prompt_is_first_turn():
    history = ConversationHistory("be helpful")
    assert history.messages() == [{"role": "system", "content": "be helpful"}]


def test_turns_keep_insertion_order():
    history = ConversationHistory()
    history.add_user("hi")
    history.add_assistant("hello")
    history.add_tool("read_file", '{"content": "x"}')
    assert history.messages() == [
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
        {"role": "tool", "content": '{"content": "x"}', "tool_name": "read_file"},
    ]


def test_messages_are_copies():
    history = ConversationHistory()
    history.add_user("hi")
    history.messages().clear()
    history.messages()[0]["content"] = "changed"
    assert history.messages() == [{"role": "user", "content": "hi"}]
    assert len(history) == 1
