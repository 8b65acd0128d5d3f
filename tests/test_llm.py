"""Tests for the ollama-backed client: request shape, chunk parsing and error wrapping."""

import json
from types import SimpleNamespace
from unittest.mock import patch

import httpx
import pytest
from ollama import ResponseError

from agent.errors import LLMError
from agent.llm import LLMClient, StreamChunk, ToolCallRequest, parse_chunk


def _chunk(content="", tool_calls=None):
    return SimpleNamespace(message=SimpleNamespace(content=content, tool_calls=tool_calls))


def _tool_call(name, arguments):
    return SimpleNamespace(function=SimpleNamespace(name=name, arguments=arguments))


@pytest.fixture
def mock_client():
    with patch("agent.llm.Client") as client_cls:
        yield client_cls


def _llm(**kwargs):
    return LLMClient("https://ollama.example", "test-model", "secret", **kwargs)


def test_client_sends_bearer_token(mock_client):
    _llm()
    mock_client.assert_called_once_with(
        host="https://ollama.example",
        headers={"Authorization": "Bearer secret"},
    )


def test_stream_chat_passes_generation_options(mock_client):
    mock_client.return_value.chat.return_value = iter([_chunk("hi")])
    llm = _llm(temperature=0.2, max_output_tokens=8192)
    messages = [{"role": "user", "content": "hello"}]
    tools = [{"type": "function", "function": {"name": "read_file"}}]

    chunks = list(llm.stream_chat(messages, tools=tools))

    assert chunks == [StreamChunk(content="hi")]
    mock_client.return_value.chat.assert_called_once_with(
        model="test-model",
        messages=messages,
        tools=tools,
        options={"temperature": 0.2, "num_predict": 8192},
        stream=True,
    )


def test_stream_chat_yields_text_and_tool_calls(mock_client):
    mock_client.return_value.chat.return_value = iter([
        _chunk("Reading "),
        _chunk("", [_tool_call("read_file", {"path": "a.txt"})]),
    ])
    chunks = list(_llm().stream_chat([]))
    assert [c.content for c in chunks] == ["Reading ", ""]
    assert chunks[1].tool_calls == [ToolCallRequest("read_file", {"path": "a.txt"})]


def test_parse_chunk_accepts_plain_dicts():
    raw = {
        "message": {
            "role": "assistant",
            "content": "ok",
            "tool_calls": [{"function": {"name": "list_files", "arguments": '{"directory": "."}'}}],
        }
    }
    chunk = parse_chunk(raw)
    assert chunk.content == "ok"
    assert chunk.tool_calls == [ToolCallRequest("list_files", '{"directory": "."}')]


def test_parse_chunk_without_message():
    assert parse_chunk({"done": True}) == StreamChunk()


def test_response_error_becomes_llm_error(mock_client):
    mock_client.return_value.chat.side_effect = ResponseError("unauthorized", 401)
    with pytest.raises(LLMError, match="401"):
        list(_llm().stream_chat([]))


def test_connection_error_becomes_llm_error(mock_client):
    mock_client.return_value.chat.side_effect = httpx.ConnectError("refused")
    with pytest.raises(LLMError, match="Connection error"):
        list(_llm().stream_chat([]))


def test_broken_stream_becomes_llm_error(mock_client):
    def broken():
        yield _chunk("par")
        raise json.JSONDecodeError("Expecting value", "{", 1)

    mock_client.return_value.chat.return_value = broken()
    stream = _llm().stream_chat([])
    assert next(stream).content == "par"
    with pytest.raises(LLMError, match="Malformed"):
        next(stream)
