"""
LLM interface using the ollama Python library.
Talks to a hosted Ollama endpoint authenticated with an API key.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import httpx
from ollama import Client, ResponseError

from .errors import LLMError

logger = logging.getLogger(__name__)


@dataclass
class ToolCallRequest:
    """A tool call emitted by the model."""
    name: str
    arguments: Any


@dataclass
class StreamChunk:
    content: str = ''
    tool_calls: List[ToolCallRequest] = field(default_factory=list)


def _get(obj: Any, key: str, default: Any = None) -> Any:
    # ollama returns pydantic objects; older servers/proxies hand back plain dicts
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def _parse_tool_calls(raw_calls: Any) -> List[ToolCallRequest]:
    calls = []
    for raw in raw_calls or []:
        function = _get(raw, 'function')
        if function is None:
            continue
        arguments = _get(function, 'arguments', {})
        if not isinstance(arguments, (dict, str)):
            arguments = dict(arguments)
        calls.append(ToolCallRequest(name=_get(function, 'name', ''), arguments=arguments))
    return calls


def parse_chunk(chunk: Any) -> StreamChunk:
    """Convert one streamed ChatResponse into text and tool calls."""
    message = _get(chunk, 'message')
    if message is None:
        return StreamChunk()
    return StreamChunk(
        content=_get(message, 'content') or '',
        tool_calls=_parse_tool_calls(_get(message, 'tool_calls')),
    )


class LLMClient:
    """Ollama client with bearer-token auth."""

    def __init__(self, host: str, model_name: str, api_key: str,
                 temperature: float = 0.2, max_output_tokens: Optional[int] = 8192):
        """
        Initialize Ollama client.

        Args:
            host: API host (e.g., https://ollama.com)
            model_name: Name of the model to use
            api_key: Credential sent as a bearer token
            temperature: Sampling temperature
            max_output_tokens: Upper bound on generated tokens per response
        """
        self.client = Client(
            host=host,
            headers={'Authorization': f'Bearer {api_key}'},
        )
        self.host = host
        self.model_name = model_name
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

        logger.info(f"Ollama client initialized: {host}")

    def _options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {'temperature': self.temperature}
        if self.max_output_tokens:
            options['num_predict'] = int(self.max_output_tokens)
        return options

    def stream_chat(self, messages: List[Dict[str, str]],
                    tools: Optional[List[Dict]] = None) -> Iterator[StreamChunk]:
        """
        Stream chat completion responses.

        Args:
            messages: List of message dicts with 'role' and 'content'
            tools: Optional tool declarations the model may call

        Yields:
            StreamChunk for every chunk received

        Raises:
            LLMError: on connection, HTTP or stream decoding failures
        """
        logger.debug(f"Streaming request to {self.model_name} with {len(messages)} messages, "
                     f"tools: {tools is not None}")
        try:
            stream = self.client.chat(
                model=self.model_name,
                messages=messages,
                tools=tools,
                options=self._options(),
                stream=True,
            )
            for chunk in stream:
                yield parse_chunk(chunk)
        except ResponseError as e:
            logger.error(f"Model API error ({e.status_code}): {e.error}")
            raise LLMError(f"API error ({e.status_code}): {e.error}") from e
        except (httpx.HTTPError, ConnectionError) as e:
            logger.error(f"Connection error: {e}")
            raise LLMError(f"Connection error: {e}") from e
        except json.JSONDecodeError as e:
            logger.error(f"Malformed stream: {e}")
            raise LLMError(f"Malformed response stream: {e}") from e
