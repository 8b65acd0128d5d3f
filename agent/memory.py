"""
In-process conversation history.
Turns are kept in order for the lifetime of the session and never persisted.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional


SYSTEM = 'system'
USER = 'user'
ASSISTANT = 'assistant'
TOOL = 'tool'


@dataclass(frozen=True)
class Turn:
    role: str
    content: str
    tool_name: Optional[str] = None

    def to_message(self) -> Dict[str, str]:
        message = {'role': self.role, 'content': self.content}
        if self.tool_name:
            message['tool_name'] = self.tool_name
        return message


class ConversationHistory:
    """Append-only list of conversation turns."""

    def __init__(self, system_prompt: Optional[str] = None):
        self._turns: List[Turn] = []
        if system_prompt:
            self._turns.append(Turn(SYSTEM, system_prompt))

    def add_user(self, content: str) -> None:
        self._turns.append(Turn(USER, content))

    def add_assistant(self, content: str) -> None:
        self._turns.append(Turn(ASSISTANT, content))

    def add_tool(self, tool_name: str, content: str) -> None:
        self._turns.append(Turn(TOOL, content, tool_name=tool_name))

    def messages(self) -> List[Dict[str, str]]:
        """Render the turns in the message format the chat API expects."""
        return [turn.to_message() for turn in self._turns]

    def __iter__(self) -> Iterator[Turn]:
        return iter(list(self._turns))

    def __len__(self) -> int:
        return len(self._turns)
