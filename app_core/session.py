import sys
import logging
from typing import Callable, List, Optional

from agent.dispatch import ToolDispatcher
from agent.llm import LLMClient, ToolCallRequest
from agent.memory import ConversationHistory
from agent.tools import get_tool_schemas
from .console import Colors, print_colored


logger = logging.getLogger(__name__)


class ChatSession:
    """
    Interactive read / stream / dispatch loop.

    One request is in flight at a time and tool calls run one after another
    in the order the model returned them.
    """

    def __init__(self, llm: LLMClient, history: ConversationHistory,
                 dispatcher: ToolDispatcher, ask: Callable[[str], str] = input) -> None:
        self.llm = llm
        self.history = history
        self.dispatcher = dispatcher
        self.ask = ask
        self.tools = get_tool_schemas(dispatcher.specs)

    def _print_header(self) -> None:
        print_colored("Coding Assistant initialized. Type \"exit\" to quit.", Colors.CYAN)
        print_colored(f"Model: {self.llm.model_name}", Colors.BLUE)
        print_colored(f"Endpoint: {self.llm.host}", Colors.BLUE)

    def run(self, initial_message: Optional[str] = None) -> None:
        self._print_header()

        try:
            if initial_message and not self.handle_input(initial_message):
                return

            while True:
                try:
                    user_input = self.ask(f"\n{Colors.GREEN}You: {Colors.RESET}").strip()
                except EOFError:
                    print_colored("\nGoodbye!", Colors.CYAN)
                    break
                if not self.handle_input(user_input):
                    break
        except KeyboardInterrupt:
            print_colored("\n\nInterrupted. Goodbye!", Colors.CYAN)

    def handle_input(self, user_input: str) -> bool:
        """Process one line of user input. Returns False once the session should close."""
        user_input = user_input.strip()
        if user_input.lower() == 'exit':
            print_colored("Goodbye!", Colors.CYAN)
            return False
        if not user_input:
            return True

        self.history.add_user(user_input)
        try:
            tool_calls = self._stream_response()
            self._dispatch_tool_calls(tool_calls)
        except KeyboardInterrupt:
            print_colored("\n\nResponse interrupted", Colors.YELLOW)
            return True
        except Exception as e:
            logger.error(f"Model request failed: {e}")
            print_colored(f"\nError: {e}", Colors.RED)
        return True

    def _stream_response(self) -> List[ToolCallRequest]:
        """Stream the model's reply to the terminal and record it.

        Only the last non-empty batch of tool calls in the stream is kept.
        """
        print(f"\n{Colors.BLUE}Assistant: {Colors.RESET}")
        content_parts: List[str] = []
        tool_calls: List[ToolCallRequest] = []

        for chunk in self.llm.stream_chat(self.history.messages(), tools=self.tools):
            if chunk.content:
                print(chunk.content, end='')
                sys.stdout.flush()
                content_parts.append(chunk.content)
            if chunk.tool_calls:
                tool_calls = chunk.tool_calls
        print()

        content = ''.join(content_parts)
        logger.debug(f"Streamed content length: {len(content)}, tool calls: {len(tool_calls)}")
        self.history.add_assistant(content)
        return tool_calls

    def _dispatch_tool_calls(self, tool_calls: List[ToolCallRequest]) -> None:
        if not tool_calls:
            return

        print_colored("\nExecuting tool calls...", Colors.YELLOW)
        for call in tool_calls:
            print_colored(f"\nExecuting tool: {call.name}", Colors.YELLOW)
            result = self.dispatcher.dispatch(call.name, call.arguments)
            color = Colors.GREEN if result.ok else Colors.RED
            print_colored(f"Tool result: {result.to_json(indent=2)}", color)
            self.history.add_tool(call.name, result.to_json())
