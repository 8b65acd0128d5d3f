#!/usr/bin/env python3
"""
Coding Assistant - Main Application
A streaming chat interface to a hosted LLM with file and shell tools.
"""

import os
import re
import sys
import logging
import argparse
from typing import List, Optional

from agent.dispatch import ToolDispatcher
from agent.errors import ConfigError
from agent.gate import ConfirmationGate
from agent.llm import LLMClient
from agent.memory import ConversationHistory
from agent.tools import ToolExecutor, build_tool_specs

from app_core.config import load_config, setup_logging, validate_config
from app_core.session import ChatSession
from app_core.console import print_colored, Colors


CREATE_PATTERN = re.compile(r'^create\s+(\S+\.txt)(?=\s|$)', re.IGNORECASE)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Chat with a hosted LLM that can read, write and list files and run shell commands.",
    )
    parser.add_argument(
        'message', nargs='*',
        help="optional first message; 'create <name>.txt' just creates an empty file and exits",
    )
    return parser


def create_file_directly(executor: ToolExecutor, filename: str) -> int:
    """Create an empty file without going through the chat loop or a confirmation."""
    result = executor.write_file(filename, '')
    if result.ok:
        print_colored(result.payload['message'], Colors.GREEN)
        return 0
    print_colored(f"❌ {result.message}", Colors.RED)
    return 1


def main(argv: Optional[List[str]] = None) -> None:
    """Application entrypoint that wires up dependencies and runs the chat session."""
    args = build_parser().parse_args(argv)
    initial_message = ' '.join(args.message).strip()

    config = load_config()

    try:
        validate_config(config)
    except ConfigError as e:
        print_colored(f"❌ Error: {e}", Colors.RED)
        sys.exit(1)

    setup_logging(config.log_level_str)
    logger = logging.getLogger(__name__)
    logger.info(f"Logging level set to: {config.log_level_str}")

    executor = ToolExecutor(cwd=os.getcwd())

    match = CREATE_PATTERN.match(initial_message)
    if match:
        logger.info(f"Creating {match.group(1)} directly")
        sys.exit(create_file_directly(executor, match.group(1)))

    logger.info(f"Initializing LLM client with host: {config.host}")
    logger.info(f"Model: {config.model_name}")

    llm = LLMClient(
        config.host,
        config.model_name,
        config.api_key,
        temperature=config.temperature,
        max_output_tokens=config.max_output_tokens,
    )
    history = ConversationHistory(config.system_prompt)
    dispatcher = ToolDispatcher(build_tool_specs(executor), ConfirmationGate(ask=input))

    session = ChatSession(llm=llm, history=history, dispatcher=dispatcher, ask=input)
    session.run(initial_message or None)


if __name__ == "__main__":
    main()
