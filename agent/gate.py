"""
Interactive confirmation for tools that modify the system.
"""

import logging
from typing import Callable, Dict

from app_core.console import Colors, get_user_confirmation, print_colored

from .tools import ToolResult, ToolSpec, printable


logger = logging.getLogger(__name__)


class ConfirmationGate:
    """Shows what a tool is about to do and runs it only after a fresh 'yes'."""

    def __init__(self, ask: Callable[[str], str] = input,
                 out: Callable[[str, str], None] = print_colored):
        self.ask = ask
        self.out = out

    def run(self, spec: ToolSpec, args: Dict[str, str]) -> ToolResult:
        if spec.preview:
            self.out('', Colors.RESET)
            for line in spec.preview(args):
                self.out(printable(line), Colors.YELLOW)

        if get_user_confirmation("Do you want to proceed?", ask=self.ask):
            logger.info(f"User approved {spec.name}")
            return spec.handler(args)

        logger.info(f"User declined {spec.name}")
        return ToolResult.cancelled(f"{spec.operation} operation cancelled by user")
