"""
Routes model tool calls to their executors.
"""

import logging
from typing import Any, Mapping

from .gate import ConfirmationGate
from .tools import ToolResult, ToolSpec


logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Looks up a tool, validates its arguments and runs it (through the gate if needed).

    dispatch() never raises: every failure comes back as an error ToolResult.
    """

    def __init__(self, specs: Mapping[str, ToolSpec], gate: ConfirmationGate):
        self.specs = specs
        self.gate = gate

    def dispatch(self, tool_name: str, raw_args: Any) -> ToolResult:
        spec = self.specs.get(tool_name)
        if spec is None:
            logger.warning(f"Unknown tool requested: {tool_name}")
            return ToolResult.error(f"Tool {tool_name} not found")

        try:
            args = spec.validate(raw_args)
            if spec.requires_confirmation:
                return self.gate.run(spec, args)
            return spec.handler(args)
        except Exception as e:
            logger.error(f"Tool {tool_name} failed: {e}")
            return ToolResult.error(f"Failed to execute tool {tool_name}: {e}")
