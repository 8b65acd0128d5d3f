"""
File and shell tools the model can call.
Each executor returns a ToolResult and never raises for OS failures.
"""

import json
import logging
import os
import subprocess
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from .errors import ToolArgumentError


logger = logging.getLogger(__name__)

SUCCESS = 'success'
ERROR = 'error'
CANCELLED = 'cancelled'


@dataclass
class ToolResult:
    """Tagged outcome of a tool invocation."""
    status: str
    payload: Dict[str, Any] = field(default_factory=dict)
    message: str = ''

    @classmethod
    def success(cls, **payload: Any) -> 'ToolResult':
        return cls(SUCCESS, payload=payload)

    @classmethod
    def error(cls, message: str) -> 'ToolResult':
        return cls(ERROR, message=message)

    @classmethod
    def cancelled(cls, message: str) -> 'ToolResult':
        return cls(CANCELLED, message=message)

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        if self.status == SUCCESS:
            return dict(self.payload)
        if self.status == CANCELLED:
            return {'cancelled': True, 'message': self.message}
        return {'error': self.message}

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


@dataclass(frozen=True)
class ToolSpec:
    """Static registration of a tool: name, argument shape and handler."""
    name: str
    description: str
    parameters: Dict[str, Any]
    handler: Callable[[Dict[str, str]], ToolResult]
    requires_confirmation: bool = False
    operation: str = ''
    preview: Optional[Callable[[Dict[str, str]], List[str]]] = None

    @property
    def required(self) -> List[str]:
        return list(self.parameters.get('required', []))

    def validate(self, raw_args: Any) -> Dict[str, str]:
        """Decode raw model arguments and check the required string fields.

        Raises:
            ToolArgumentError: if the arguments do not match the declared shape
            json.JSONDecodeError: if a string payload is not valid JSON
        """
        args = json.loads(raw_args) if isinstance(raw_args, str) else raw_args
        if args is None:
            args = {}
        if not isinstance(args, Mapping):
            raise ToolArgumentError(f"arguments must be an object, got {type(args).__name__}")

        validated = {}
        for name in self.required:
            if name not in args:
                raise ToolArgumentError(f"missing required argument '{name}'")
            value = args[name]
            if not isinstance(value, str):
                raise ToolArgumentError(f"argument '{name}' must be a string")
            validated[name] = value
        return validated

    def to_ollama_tool(self) -> Dict[str, Any]:
        return {
            'type': 'function',
            'function': {
                'name': self.name,
                'description': self.description,
                'parameters': self.parameters,
            },
        }


def printable(text: str) -> str:
    """Escape characters (lone surrogates) that cannot be written as UTF-8."""
    return text.encode('utf-8', 'backslashreplace').decode('utf-8')


def truncate_preview(text: str, limit: int = 100) -> str:
    """Shorten text for display, marking the cut with '...'."""
    if len(text) > limit:
        return text[:limit] + '...'
    return text


class ToolExecutor:
    """
    Performs the tool effects relative to a working directory.

    Commands run through the OS shell with no allowlist and no timeout;
    the user confirms each one before it gets here.
    """

    def __init__(self, cwd: Optional[str] = None):
        self.cwd = cwd or os.getcwd()

    def resolve(self, path: str) -> str:
        return os.path.abspath(os.path.join(self.cwd, os.path.expanduser(path)))

    def read_file(self, path: str) -> ToolResult:
        try:
            with open(self.resolve(path), 'r', encoding='utf-8', newline='') as f:
                content = f.read()
            return ToolResult.success(content=content)
        except (OSError, UnicodeDecodeError) as e:
            return ToolResult.error(f"Failed to read file: {e}")

    def write_file(self, path: str, content: str) -> ToolResult:
        try:
            file_path = self.resolve(path)
            # encode first so a bad string never truncates the existing file
            data = content.encode('utf-8')
            os.makedirs(os.path.dirname(file_path), exist_ok=True)
            with open(file_path, 'wb') as f:
                f.write(data)
            return ToolResult.success(success=True, message=f"Successfully wrote to {path}")
        except (OSError, UnicodeError) as e:
            return ToolResult.error(f"Failed to write file: {printable(str(e))}")

    def list_files(self, directory: str) -> ToolResult:
        try:
            files = sorted(os.listdir(self.resolve(directory)))
            return ToolResult.success(files=files)
        except OSError as e:
            return ToolResult.error(f"Failed to list files: {e}")

    def execute_command(self, command: str) -> ToolResult:
        logger.info(f"Running shell command: {command}")
        try:
            result = subprocess.run(
                command,
                shell=True,
                capture_output=True,
                encoding='utf-8',
                errors='replace',
                cwd=self.cwd,
                check=True,
            )
            if result.stderr:
                return ToolResult.success(output=result.stdout, stderr=result.stderr)
            return ToolResult.success(output=result.stdout)
        except subprocess.CalledProcessError as e:
            message = str(e)
            stderr = (e.stderr or '').strip()
            if stderr:
                message = f"{message}\n{stderr}"
            return ToolResult.error(f"Command execution failed: {message}")
        except (OSError, ValueError) as e:
            return ToolResult.error(f"Command execution failed: {printable(str(e))}")


def _string_params(**fields: str) -> Dict[str, Any]:
    return {
        'type': 'object',
        'properties': {
            name: {'type': 'string', 'description': description}
            for name, description in fields.items()
        },
        'required': list(fields),
    }


def _write_preview(args: Dict[str, str]) -> List[str]:
    return [
        f"I want to write to file: {args['path']}",
        f"Content preview: {truncate_preview(args['content'])}",
    ]


def _command_preview(args: Dict[str, str]) -> List[str]:
    return [f"I want to execute command: {args['command']}"]


def build_tool_specs(executor: ToolExecutor) -> Dict[str, ToolSpec]:
    """Build the name -> ToolSpec registry bound to an executor."""
    specs = [
        ToolSpec(
            name='read_file',
            description='Read content from a file',
            parameters=_string_params(path='File path to read'),
            handler=lambda args: executor.read_file(args['path']),
        ),
        ToolSpec(
            name='write_file',
            description='Write content to a file (requires user confirmation)',
            parameters=_string_params(
                path='File path to write',
                content='Content to write to the file',
            ),
            handler=lambda args: executor.write_file(args['path'], args['content']),
            requires_confirmation=True,
            operation='File write',
            preview=_write_preview,
        ),
        ToolSpec(
            name='list_files',
            description='List files in a directory',
            parameters=_string_params(directory='Directory path to list files from'),
            handler=lambda args: executor.list_files(args['directory']),
        ),
        ToolSpec(
            name='execute_command',
            description='Execute shell commands (requires user confirmation)',
            parameters=_string_params(command='Shell command to execute'),
            handler=lambda args: executor.execute_command(args['command']),
            requires_confirmation=True,
            operation='Command execution',
            preview=_command_preview,
        ),
    ]
    return {spec.name: spec for spec in specs}


def get_tool_schemas(specs: Mapping[str, ToolSpec]) -> List[Dict[str, Any]]:
    """Tool declarations in the function-calling format ollama accepts."""
    return [spec.to_ollama_tool() for spec in specs.values()]
