import os
import logging
import platform
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

from agent.errors import ConfigError


DEFAULT_HOST = 'https://ollama.com'
DEFAULT_MODEL = 'gpt-oss:120b'


@dataclass
class Config:
    api_key: str
    host: str
    model_name: str
    temperature: float
    max_output_tokens: Optional[int]
    log_level_str: str
    os_name: str
    system_prompt: str


def setup_logging(log_level_str: str) -> None:
    level = getattr(logging, log_level_str.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True,
    )


def _parse_int_env(name: str, default: Optional[int] = None) -> Optional[int]:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        return int(value.strip())
    except ValueError:
        return default


def _parse_float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        return float(value.strip())
    except ValueError:
        return default


def build_system_prompt(os_name: str) -> str:
    prompt = (
        f"You are a coding assistant running on {os_name} that can help users write code, "
        "fix bugs, and understand programming concepts.\n"
        "You have access to the following tools:\n\n"
        "1. read_file - Read content from a file\n"
        "2. write_file - Write content to a file (requires user confirmation)\n"
        "3. list_files - List files in a directory\n"
        "4. execute_command - Execute shell commands (requires user confirmation)\n\n"
        "For any file or command operations that modify the system, you should:\n"
        "1. Explain what you're going to do\n"
        "2. Ask for confirmation before proceeding\n"
        "3. Execute the operation only after receiving confirmation\n\n"
        "Think step by step when solving problems, and consider best practices "
        "for the programming language in use."
    )
    return prompt


def load_config(env_file: Optional[str] = None) -> Config:
    load_dotenv(env_file)

    log_level_str = os.getenv('LOGGING_LEVEL', 'WARNING').upper()
    if log_level_str.startswith('LOGGING.'):
        log_level_str = log_level_str.replace('LOGGING.', '')

    api_key = (os.getenv('OLLAMA_API_KEY') or '').strip()
    host = os.getenv('OLLAMA_HOST') or DEFAULT_HOST
    model_name = os.getenv('MODEL_NAME', DEFAULT_MODEL)

    temperature = _parse_float_env('TEMPERATURE', 0.2)
    max_output_tokens = _parse_int_env('MAX_OUTPUT_TOKENS', 8192)

    os_name = platform.system()
    system_prompt = os.getenv('SYSTEM_PROMPT') or build_system_prompt(os_name)

    return Config(
        api_key=api_key,
        host=host,
        model_name=model_name,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
        log_level_str=log_level_str,
        os_name=os_name,
        system_prompt=system_prompt,
    )


def validate_config(config: Config) -> None:
    """Raise ConfigError if anything required to start is missing."""
    if not config.api_key:
        raise ConfigError("OLLAMA_API_KEY not set in environment or .env file")
