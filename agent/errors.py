"""
Exception types shared by the assistant components.
"""


class AssistantError(Exception):
    """Base class for assistant errors."""
    pass


class ConfigError(AssistantError):
    """Raised when required configuration is missing or invalid."""
    pass


class ToolArgumentError(AssistantError):
    """Raised when tool arguments do not match the declared shape."""
    pass


class LLMError(AssistantError):
    """Raised when talking to the remote model fails (network, HTTP status, bad stream)."""
    pass
