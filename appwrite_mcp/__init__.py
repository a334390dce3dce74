from .appwrite_client import AppwriteContext
from .config import AppwriteConfig, parse_config
from .dispatcher import ToolDispatcher
from .errors import (
    AppwriteHTTPError,
    AppwriteMCPError,
    AppwriteNotInitializedError,
    ConfigurationError,
    DuplicateToolError,
    InvalidArgumentsError,
    UnknownToolError,
)
from .tools import DOMAINS, Tool, ToolRegistry, build_registry

__version__ = "0.1.0"

__all__ = [
    'AppwriteContext',
    'AppwriteConfig',
    'parse_config',
    'ToolDispatcher',
    'ToolRegistry',
    'Tool',
    'DOMAINS',
    'build_registry',
    'AppwriteMCPError',
    'AppwriteHTTPError',
    'AppwriteNotInitializedError',
    'ConfigurationError',
    'DuplicateToolError',
    'InvalidArgumentsError',
    'UnknownToolError',
]
