import json
import logging
import time
import uuid
from typing import Any, Dict, List, Optional

from jsonschema import validators
from jsonschema.exceptions import best_match
from mcp import types

from .appwrite_client import AppwriteContext
from .errors import InvalidArgumentsError, UnknownToolError
from .tools import ToolRegistry, build_registry
from .utils.encoding import to_jsonable
from .utils.logging import get_request_logger

logger = logging.getLogger(__name__)


def text_result(text: str, is_error: bool = False) -> types.CallToolResult:
    return types.CallToolResult(content=[types.TextContent(type="text", text=text)], isError=is_error)


def error_result(message: str) -> types.CallToolResult:
    return text_result(f"Error: {message}", is_error=True)


def serialize_result(result: Any) -> str:
    return json.dumps(result, indent=2, ensure_ascii=False, default=to_jsonable)


class ToolDispatcher:
    """
    Routes tool invocations to their handlers.

    Owns no state between calls besides the registry and the Appwrite context,
    both fixed at construction. ``call_tool`` never raises: every failure comes
    back as an ``isError`` result whose text is ``"Error: <message>"``.
    """

    def __init__(self, appwrite: AppwriteContext, registry: Optional[ToolRegistry] = None):
        self.appwrite = appwrite
        self.registry = registry if registry is not None else build_registry()
        self._validators = {}

    def list_tools(self) -> List[types.Tool]:
        return self.registry.mcp_descriptions()

    def validate(self, name: str, schema: Dict[str, Any], arguments: Dict[str, Any]):
        validator = self._validators.get(name)
        if validator is None:
            validator_cls = validators.validator_for(schema)
            validator = self._validators[name] = validator_cls(schema)

        error = best_match(validator.iter_errors(arguments))
        if error is not None:
            location = "/".join(str(part) for part in error.absolute_path)
            detail = f"{location}: {error.message}" if location else error.message
            raise InvalidArgumentsError(name, detail)

    async def dispatch(self, name: str, arguments: Dict[str, Any]) -> Any:
        """Look up, validate and run one tool. Exceptions propagate to the caller."""
        tool = self.registry.get_tool(name)
        if tool is None:
            raise UnknownToolError(name)

        self.validate(name, tool.input_schema, arguments)
        return await tool.run_fn(self.appwrite, arguments)

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        request_log = get_request_logger(uuid.uuid4().hex[:8])
        start_time = time.time()
        # Argument values may hold passwords or file contents, so only key names are logged.
        request_log.info(f"Tool {name} called with keys {sorted(arguments or {})}")

        try:
            result = await self.dispatch(name, arguments or {})
            text = serialize_result(result)
        except (UnknownToolError, InvalidArgumentsError) as e:
            request_log.warning(f"Tool {name} rejected: {e}")
            return error_result(str(e))
        except Exception as e:
            elapsed = time.time() - start_time
            request_log.error(f"Tool {name} failed after {elapsed:.2f}s: {e}", exc_info=True)
            return error_result(str(e))

        request_log.info(f"Tool {name} succeeded in {time.time() - start_time:.2f}s")
        return text_result(text)
