from typing import Any, Awaitable, Callable, Dict, List, Optional

from mcp import types

from ..errors import DuplicateToolError

ToolHandler = Callable[[Any, Dict[str, Any]], Awaitable[Any]]


class Tool:
    def __init__(self, name: str, description: str, input_schema: Dict[str, Any], domain: str = None, run_fn: ToolHandler = None):
        self.name = name
        self.description = description
        self.input_schema = input_schema
        self.domain = domain
        self.run_fn = run_fn

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )

    @classmethod
    def from_dict(cls, d: dict, domain: str = None, run_fn: ToolHandler = None):
        return cls(
            name=d["name"],
            description=d.get("description", ""),
            input_schema=d.get("parameters", {"type": "object", "properties": {}}),
            domain=domain,
            run_fn=run_fn,
        )


class ToolRegistry:
    """Name -> Tool map, built once at startup. Registration order is catalog order."""

    def __init__(self):
        self._tools: Dict[str, Tool] = {}

    def register_tool(self, tool: Tool):
        existing = self._tools.get(tool.name)
        if existing is not None:
            raise DuplicateToolError(tool.name, existing.domain, tool.domain)
        self._tools[tool.name] = tool

    def get_tool(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def all_tools(self) -> List[Tool]:
        return list(self._tools.values())

    def mcp_descriptions(self) -> List[types.Tool]:
        return [tool.to_mcp_tool() for tool in self.all_tools()]

    def __len__(self):
        return len(self._tools)
