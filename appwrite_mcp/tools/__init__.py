import logging
from typing import List, Optional

from ..errors import AppwriteMCPError
from . import avatars, databases, functions, graphql, health, locale, messaging, storage, teams, users
from .tool_registry import Tool, ToolHandler, ToolRegistry

logger = logging.getLogger(__name__)


class ToolDomain:
    """One Appwrite subsystem's slice of the catalog plus its handlers."""

    def __init__(self, module):
        self.name = module.name
        self.description = module.description
        self.tools = module.tools
        self.handlers = module.handlers

    def handler_for(self, tool_name: str) -> Optional[ToolHandler]:
        """Return the handler for ``tool_name``, or None if this domain does not own it."""
        return self.handlers.get(tool_name)

    def __repr__(self):
        return f"ToolDomain({self.name!r}, {len(self.tools)} tools)"


# Catalog order: list_tools returns tools in this order.
DOMAINS: List[ToolDomain] = [
    ToolDomain(module)
    for module in (databases, users, storage, functions, health, messaging, teams, avatars, locale, graphql)
]


def build_registry(domains: Optional[List[ToolDomain]] = None) -> ToolRegistry:
    """
    Merge every domain's catalog into one registry.

    Raises:
        DuplicateToolError: if two catalog entries share a name.
        AppwriteMCPError: if a catalog entry has no handler or a handler has no catalog entry.
    """
    if domains is None:
        domains = DOMAINS

    registry = ToolRegistry()
    for domain in domains:
        catalog_names = set()
        for entry in domain.tools:
            handler = domain.handler_for(entry["name"])
            if handler is None:
                raise AppwriteMCPError(f"Tool '{entry['name']}' in domain '{domain.name}' has no handler")
            registry.register_tool(Tool.from_dict(entry, domain=domain.name, run_fn=handler))
            catalog_names.add(entry["name"])

        orphans = sorted(set(domain.handlers) - catalog_names)
        if orphans:
            raise AppwriteMCPError(f"Domain '{domain.name}' has handlers without catalog entries: {orphans}")

        logger.debug(f"Registered {len(catalog_names)} tools from domain '{domain.name}'")

    logger.info(f"Tool registry built with {len(registry)} tools from {len(domains)} domains")
    return registry


__all__ = ['DOMAINS', 'Tool', 'ToolDomain', 'ToolHandler', 'ToolRegistry', 'build_registry']
