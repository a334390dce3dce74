"""Exceptions raised by the Appwrite MCP server.

Backend failures are not wrapped: the SDK's ``AppwriteException`` travels up
to the dispatcher untouched so its message reaches the caller verbatim.
"""


class AppwriteMCPError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(AppwriteMCPError):
    """A required startup setting (project id, API key) is missing."""

    def __init__(self, message: str, config_key: str = None):
        super().__init__(message)
        self.config_key = config_key


class AppwriteNotInitializedError(AppwriteMCPError):
    """A service accessor was used before ``AppwriteContext.initialize``."""


class UnknownToolError(AppwriteMCPError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class DuplicateToolError(AppwriteMCPError):
    """Two domains tried to register the same tool name."""

    def __init__(self, name: str, existing_domain: str, new_domain: str):
        super().__init__(
            f"Tool '{name}' from domain '{new_domain}' is already registered by domain '{existing_domain}'"
        )
        self.name = name
        self.existing_domain = existing_domain
        self.new_domain = new_domain


class InvalidArgumentsError(AppwriteMCPError):
    def __init__(self, tool_name: str, detail: str):
        super().__init__(f"Invalid arguments for {tool_name}: {detail}")
        self.tool_name = tool_name
        self.detail = detail


class AppwriteHTTPError(AppwriteMCPError):
    """Non-2xx response on one of the raw HTTP paths (GraphQL, geo attributes)."""

    def __init__(self, prefix: str, status: int, body: str):
        super().__init__(f"{prefix}: {body}")
        self.status = status
        self.body = body
