"""Schema fragments and result helpers shared by the tool modules."""

QUERIES = {"type": "array", "items": {"type": "string"}, "description": "Query strings for filtering"}
SEARCH = {"type": "string", "description": "Search term"}
PERMISSIONS = {"type": "array", "items": {"type": "string"}, "description": "Array of permission strings"}
STRING_LIST = {"type": "array", "items": {"type": "string"}}


def string(description):
    return {"type": "string", "description": description}


def integer(description):
    return {"type": "integer", "description": description}


def number(description):
    return {"type": "number", "description": description}


def boolean(description):
    return {"type": "boolean", "description": description}


def string_list(description):
    return {**STRING_LIST, "description": description}


def enum(values, description):
    return {"type": "string", "enum": list(values), "description": description}


def obj(properties=None, required=None):
    """Build a tool input schema."""
    schema = {"type": "object", "properties": properties or {}}
    if required:
        schema["required"] = list(required)
    return schema


def deleted(kind, identifier, verb="deleted"):
    """Acknowledgement returned by delete-type tools."""
    return {"success": True, "message": f"{kind} {identifier} {verb}"}
