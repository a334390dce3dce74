from ..appwrite_client import run_sync
from .common import obj

name = "locale"
description = "Locale reference data."

# Tool name -> (Locale service method, description)
LISTINGS = {
    "list_countries": ("list_countries", "List all countries"),
    "list_countries_eu": ("list_countries_eu", "List all EU countries"),
    "list_countries_phones": ("list_countries_phones", "List all countries with phone codes"),
    "list_continents": ("list_continents", "List all continents"),
    "list_languages": ("list_languages", "List all supported languages"),
    "list_currencies": ("list_currencies", "List all currencies"),
    "list_codes": ("list_codes", "List all locale codes"),
}

tools = [
    {"name": tool_name, "description": tool_description, "parameters": obj()}
    for tool_name, (_, tool_description) in LISTINGS.items()
]


def _listing(method_name):
    async def handler(appwrite, arguments):
        return await run_sync(getattr(appwrite.locale, method_name))

    handler.__name__ = method_name
    return handler


handlers = {tool_name: _listing(method_name) for tool_name, (method_name, _) in LISTINGS.items()}
