import json

import pytest
from appwrite.exception import AppwriteException

from appwrite_mcp.dispatcher import ToolDispatcher, serialize_result
from appwrite_mcp.errors import UnknownToolError


def _text(result):
    assert len(result.content) == 1
    return result.content[0].text


def test_list_tools_returns_full_catalog(dispatcher):
    tools = dispatcher.list_tools()
    assert len(tools) == 143
    assert all(tool.inputSchema["type"] == "object" for tool in tools)


@pytest.mark.asyncio
async def test_success_is_pretty_printed_json(dispatcher, services):
    services["databases"].responses["get"] = {"$id": "main", "name": "Main"}

    result = await dispatcher.call_tool("get_database", {"databaseId": "main"})

    assert not result.isError
    assert _text(result) == json.dumps({"$id": "main", "name": "Main"}, indent=2)
    assert services["databases"].calls_to("get") == [(("main",), {})]


@pytest.mark.asyncio
async def test_unknown_tool(dispatcher):
    result = await dispatcher.call_tool("drop_everything", {})

    assert result.isError
    assert _text(result) == "Error: Unknown tool: drop_everything"


@pytest.mark.asyncio
async def test_missing_required_argument_is_rejected_before_backend_call(dispatcher, services):
    result = await dispatcher.call_tool("get_database", {})

    assert result.isError
    assert _text(result).startswith("Error: Invalid arguments for get_database: ")
    assert "databaseId" in _text(result)
    assert services["databases"].calls == []


@pytest.mark.asyncio
async def test_wrong_argument_type_is_rejected(dispatcher, services):
    result = await dispatcher.call_tool("create_index", {
        "databaseId": "db",
        "collectionId": "c",
        "key": "by_name",
        "type": "spatial",
        "attributes": ["name"],
    })

    assert result.isError
    assert _text(result).startswith("Error: Invalid arguments for create_index: type: ")
    assert services["databases"].calls == []


@pytest.mark.asyncio
async def test_extra_argument_keys_are_allowed(dispatcher, services):
    result = await dispatcher.call_tool("get_database", {"databaseId": "main", "note": "ignored"})

    assert not result.isError
    assert services["databases"].calls_to("get") == [(("main",), {})]


@pytest.mark.asyncio
async def test_missing_arguments_treated_as_empty(dispatcher, services):
    result = await dispatcher.call_tool("list_databases", None)

    assert not result.isError
    assert services["databases"].calls_to("list") == [((None, None), {})]


@pytest.mark.asyncio
async def test_backend_error_message_is_forwarded(dispatcher, services):
    services["databases"].responses["get"] = AppwriteException("Database with the requested ID could not be found.", 404)

    result = await dispatcher.call_tool("get_database", {"databaseId": "missing"})

    assert result.isError
    assert _text(result) == "Error: Database with the requested ID could not be found."


@pytest.mark.asyncio
async def test_dispatch_raises_for_direct_callers(dispatcher):
    with pytest.raises(UnknownToolError):
        await dispatcher.dispatch("nope", {})


def test_dispatcher_builds_registry_by_default(appwrite):
    assert len(ToolDispatcher(appwrite).registry) == 143


def test_serialize_result_handles_sdk_values():
    assert json.loads(serialize_result({"blob": b"\x00\x01", "tags": {"a"}})) == {"blob": "AAE=", "tags": ["a"]}


def test_serialize_result_keeps_unicode():
    assert serialize_result({"name": "Zoë"}) == '{\n  "name": "Zoë"\n}'
