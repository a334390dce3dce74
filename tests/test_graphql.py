import json

import pytest

from appwrite_mcp.dispatcher import ToolDispatcher


@pytest.mark.asyncio
async def test_query_forwards_body_and_auth_headers(http_appwrite, backend):
    backend.routes["/v1/graphql"] = (200, '{"data": {"databasesList": {"total": 0}}}')
    dispatcher = ToolDispatcher(http_appwrite)

    result = await dispatcher.call_tool("graphql_query", {
        "query": "query { databasesList { total } }",
        "variables": {"limit": 5},
    })

    assert not result.isError
    assert json.loads(result.content[0].text) == {"data": {"databasesList": {"total": 0}}}

    request = backend.requests[0]
    assert request["path"] == "/v1/graphql"
    assert json.loads(request["body"]) == {"query": "query { databasesList { total } }", "variables": {"limit": 5}}
    assert request["headers"]["Content-Type"] == "application/json"
    assert request["headers"]["X-Appwrite-Project"] == "test-project"
    assert request["headers"]["X-Appwrite-Key"] == "test-key"


@pytest.mark.asyncio
async def test_mutation_without_variables(http_appwrite, backend):
    dispatcher = ToolDispatcher(http_appwrite)

    await dispatcher.call_tool("graphql_mutation", {"query": "mutation { x }"})

    assert json.loads(backend.requests[0]["body"]) == {"query": "mutation { x }"}


@pytest.mark.asyncio
async def test_non_2xx_surfaces_response_body(http_appwrite, backend):
    backend.routes["/v1/graphql"] = (401, '{"message": "Unauthorized"}')
    dispatcher = ToolDispatcher(http_appwrite)

    result = await dispatcher.call_tool("graphql_query", {"query": "{ x }"})

    assert result.isError
    assert result.content[0].text == 'Error: GraphQL error: {"message": "Unauthorized"}'
