from .common import obj, string

name = "graphql"
description = "Raw GraphQL access."

tools = [
    {
        "name": "graphql_query",
        "description": "Execute a GraphQL query against Appwrite. Use this for complex queries that combine multiple resources.",
        "parameters": obj(
            {
                "query": string("GraphQL query string"),
                "variables": {"type": "object", "description": "Optional variables for the query"},
            },
            ["query"],
        ),
    },
    {
        "name": "graphql_mutation",
        "description": "Execute a GraphQL mutation against Appwrite. Use this for complex mutations.",
        "parameters": obj(
            {
                "query": string("GraphQL mutation string"),
                "variables": {"type": "object", "description": "Optional variables for the mutation"},
            },
            ["query"],
        ),
    },
]


async def execute(appwrite, arguments):
    """POST the query and variables to ``/graphql`` unchanged; queries and mutations share this path."""
    payload = {"query": arguments["query"]}
    if arguments.get("variables") is not None:
        payload["variables"] = arguments["variables"]
    return await appwrite.post_json("/graphql", payload, error_prefix="GraphQL error")


handlers = {
    "graphql_query": execute,
    "graphql_mutation": execute,
}
