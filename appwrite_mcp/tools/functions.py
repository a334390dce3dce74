from appwrite.enums.execution_method import ExecutionMethod
from appwrite.enums.runtime import Runtime
from appwrite.id import ID
from appwrite.input_file import InputFile

from ..appwrite_client import run_sync
from ..utils.encoding import decode_base64
from .common import QUERIES, SEARCH, boolean, deleted, enum, integer, obj, string, string_list

name = "functions"
description = "Serverless functions, executions, variables and deployments."

FUNCTION_ID = string("Function ID")
EXECUTION_ID = string("Execution ID")
VARIABLE_ID = string("Variable ID")
DEPLOYMENT_ID = string("Deployment ID")

# Uploaded deployment archives always get this name.
DEPLOYMENT_FILENAME = "code.tar.gz"


def _function_properties(function_id, runtime, schedule):
    return {
        "functionId": function_id,
        "name": string("Function name"),
        "runtime": runtime,
        "execute": string_list("Execution permissions"),
        "events": string_list("Events that trigger the function"),
        "schedule": schedule,
        "timeout": integer("Execution timeout in seconds"),
        "enabled": boolean("Enable function"),
        "logging": boolean("Enable logging"),
        "entrypoint": string("Entrypoint file"),
        "commands": string("Build commands"),
        "scopes": string_list("Function scopes"),
    }


tools = [
    # Functions
    {
        "name": "create_function",
        "description": "Create a new serverless function",
        "parameters": obj(
            _function_properties(
                string("Unique function ID. Use 'unique()' for auto-generation"),
                string("Runtime environment (e.g., 'node-18.0', 'python-3.9')"),
                string("Cron schedule for automatic execution"),
            ),
            ["name", "runtime"],
        ),
    },
    {
        "name": "get_function",
        "description": "Get function by ID",
        "parameters": obj({"functionId": FUNCTION_ID}, ["functionId"]),
    },
    {
        "name": "list_functions",
        "description": "List all functions",
        "parameters": obj({"queries": QUERIES, "search": SEARCH}),
    },
    {
        "name": "update_function",
        "description": "Update function by ID",
        "parameters": obj(
            _function_properties(FUNCTION_ID, string("Runtime environment"), string("Cron schedule")),
            ["functionId", "name"],
        ),
    },
    {
        "name": "delete_function",
        "description": "Delete function by ID",
        "parameters": obj({"functionId": FUNCTION_ID}, ["functionId"]),
    },

    # Executions
    {
        "name": "create_execution",
        "description": "Execute a function",
        "parameters": obj(
            {
                "functionId": FUNCTION_ID,
                "body": string("Request body (string or JSON string)"),
                "async": boolean("Execute asynchronously"),
                "path": string("Request path"),
                "method": enum(["GET", "POST", "PUT", "PATCH", "DELETE"], "HTTP method"),
                "headers": {"type": "object", "description": "Request headers"},
                "scheduledAt": string("Scheduled execution time (ISO 8601)"),
            },
            ["functionId"],
        ),
    },
    {
        "name": "get_execution",
        "description": "Get execution result by ID",
        "parameters": obj({"functionId": FUNCTION_ID, "executionId": EXECUTION_ID}, ["functionId", "executionId"]),
    },
    {
        "name": "list_executions",
        "description": "List all executions for a function",
        "parameters": obj({"functionId": FUNCTION_ID, "queries": QUERIES, "search": SEARCH}, ["functionId"]),
    },
    {
        "name": "delete_execution",
        "description": "Delete execution by ID",
        "parameters": obj({"functionId": FUNCTION_ID, "executionId": EXECUTION_ID}, ["functionId", "executionId"]),
    },

    # Variables
    {
        "name": "create_variable",
        "description": "Create a function environment variable",
        "parameters": obj(
            {"functionId": FUNCTION_ID, "key": string("Variable key"), "value": string("Variable value")},
            ["functionId", "key", "value"],
        ),
    },
    {
        "name": "get_variable",
        "description": "Get variable by key",
        "parameters": obj({"functionId": FUNCTION_ID, "variableId": VARIABLE_ID}, ["functionId", "variableId"]),
    },
    {
        "name": "list_variables",
        "description": "List all variables for a function",
        "parameters": obj({"functionId": FUNCTION_ID}, ["functionId"]),
    },
    {
        "name": "update_variable",
        "description": "Update variable by ID",
        "parameters": obj(
            {
                "functionId": FUNCTION_ID,
                "variableId": VARIABLE_ID,
                "key": string("Variable key"),
                "value": string("Variable value"),
            },
            ["functionId", "variableId", "key"],
        ),
    },
    {
        "name": "delete_variable",
        "description": "Delete variable by ID",
        "parameters": obj({"functionId": FUNCTION_ID, "variableId": VARIABLE_ID}, ["functionId", "variableId"]),
    },

    # Deployments
    {
        "name": "create_deployment",
        "description": "Create a new function deployment (upload code). Provide code as base64-encoded tar.gz file.",
        "parameters": obj(
            {
                "functionId": FUNCTION_ID,
                "code": string("Base64-encoded tar.gz file containing function code"),
                "activate": boolean("Activate deployment after creation"),
                "entrypoint": string("Entrypoint file (e.g., 'index.js')"),
                "commands": string("Build commands"),
            },
            ["functionId", "code", "activate"],
        ),
    },
    {
        "name": "get_deployment",
        "description": "Get deployment by ID",
        "parameters": obj({"functionId": FUNCTION_ID, "deploymentId": DEPLOYMENT_ID}, ["functionId", "deploymentId"]),
    },
    {
        "name": "list_deployments",
        "description": "List all deployments for a function",
        "parameters": obj({"functionId": FUNCTION_ID, "queries": QUERIES, "search": SEARCH}, ["functionId"]),
    },
    {
        "name": "update_deployment",
        "description": "Update function deployment (activate a specific deployment)",
        "parameters": obj(
            {"functionId": FUNCTION_ID, "deploymentId": string("Deployment ID to activate")},
            ["functionId", "deploymentId"],
        ),
    },
    {
        "name": "delete_deployment",
        "description": "Delete deployment by ID",
        "parameters": obj({"functionId": FUNCTION_ID, "deploymentId": DEPLOYMENT_ID}, ["functionId", "deploymentId"]),
    },

    # Utility
    {
        "name": "list_runtimes",
        "description": "List all available function runtimes",
        "parameters": obj(),
    },
]


def _function_args(arguments, function_id):
    runtime = arguments.get("runtime")
    return (
        function_id,
        arguments["name"],
        Runtime(runtime) if runtime is not None else None,
        arguments.get("execute"),
        arguments.get("events"),
        arguments.get("schedule"),
        arguments.get("timeout"),
        arguments.get("enabled"),
        arguments.get("logging"),
        arguments.get("entrypoint"),
        arguments.get("commands"),
        arguments.get("scopes"),
    )


async def create_function(appwrite, arguments):
    function_id = arguments.get("functionId") or ID.unique()
    return await run_sync(appwrite.functions.create, *_function_args(arguments, function_id))


async def get_function(appwrite, arguments):
    return await run_sync(appwrite.functions.get, arguments["functionId"])


async def list_functions(appwrite, arguments):
    return await run_sync(appwrite.functions.list, arguments.get("queries"), arguments.get("search"))


async def update_function(appwrite, arguments):
    return await run_sync(appwrite.functions.update, *_function_args(arguments, arguments["functionId"]))


async def delete_function(appwrite, arguments):
    await run_sync(appwrite.functions.delete, arguments["functionId"])
    return deleted("Function", arguments["functionId"])


async def create_execution(appwrite, arguments):
    method = arguments.get("method")
    return await run_sync(
        appwrite.functions.create_execution,
        arguments["functionId"],
        arguments.get("body"),
        arguments.get("async"),
        arguments.get("path"),
        ExecutionMethod(method) if method is not None else None,
        arguments.get("headers"),
        arguments.get("scheduledAt"),
    )


async def get_execution(appwrite, arguments):
    return await run_sync(appwrite.functions.get_execution, arguments["functionId"], arguments["executionId"])


async def list_executions(appwrite, arguments):
    return await run_sync(
        appwrite.functions.list_executions,
        arguments["functionId"],
        arguments.get("queries"),
        arguments.get("search"),
    )


async def delete_execution(appwrite, arguments):
    await run_sync(appwrite.functions.delete_execution, arguments["functionId"], arguments["executionId"])
    return deleted("Execution", arguments["executionId"])


async def create_variable(appwrite, arguments):
    return await run_sync(
        appwrite.functions.create_variable, arguments["functionId"], arguments["key"], arguments["value"]
    )


async def get_variable(appwrite, arguments):
    return await run_sync(appwrite.functions.get_variable, arguments["functionId"], arguments["variableId"])


async def list_variables(appwrite, arguments):
    return await run_sync(appwrite.functions.list_variables, arguments["functionId"])


async def update_variable(appwrite, arguments):
    return await run_sync(
        appwrite.functions.update_variable,
        arguments["functionId"],
        arguments["variableId"],
        arguments["key"],
        arguments.get("value"),
    )


async def delete_variable(appwrite, arguments):
    await run_sync(appwrite.functions.delete_variable, arguments["functionId"], arguments["variableId"])
    return deleted("Variable", arguments["variableId"])


async def create_deployment(appwrite, arguments):
    code = decode_base64(arguments["code"], "create_deployment", "code")
    return await run_sync(
        appwrite.functions.create_deployment,
        arguments["functionId"],
        InputFile.from_bytes(code, DEPLOYMENT_FILENAME),
        arguments["activate"],
        arguments.get("entrypoint"),
        arguments.get("commands"),
    )


async def get_deployment(appwrite, arguments):
    return await run_sync(appwrite.functions.get_deployment, arguments["functionId"], arguments["deploymentId"])


async def list_deployments(appwrite, arguments):
    return await run_sync(
        appwrite.functions.list_deployments,
        arguments["functionId"],
        arguments.get("queries"),
        arguments.get("search"),
    )


async def update_deployment(appwrite, arguments):
    return await run_sync(appwrite.functions.update_deployment, arguments["functionId"], arguments["deploymentId"])


async def delete_deployment(appwrite, arguments):
    await run_sync(appwrite.functions.delete_deployment, arguments["functionId"], arguments["deploymentId"])
    return deleted("Deployment", arguments["deploymentId"])


async def list_runtimes(appwrite, arguments):
    return await run_sync(appwrite.functions.list_runtimes)


handlers = {
    "create_function": create_function,
    "get_function": get_function,
    "list_functions": list_functions,
    "update_function": update_function,
    "delete_function": delete_function,
    "create_execution": create_execution,
    "get_execution": get_execution,
    "list_executions": list_executions,
    "delete_execution": delete_execution,
    "create_variable": create_variable,
    "get_variable": get_variable,
    "list_variables": list_variables,
    "update_variable": update_variable,
    "delete_variable": delete_variable,
    "create_deployment": create_deployment,
    "get_deployment": get_deployment,
    "list_deployments": list_deployments,
    "update_deployment": update_deployment,
    "delete_deployment": delete_deployment,
    "list_runtimes": list_runtimes,
}
