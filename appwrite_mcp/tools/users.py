from appwrite.id import ID

from ..appwrite_client import run_sync
from .common import QUERIES, SEARCH, boolean, deleted, obj, string, string_list

name = "users"
description = "User accounts, preferences, sessions and logs."

USER_ID = string("User ID")

tools = [
    # User management
    {
        "name": "create_user",
        "description": "Create a new user",
        "parameters": obj(
            {
                "userId": string("Unique user ID. Use 'unique()' for auto-generation"),
                "email": string("User email"),
                "phone": string("User phone number"),
                "password": string("User password"),
                "name": string("User name"),
            }
        ),
    },
    {
        "name": "get_user",
        "description": "Get user by ID",
        "parameters": obj({"userId": USER_ID}, ["userId"]),
    },
    {
        "name": "list_users",
        "description": "List all users",
        "parameters": obj({"queries": QUERIES, "search": SEARCH}),
    },
    {
        "name": "update_user",
        "description": "Update user properties (email, name, password, phone)",
        "parameters": obj(
            {
                "userId": USER_ID,
                "email": string("New email address"),
                "name": string("New name"),
                "password": string("New password"),
                "phone": string("New phone number"),
            },
            ["userId"],
        ),
    },
    {
        "name": "update_user_labels",
        "description": "Update user labels",
        "parameters": obj({"userId": USER_ID, "labels": string_list("Array of user labels")}, ["userId", "labels"]),
    },
    {
        "name": "update_user_status",
        "description": "Update user status (enable/disable)",
        "parameters": obj(
            {"userId": USER_ID, "status": boolean("User status (true = active, false = blocked)")},
            ["userId", "status"],
        ),
    },
    {
        "name": "update_user_prefs",
        "description": "Update user preferences",
        "parameters": obj(
            {"userId": USER_ID, "prefs": {"type": "object", "description": "User preferences as JSON object"}},
            ["userId", "prefs"],
        ),
    },
    {
        "name": "get_user_prefs",
        "description": "Get user preferences",
        "parameters": obj({"userId": USER_ID}, ["userId"]),
    },
    {
        "name": "delete_user",
        "description": "Delete user by ID",
        "parameters": obj({"userId": USER_ID}, ["userId"]),
    },

    # Sessions
    {
        "name": "list_user_sessions",
        "description": "List all sessions for a user",
        "parameters": obj({"userId": USER_ID}, ["userId"]),
    },
    {
        "name": "delete_user_sessions",
        "description": "Delete user sessions (specific or all)",
        "parameters": obj(
            {"userId": USER_ID, "sessionId": string("Session ID (omit to delete all sessions)")},
            ["userId"],
        ),
    },

    # User info
    {
        "name": "list_user_memberships",
        "description": "List all team memberships for a user",
        "parameters": obj({"userId": USER_ID}, ["userId"]),
    },
    {
        "name": "list_user_logs",
        "description": "List user activity logs",
        "parameters": obj({"userId": USER_ID, "queries": QUERIES}, ["userId"]),
    },
]

# Field name -> Users service method, in the order updates are applied.
USER_FIELD_UPDATERS = (
    ("email", "update_email"),
    ("name", "update_name"),
    ("password", "update_password"),
    ("phone", "update_phone"),
)


async def create_user(appwrite, arguments):
    user_id = arguments.get("userId") or ID.unique()
    return await run_sync(
        appwrite.users.create,
        user_id,
        arguments.get("email"),
        arguments.get("phone"),
        arguments.get("password"),
        arguments.get("name"),
    )


async def get_user(appwrite, arguments):
    return await run_sync(appwrite.users.get, arguments["userId"])


async def list_users(appwrite, arguments):
    return await run_sync(appwrite.users.list, arguments.get("queries"), arguments.get("search"))


async def update_user(appwrite, arguments):
    """
    Apply each supplied, non-empty field with its own call.

    Calls run one after another; a failure stops the sequence and earlier
    updates remain applied.
    """
    user_id = arguments["userId"]
    updated = []
    for field, method_name in USER_FIELD_UPDATERS:
        value = arguments.get(field)
        if value:
            await run_sync(getattr(appwrite.users, method_name), user_id, value)
            updated.append(field)
    return {"success": True, "updated": updated, "userId": user_id}


async def update_user_labels(appwrite, arguments):
    return await run_sync(appwrite.users.update_labels, arguments["userId"], arguments["labels"])


async def update_user_status(appwrite, arguments):
    return await run_sync(appwrite.users.update_status, arguments["userId"], arguments["status"])


async def update_user_prefs(appwrite, arguments):
    return await run_sync(appwrite.users.update_prefs, arguments["userId"], arguments["prefs"])


async def get_user_prefs(appwrite, arguments):
    return await run_sync(appwrite.users.get_prefs, arguments["userId"])


async def delete_user(appwrite, arguments):
    await run_sync(appwrite.users.delete, arguments["userId"])
    return deleted("User", arguments["userId"])


async def list_user_sessions(appwrite, arguments):
    return await run_sync(appwrite.users.list_sessions, arguments["userId"])


async def delete_user_sessions(appwrite, arguments):
    user_id = arguments["userId"]
    session_id = arguments.get("sessionId")
    if session_id:
        await run_sync(appwrite.users.delete_session, user_id, session_id)
        return deleted("Session", session_id)

    await run_sync(appwrite.users.delete_sessions, user_id)
    return {"success": True, "message": f"All sessions for user {user_id} deleted"}


async def list_user_memberships(appwrite, arguments):
    return await run_sync(appwrite.users.list_memberships, arguments["userId"])


async def list_user_logs(appwrite, arguments):
    return await run_sync(appwrite.users.list_logs, arguments["userId"], arguments.get("queries"))


handlers = {
    "create_user": create_user,
    "get_user": get_user,
    "list_users": list_users,
    "update_user": update_user,
    "update_user_labels": update_user_labels,
    "update_user_status": update_user_status,
    "update_user_prefs": update_user_prefs,
    "get_user_prefs": get_user_prefs,
    "delete_user": delete_user,
    "list_user_sessions": list_user_sessions,
    "delete_user_sessions": delete_user_sessions,
    "list_user_memberships": list_user_memberships,
    "list_user_logs": list_user_logs,
}
