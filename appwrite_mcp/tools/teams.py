from appwrite.id import ID

from ..appwrite_client import run_sync
from .common import QUERIES, SEARCH, deleted, obj, string, string_list

name = "teams"
description = "Teams and team memberships."

TEAM_ID = string("Team ID")
MEMBERSHIP_ID = string("Membership ID")

tools = [
    # Teams
    {
        "name": "create_team",
        "description": "Create a new team",
        "parameters": obj(
            {
                "teamId": string("Unique team ID. Use 'unique()' for auto-generation"),
                "name": string("Team name"),
                "roles": string_list("Array of roles"),
            },
            ["name"],
        ),
    },
    {
        "name": "get_team",
        "description": "Get team by ID",
        "parameters": obj({"teamId": TEAM_ID}, ["teamId"]),
    },
    {
        "name": "list_teams",
        "description": "List all teams",
        "parameters": obj({"queries": QUERIES, "search": SEARCH}),
    },
    {
        "name": "update_team",
        "description": "Update team by ID",
        "parameters": obj({"teamId": TEAM_ID, "name": string("New team name")}, ["teamId", "name"]),
    },
    {
        "name": "delete_team",
        "description": "Delete team by ID",
        "parameters": obj({"teamId": TEAM_ID}, ["teamId"]),
    },
    {
        "name": "update_team_prefs",
        "description": "Update team preferences",
        "parameters": obj(
            {"teamId": TEAM_ID, "prefs": {"type": "object", "description": "Team preferences as JSON object"}},
            ["teamId", "prefs"],
        ),
    },

    # Memberships
    {
        "name": "create_membership",
        "description": "Create a new team membership (invite user)",
        "parameters": obj(
            {
                "teamId": TEAM_ID,
                "roles": string_list("Array of roles for the member"),
                "email": string("User email (for email invitation)"),
                "userId": string("User ID (for direct membership)"),
                "phone": string("User phone (for SMS invitation)"),
                "url": string("URL to redirect after accepting invitation"),
                "name": string("User name"),
            },
            ["teamId", "roles"],
        ),
    },
    {
        "name": "get_membership",
        "description": "Get team membership by ID",
        "parameters": obj({"teamId": TEAM_ID, "membershipId": MEMBERSHIP_ID}, ["teamId", "membershipId"]),
    },
    {
        "name": "list_memberships",
        "description": "List all memberships for a team",
        "parameters": obj({"teamId": TEAM_ID, "queries": QUERIES, "search": SEARCH}, ["teamId"]),
    },
    {
        "name": "update_membership",
        "description": "Update team membership roles",
        "parameters": obj(
            {
                "teamId": TEAM_ID,
                "membershipId": MEMBERSHIP_ID,
                "roles": string_list("New roles for the member"),
            },
            ["teamId", "membershipId", "roles"],
        ),
    },
    {
        "name": "delete_membership",
        "description": "Delete team membership",
        "parameters": obj({"teamId": TEAM_ID, "membershipId": MEMBERSHIP_ID}, ["teamId", "membershipId"]),
    },
]


async def create_team(appwrite, arguments):
    team_id = arguments.get("teamId") or ID.unique()
    return await run_sync(appwrite.teams.create, team_id, arguments["name"], arguments.get("roles"))


async def get_team(appwrite, arguments):
    return await run_sync(appwrite.teams.get, arguments["teamId"])


async def list_teams(appwrite, arguments):
    return await run_sync(appwrite.teams.list, arguments.get("queries"), arguments.get("search"))


async def update_team(appwrite, arguments):
    return await run_sync(appwrite.teams.update_name, arguments["teamId"], arguments["name"])


async def delete_team(appwrite, arguments):
    await run_sync(appwrite.teams.delete, arguments["teamId"])
    return deleted("Team", arguments["teamId"])


async def update_team_prefs(appwrite, arguments):
    return await run_sync(appwrite.teams.update_prefs, arguments["teamId"], arguments["prefs"])


async def create_membership(appwrite, arguments):
    return await run_sync(
        appwrite.teams.create_membership,
        arguments["teamId"],
        arguments["roles"],
        arguments.get("email"),
        arguments.get("userId"),
        arguments.get("phone"),
        arguments.get("url"),
        arguments.get("name"),
    )


async def get_membership(appwrite, arguments):
    return await run_sync(appwrite.teams.get_membership, arguments["teamId"], arguments["membershipId"])


async def list_memberships(appwrite, arguments):
    return await run_sync(
        appwrite.teams.list_memberships, arguments["teamId"], arguments.get("queries"), arguments.get("search")
    )


async def update_membership(appwrite, arguments):
    return await run_sync(
        appwrite.teams.update_membership, arguments["teamId"], arguments["membershipId"], arguments["roles"]
    )


async def delete_membership(appwrite, arguments):
    await run_sync(appwrite.teams.delete_membership, arguments["teamId"], arguments["membershipId"])
    return deleted("Membership", arguments["membershipId"])


handlers = {
    "create_team": create_team,
    "get_team": get_team,
    "list_teams": list_teams,
    "update_team": update_team,
    "delete_team": delete_team,
    "update_team_prefs": update_team_prefs,
    "create_membership": create_membership,
    "get_membership": get_membership,
    "list_memberships": list_memberships,
    "update_membership": update_membership,
    "delete_membership": delete_membership,
}
