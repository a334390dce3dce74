import asyncio
import logging

from ..appwrite_client import run_sync
from .common import obj

logger = logging.getLogger(__name__)

name = "health"
description = "Server health probes."

tools = [
    {
        "name": "get_health",
        "description": "Check Appwrite HTTP server status",
        "parameters": obj(),
    },
    {
        "name": "get_health_db",
        "description": "Check database server status",
        "parameters": obj(),
    },
    {
        "name": "get_health_cache",
        "description": "Check cache server status",
        "parameters": obj(),
    },
    {
        "name": "get_health_storage",
        "description": "Check storage server status",
        "parameters": obj(),
    },
    {
        "name": "get_health_all",
        "description": "Get comprehensive health status (HTTP, DB, cache, storage, time)",
        "parameters": obj(),
    },
]

# Result key -> Health service method for the aggregate probe.
PROBES = (
    ("http", "get"),
    ("db", "get_db"),
    ("cache", "get_cache"),
    ("storage", "get_storage"),
    ("time", "get_time"),
)


async def get_health(appwrite, arguments):
    return await run_sync(appwrite.health.get)


async def get_health_db(appwrite, arguments):
    return await run_sync(appwrite.health.get_db)


async def get_health_cache(appwrite, arguments):
    return await run_sync(appwrite.health.get_cache)


async def get_health_storage(appwrite, arguments):
    return await run_sync(appwrite.health.get_storage)


async def _probe(key, fn):
    try:
        return await run_sync(fn)
    except Exception as e:
        logger.warning(f"Health probe '{key}' failed: {e}")
        return {"status": "error", "message": str(e)}


async def get_health_all(appwrite, arguments):
    """Run every probe concurrently; a failing probe becomes an error entry, not a failed call."""
    health = appwrite.health
    results = await asyncio.gather(*(_probe(key, getattr(health, method)) for key, method in PROBES))
    return {key: result for (key, _), result in zip(PROBES, results)}


handlers = {
    "get_health": get_health,
    "get_health_db": get_health_db,
    "get_health_cache": get_health_cache,
    "get_health_storage": get_health_storage,
    "get_health_all": get_health_all,
}
