import json

import pytest
from appwrite.services.databases import Databases

from appwrite_mcp.appwrite_client import SERVICE_CLASSES, AppwriteContext, run_sync
from appwrite_mcp.errors import AppwriteHTTPError, AppwriteNotInitializedError


def test_accessors_fail_before_initialize():
    context = AppwriteContext()
    assert not context.initialized
    for accessor in ("databases", "users", "storage", "functions", "health",
                     "messaging", "teams", "avatars", "locale", "config"):
        with pytest.raises(AppwriteNotInitializedError, match="not initialized"):
            getattr(context, accessor)


def test_initialize_twice_fails(config, services):
    context = AppwriteContext()
    context.initialize(config, services=services)
    with pytest.raises(AppwriteNotInitializedError, match="already initialized"):
        context.initialize(config, services=services)


def test_injected_services_are_used(appwrite, services):
    assert appwrite.databases is services["databases"]
    assert appwrite.locale is services["locale"]


def test_initialize_builds_sdk_services(config):
    context = AppwriteContext()
    context.initialize(config)
    assert isinstance(context.databases, Databases)
    # Every service shares one configured SDK client.
    client = context.databases.client
    assert all(getattr(context, name).client is client for name in SERVICE_CLASSES)


def test_auth_headers(appwrite):
    assert appwrite.auth_headers() == {
        "Content-Type": "application/json",
        "X-Appwrite-Project": "test-project",
        "X-Appwrite-Key": "test-key",
    }


@pytest.mark.asyncio
async def test_run_sync_passes_arguments():
    result = await run_sync(lambda a, b=None: (a, b), 1, b=2)
    assert result == (1, 2)


@pytest.mark.asyncio
async def test_post_json_returns_decoded_body(http_appwrite, backend):
    backend.routes["/v1/echo"] = (201, '{"created": true}')

    result = await http_appwrite.post_json("/echo", {"a": 1}, error_prefix="Echo failed")

    assert result == {"created": True}
    assert json.loads(backend.requests[0]["body"]) == {"a": 1}
    assert backend.requests[0]["headers"]["X-Appwrite-Key"] == "test-key"


@pytest.mark.asyncio
async def test_post_json_empty_body(http_appwrite, backend):
    backend.routes["/v1/empty"] = (200, "")
    assert await http_appwrite.post_json("/empty", {}, error_prefix="Empty failed") is None


@pytest.mark.asyncio
async def test_post_json_non_2xx_raises_with_body(http_appwrite, backend):
    backend.routes["/v1/broken"] = (400, '{"message": "bad request"}')

    with pytest.raises(AppwriteHTTPError) as exc_info:
        await http_appwrite.post_json("/broken", {}, error_prefix="Broken")

    assert exc_info.value.status == 400
    assert str(exc_info.value) == 'Broken: {"message": "bad request"}'
