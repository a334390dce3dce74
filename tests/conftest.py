"""
Shared pytest fixtures.

SDK services are replaced by recording stubs injected into an AppwriteContext,
and the raw HTTP paths (GraphQL, geo attributes) hit an in-process aiohttp server.
The ``sdk_appwrite`` fixture keeps the real SDK services and stubs only ``Client.call``.
"""
import inspect

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from appwrite.client import Client

from appwrite_mcp.appwrite_client import SERVICE_CLASSES, AppwriteContext
from appwrite_mcp.config import AppwriteConfig
from appwrite_mcp.dispatcher import ToolDispatcher

DEFAULT_RESPONSE = {"$id": "stub"}
PNG = b"\x89PNG\r\n\x1a\n"


class FakeService:
    """
    Stands in for one SDK service. Every method call is recorded and must bind
    against the signature of the same method on the real SDK service class.

    ``responses[method]`` may hold a value to return, an exception to raise, or
    a callable invoked with the call's arguments.
    """

    def __init__(self, name):
        self.name = name
        self.calls = []
        self.responses = {}

    def __getattr__(self, method):
        if method.startswith("_"):
            raise AttributeError(method)

        sdk_method = getattr(SERVICE_CLASSES[self.name], method)
        signature = inspect.signature(sdk_method)

        def call(*args, **kwargs):
            signature.bind(self, *args, **kwargs)
            self.calls.append((method, args, kwargs))
            response = self.responses.get(method, DEFAULT_RESPONSE)
            if isinstance(response, Exception):
                raise response
            if callable(response):
                return response(*args, **kwargs)
            return response

        call.__name__ = method
        return call

    def calls_to(self, method):
        return [(args, kwargs) for name, args, kwargs in self.calls if name == method]


class FakeBackend:
    """Records POSTs to an in-process server; ``routes[path] = (status, body)`` sets replies."""

    def __init__(self, server):
        self.server = server
        self.requests = []
        self.routes = {}

    @property
    def endpoint(self):
        return str(self.server.make_url("/v1"))

    async def handle(self, request):
        self.requests.append({
            "path": request.path,
            "headers": request.headers.copy(),
            "body": await request.text(),
        })
        status, body = self.routes.get(request.path, (200, '{"ok": true}'))
        return web.Response(status=status, text=body, content_type="application/json")


@pytest.fixture
def config():
    return AppwriteConfig(project_id="test-project", api_key="test-key", endpoint="https://appwrite.test/v1")


@pytest.fixture
def services():
    return {name: FakeService(name) for name in SERVICE_CLASSES}


@pytest.fixture
def appwrite(config, services):
    context = AppwriteContext()
    context.initialize(config, services=services)
    return context


@pytest.fixture
def dispatcher(appwrite):
    return ToolDispatcher(appwrite)


@pytest.fixture
async def backend():
    app = web.Application()
    server = TestServer(app)
    fake = FakeBackend(server)
    app.router.add_route("POST", "/{tail:.*}", fake.handle)
    await server.start_server()
    yield fake
    await server.close()


@pytest.fixture
def http_appwrite(backend, services):
    """An AppwriteContext whose endpoint points at the in-process backend."""
    context = AppwriteContext()
    context.initialize(
        AppwriteConfig(project_id="test-project", api_key="test-key", endpoint=backend.endpoint),
        services=services,
    )
    return context


class FakeTransport:
    """Replaces ``Client.call``: records requests and answers without any network."""

    def __init__(self):
        self.requests = []

    def call(self, client, method, path="", headers=None, params=None, *args, **kwargs):
        self.requests.append((method.upper(), path, dict(params or {})))
        if path.startswith("/avatars/"):
            return PNG
        return {"$id": "stub", "total": 1, "documents": [{"$id": "doc-1"}]}


@pytest.fixture
def transport(monkeypatch):
    fake = FakeTransport()

    def call(client, *args, **kwargs):
        return fake.call(client, *args, **kwargs)

    monkeypatch.setattr(Client, "call", call)
    return fake


@pytest.fixture
def sdk_appwrite(backend, transport):
    """An AppwriteContext built on the real SDK services; raw HTTP goes to the in-process backend."""
    context = AppwriteContext()
    context.initialize(AppwriteConfig(project_id="test-project", api_key="test-key", endpoint=backend.endpoint))
    return context
