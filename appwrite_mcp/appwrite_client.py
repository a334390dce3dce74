import asyncio
import json
import logging
from typing import Any, Callable, Dict, Optional

import aiohttp
from appwrite.client import Client
from appwrite.services.avatars import Avatars
from appwrite.services.databases import Databases
from appwrite.services.functions import Functions
from appwrite.services.health import Health
from appwrite.services.locale import Locale
from appwrite.services.messaging import Messaging
from appwrite.services.storage import Storage
from appwrite.services.teams import Teams
from appwrite.services.users import Users

from .config import AppwriteConfig
from .errors import AppwriteHTTPError, AppwriteNotInitializedError

logger = logging.getLogger(__name__)

NOT_INITIALIZED_MESSAGE = "Appwrite client not initialized. Call initialize() first."

SERVICE_CLASSES = {
    "databases": Databases,
    "users": Users,
    "storage": Storage,
    "functions": Functions,
    "health": Health,
    "messaging": Messaging,
    "teams": Teams,
    "avatars": Avatars,
    "locale": Locale,
}


async def run_sync(fn: Callable, *args, **kwargs) -> Any:
    """Run a blocking SDK call in a worker thread."""
    return await asyncio.to_thread(fn, *args, **kwargs)


class AppwriteContext:
    """
    Holds one SDK service handle per Appwrite subsystem.

    Every handle shares the same endpoint/project/key triple. The context is
    initialized exactly once at startup and is read-only afterwards; any
    accessor used before ``initialize`` raises ``AppwriteNotInitializedError``.
    """

    def __init__(self):
        self._config: Optional[AppwriteConfig] = None
        self._services: Dict[str, Any] = {}

    @property
    def initialized(self) -> bool:
        return self._config is not None

    def initialize(self, config: AppwriteConfig, services: Optional[Dict[str, Any]] = None):
        """
        Build the SDK client and every service from ``config``.

        Args:
            config: Endpoint, project ID and API key.
            services: Optional prebuilt service objects keyed by subsystem name
                (``databases``, ``users``, ...). Missing keys are built from the SDK.
        """
        if self.initialized:
            raise AppwriteNotInitializedError("Appwrite client is already initialized; one backend per process.")

        services = services or {}
        client = None
        if set(SERVICE_CLASSES) - set(services):
            client = Client()
            client.set_endpoint(config.endpoint)
            client.set_project(config.project_id)
            client.set_key(config.api_key)

        self._services = {
            name: services[name] if name in services else service_cls(client)
            for name, service_cls in SERVICE_CLASSES.items()
        }
        self._config = config
        logger.info(f"Appwrite context initialized for project {config.project_id} at {config.endpoint}")

    def _service(self, name: str):
        if not self.initialized:
            raise AppwriteNotInitializedError(NOT_INITIALIZED_MESSAGE)
        return self._services[name]

    @property
    def config(self) -> AppwriteConfig:
        if not self.initialized:
            raise AppwriteNotInitializedError(NOT_INITIALIZED_MESSAGE)
        return self._config

    @property
    def databases(self) -> Databases:
        return self._service("databases")

    @property
    def users(self) -> Users:
        return self._service("users")

    @property
    def storage(self) -> Storage:
        return self._service("storage")

    @property
    def functions(self) -> Functions:
        return self._service("functions")

    @property
    def health(self) -> Health:
        return self._service("health")

    @property
    def messaging(self) -> Messaging:
        return self._service("messaging")

    @property
    def teams(self) -> Teams:
        return self._service("teams")

    @property
    def avatars(self) -> Avatars:
        return self._service("avatars")

    @property
    def locale(self) -> Locale:
        return self._service("locale")

    def auth_headers(self) -> Dict[str, str]:
        """Headers the SDK would send, for calls the SDK does not cover."""
        config = self.config
        return {
            "Content-Type": "application/json",
            "X-Appwrite-Project": config.project_id,
            "X-Appwrite-Key": config.api_key,
        }

    async def post_json(self, path: str, payload: Dict[str, Any], error_prefix: str) -> Any:
        """
        POST ``payload`` as JSON to ``{endpoint}{path}`` and return the decoded body.

        Raises:
            AppwriteHTTPError: on any non-2xx response; the message carries the response text.
        """
        url = f"{self.config.endpoint}{path}"
        logger.debug(f"POST {url}")

        async with aiohttp.ClientSession(headers=self.auth_headers()) as session:
            async with session.post(url, data=json.dumps(payload)) as response:
                body = await response.text()
                if 200 <= response.status < 300:
                    return json.loads(body) if body else None
                logger.warning(f"POST {url} failed with status {response.status}")
                raise AppwriteHTTPError(error_prefix, response.status, body)
