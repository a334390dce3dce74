import argparse
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from dotenv import load_dotenv

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://cloud.appwrite.io/v1"


@dataclass(frozen=True)
class AppwriteConfig:
    project_id: str
    api_key: str
    endpoint: str = DEFAULT_ENDPOINT


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appwrite-mcp",
        description="Expose the Appwrite API as MCP tools over stdio.",
    )
    # Defaults stay None so that unset flags fall back to the environment.
    parser.add_argument("--project-id", dest="project_id", help="Appwrite project ID (env: APPWRITE_PROJECT_ID)")
    parser.add_argument("--api-key", dest="api_key", help="Appwrite API key (env: APPWRITE_API_KEY)")
    parser.add_argument("--endpoint", dest="endpoint", help=f"Appwrite endpoint (env: APPWRITE_ENDPOINT, default: {DEFAULT_ENDPOINT})")
    return parser


def parse_config(argv: Optional[Sequence[str]] = None, environ: Optional[Mapping[str, str]] = None) -> AppwriteConfig:
    """
    Resolve the Appwrite connection settings.

    Command-line flags win over environment variables. When ``environ`` is not
    given, a local ``.env`` file is loaded first and ``os.environ`` is used.

    Raises:
        ConfigurationError: if the project ID or API key is missing.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    args, unknown = build_arg_parser().parse_known_args(argv)
    if unknown:
        logger.warning(f"Ignoring unrecognized arguments: {unknown}")

    project_id = args.project_id or environ.get("APPWRITE_PROJECT_ID", "")
    api_key = args.api_key or environ.get("APPWRITE_API_KEY", "")
    endpoint = args.endpoint or environ.get("APPWRITE_ENDPOINT") or DEFAULT_ENDPOINT

    if not project_id:
        raise ConfigurationError("APPWRITE_PROJECT_ID or --project-id is required", config_key="project_id")
    if not api_key:
        raise ConfigurationError("APPWRITE_API_KEY or --api-key is required", config_key="api_key")

    return AppwriteConfig(project_id=project_id, api_key=api_key, endpoint=endpoint.rstrip("/"))
