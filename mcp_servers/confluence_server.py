"""Confluence search MCP server (FastMCP) entrypoint."""

from __future__ import annotations

import atexit
import logging
import threading
from functools import lru_cache

from fastmcp import FastMCP

from confluence_search.client import AtlassianClient, create_client
from confluence_search.config import AtlassianCredentials, load_settings
from mcp_servers.confluence.router import register_mcp_routes

_SETTINGS = load_settings()

# stdout carries the stdio transport; basicConfig logs to stderr.
logging.basicConfig(
    level=_SETTINGS["LOG_LEVEL"],
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("confluence_search.mcp")

__all__ = ["mcp", "get_client", "main"]

INSTRUCTIONS = """This server can be used to search and retrieve Confluence content.
Search tools will only return first 20 results.
If you can't find what you're looking for in the first 20 results, try narrowing your search.
"""

mcp = FastMCP(name="confluence-search", instructions=INSTRUCTIONS)
_CREDENTIALS = AtlassianCredentials.from_settings(_SETTINGS)
_CLIENT_LOCK = threading.Lock()


@lru_cache(maxsize=1)
def _build_client() -> AtlassianClient:
    logger.debug("Creating Atlassian client for %s", _CREDENTIALS.base_url)
    return create_client(_CREDENTIALS)


def get_client() -> AtlassianClient:
    """Process-wide client; a ConfigurationError is raised again on every call."""
    with _CLIENT_LOCK:
        return _build_client()


@atexit.register
def _close_client() -> None:  # pragma: no cover
    if _build_client.cache_info().currsize:
        get_client().close()


register_mcp_routes(
    mcp=mcp,
    client_factory=get_client,
    credentials_configured=lambda: not _CREDENTIALS.missing(),
)


def main() -> None:
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
