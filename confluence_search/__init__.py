"""Core building blocks for the Confluence search MCP server."""

from confluence_search.client import (
    AtlassianClient,
    RemoteResponseError,
    RemoteTransportError,
    create_client,
)
from confluence_search.config import (
    AtlassianCredentials,
    ConfigurationError,
    load_settings,
)
from confluence_search.cql import pages_created_by, quote_cql_value

__all__ = [
    "AtlassianClient",
    "AtlassianCredentials",
    "ConfigurationError",
    "RemoteResponseError",
    "RemoteTransportError",
    "create_client",
    "load_settings",
    "pages_created_by",
    "quote_cql_value",
]
