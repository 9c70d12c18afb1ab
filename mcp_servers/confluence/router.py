"""Route registration for the Confluence MCP server.

Keeps FastMCP tool/resource declarations separate from the handlers.
"""

from typing import Annotated, Callable

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from mcp_servers.confluence.execution import (
    _tool_metrics,
    run_blocking,
    tool_wrapper,
)
from mcp_servers.confluence.formatting import ContentEnvelope
from mcp_servers.confluence.operations_pages import ClientFactory
from mcp_servers.confluence.operations_pages import (
    get_page_by_id as _get_page_by_id,
)
from mcp_servers.confluence.operations_pages import (
    list_page_children as _list_page_children,
)
from mcp_servers.confluence.operations_pages import (
    list_pages_by_user as _list_pages_by_user,
)
from mcp_servers.confluence.operations_pages import (
    list_pages_in_space as _list_pages_in_space,
)
from mcp_servers.confluence.operations_pages import search_cql as _search_cql
from mcp_servers.confluence.operations_resources import CQL_DOCS_URI
from mcp_servers.confluence.operations_resources import (
    get_cql_docs as _get_cql_docs,
)
from mcp_servers.confluence.operations_resources import (
    get_health_status as _get_health_status,
)
from mcp_servers.confluence.operations_users import search_user as _search_user


def _read_only(title: str) -> ToolAnnotations:
    return ToolAnnotations(readOnlyHint=True, title=title)


def register_mcp_routes(
    *,
    mcp: FastMCP,
    client_factory: ClientFactory,
    credentials_configured: Callable[[], bool],
) -> None:
    """Register tool/resource routes on the provided FastMCP app."""

    @mcp.tool(
        name="confluence_search_cql",
        description="Search Confluence pages using CQL (Confluence Query Language).",
        annotations=_read_only("Search Confluence with CQL"),
        output_schema=None,
    )
    @tool_wrapper("confluence_search_cql")
    async def confluence_search_cql(
        cql: Annotated[
            str, Field(description="The CQL query string to search Confluence content.")
        ],
    ) -> ContentEnvelope:
        return await run_blocking(_search_cql, client_factory=client_factory, cql=cql)

    @mcp.tool(
        name="confluence_get_page_by_id",
        description="Get a Confluence page by its ID.",
        annotations=_read_only("Get Confluence Page by ID"),
        output_schema=None,
    )
    @tool_wrapper("confluence_get_page_by_id")
    async def confluence_get_page_by_id(
        id: Annotated[str, Field(description="The unique ID of the Confluence page.")],
    ) -> ContentEnvelope:
        return await run_blocking(
            _get_page_by_id, client_factory=client_factory, page_id=id
        )

    @mcp.tool(
        name="confluence_list_pages_in_space",
        description="List all pages in a Confluence space.",
        annotations=_read_only("List Pages in Space"),
        output_schema=None,
    )
    @tool_wrapper("confluence_list_pages_in_space")
    async def confluence_list_pages_in_space(
        spaceKey: Annotated[
            str, Field(description="The key of the Confluence space (e.g., 'DEV').")
        ],
    ) -> ContentEnvelope:
        return await run_blocking(
            _list_pages_in_space, client_factory=client_factory, space_key=spaceKey
        )

    @mcp.tool(
        name="confluence_list_page_children",
        description="List the children of a Confluence page.",
        annotations=_read_only("List Child Pages"),
        output_schema=None,
    )
    @tool_wrapper("confluence_list_page_children")
    async def confluence_list_page_children(
        id: Annotated[
            str, Field(description="The unique ID of the parent Confluence page.")
        ],
    ) -> ContentEnvelope:
        return await run_blocking(
            _list_page_children, client_factory=client_factory, page_id=id
        )

    @mcp.tool(
        name="confluence_list_pages_by_user",
        description="List all pages created by a specific user (by Atlassian account ID).",
        annotations=_read_only("List Pages by User"),
        output_schema=None,
    )
    @tool_wrapper("confluence_list_pages_by_user")
    async def confluence_list_pages_by_user(
        userAccountId: Annotated[
            str,
            Field(description="The Atlassian account ID of the user who created the pages."),
        ],
    ) -> ContentEnvelope:
        return await run_blocking(
            _list_pages_by_user,
            client_factory=client_factory,
            account_id=userAccountId,
        )

    @mcp.tool(
        name="search_user",
        description=(
            "Search for Atlassian users by email address or display name "
            "(Jira Cloud API)."
        ),
        annotations=_read_only("Search Atlassian Users"),
        output_schema=None,
    )
    @tool_wrapper("search_user")
    async def search_user(
        query: Annotated[
            str,
            Field(
                description=(
                    "The search string (email address or display name) "
                    "to find Atlassian users."
                )
            ),
        ],
    ) -> ContentEnvelope:
        return await run_blocking(
            _search_user, client_factory=client_factory, query=query
        )

    @mcp.resource(
        CQL_DOCS_URI,
        name="confluence_cql_docs",
        description="Documentation for Confluence Query Language (CQL)",
        mime_type="text/markdown",
    )
    @tool_wrapper("resource_cql_docs")
    def get_cql_docs() -> str:
        return _get_cql_docs()

    @mcp.resource(
        "status://health",
        name="health_status",
        mime_type="application/json",
    )
    @tool_wrapper("resource_health_status")
    def get_health_status() -> str:
        return _get_health_status(
            credentials_configured=credentials_configured(),
            tool_metrics=_tool_metrics,
        )
