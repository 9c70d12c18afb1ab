"""Atlassian user-directory tool handlers."""

from __future__ import annotations

from confluence_search.models import parse_user_list
from mcp_servers.confluence.formatting import (
    ContentEnvelope,
    build_envelope,
    select_user,
)
from mcp_servers.confluence.operations_pages import ClientFactory
from mcp_servers.confluence.validation import validate_user_query

# Jira Cloud endpoint; it serves the whole Atlassian site's directory.
USER_SEARCH_PATH = "/rest/api/3/user/search"


def search_user(*, client_factory: ClientFactory, query: str) -> ContentEnvelope:
    """Find users by email address or display name.

    Requires the "Browse users and groups" global permission. Only users
    visible to the authenticated account are returned, and privacy
    settings may hide their email address.
    """
    query = validate_user_query(query)
    payload = client_factory().get_json(USER_SEARCH_PATH, params={"query": query})
    return build_envelope(parse_user_list(payload), select_user)
