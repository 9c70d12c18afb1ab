"""Confluence page tool handlers.

Each handler validates its input, obtains a client, issues exactly one GET
and hands the validated response to the envelope formatter.
"""

from __future__ import annotations

from typing import Any, Callable, Dict
from urllib.parse import quote

from confluence_search.client import AtlassianClient, RemoteResponseError
from confluence_search.cql import pages_created_by
from confluence_search.markup import html_to_markdown
from confluence_search.models import (
    ContentItem,
    parse_content_item,
    parse_content_list,
)
from mcp_servers.confluence.formatting import (
    ContentEnvelope,
    build_envelope,
    select_page_summary,
    single_block,
)
from mcp_servers.confluence.validation import (
    validate_account_id,
    validate_cql,
    validate_page_id,
    validate_space_key,
)

ClientFactory = Callable[[], AtlassianClient]

CONTENT_PATH = "/wiki/rest/api/content"
SEARCH_PATH = "/wiki/rest/api/content/search"
BODY_EXPAND = "body.export_view,body.storage"


def search_cql(*, client_factory: ClientFactory, cql: str) -> ContentEnvelope:
    """Search pages with a raw CQL query; first result page only."""
    cql = validate_cql(cql)
    payload = client_factory().get_json(SEARCH_PATH, params={"cql": cql})
    return build_envelope(parse_content_list(payload), select_page_summary)


def get_page_by_id(*, client_factory: ClientFactory, page_id: str) -> ContentEnvelope:
    """Fetch one page with its body rendered as Markdown."""
    page_id = validate_page_id(page_id)
    payload = client_factory().get_json(
        f"{CONTENT_PATH}/{_path_segment(page_id)}",
        params={"expand": BODY_EXPAND},
    )
    return single_block(parse_content_item(payload), select_page_detail)


def list_pages_in_space(
    *, client_factory: ClientFactory, space_key: str
) -> ContentEnvelope:
    space_key = validate_space_key(space_key)
    payload = client_factory().get_json(
        CONTENT_PATH, params={"spaceKey": space_key, "type": "page"}
    )
    return build_envelope(parse_content_list(payload), select_page_summary)


def list_page_children(
    *, client_factory: ClientFactory, page_id: str
) -> ContentEnvelope:
    page_id = validate_page_id(page_id)
    payload = client_factory().get_json(
        f"{CONTENT_PATH}/{_path_segment(page_id)}/child/page"
    )
    return build_envelope(parse_content_list(payload), select_page_summary)


def list_pages_by_user(
    *, client_factory: ClientFactory, account_id: str
) -> ContentEnvelope:
    account_id = validate_account_id(account_id)
    payload = client_factory().get_json(
        SEARCH_PATH, params={"cql": pages_created_by(account_id)}
    )
    return build_envelope(parse_content_list(payload), select_page_summary)


def select_page_detail(page: ContentItem) -> Dict[str, Any]:
    return {"id": page.id, "title": page.title, "body": page_body_text(page)}


def page_body_text(page: ContentItem) -> str:
    """Markdown body, preferring the export view over raw storage markup."""
    body = page.body
    representation = None
    if body is not None:
        representation = body.export_view or body.storage
    if representation is None:
        raise RemoteResponseError(
            f"Page {page.id} response has no body.export_view or body.storage content"
        )
    return html_to_markdown(representation.value)


def _path_segment(value: str) -> str:
    return quote(value, safe="")
