"""Content-envelope formatting for Confluence MCP responses.

Every tool answers with the same shape: an ordered list of text content
blocks, each carrying the compact JSON of one selected-field record.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, List, TypeVar

from mcp.types import TextContent

from confluence_search.models import ContentItem, DirectoryUser

T = TypeVar("T")
ContentEnvelope = List[TextContent]


def text_block(record: Dict[str, Any]) -> TextContent:
    """Serialize one record into a text content block."""
    payload = json.dumps(record, ensure_ascii=False, separators=(",", ":"))
    return TextContent(type="text", text=payload)


def build_envelope(
    items: Iterable[T], select: Callable[[T], Dict[str, Any]]
) -> ContentEnvelope:
    """One block per item, in the order the remote API returned them."""
    return [text_block(select(item)) for item in items]


def single_block(item: T, select: Callable[[T], Dict[str, Any]]) -> ContentEnvelope:
    return [text_block(select(item))]


def select_page_summary(page: ContentItem) -> Dict[str, Any]:
    return {"id": page.id, "title": page.title}


def select_user(user: DirectoryUser) -> Dict[str, Any]:
    return {
        "accountId": user.accountId,
        "displayName": user.displayName,
        # Privacy settings may hide the address; report it as null.
        "email": user.emailAddress or None,
    }
