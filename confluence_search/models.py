"""Response-shape contracts for the remote endpoints this server reads.

Each ``parse_*`` helper validates one endpoint's JSON body and raises
``RemoteResponseError`` when it does not match, so malformed payloads stop
at the boundary instead of leaking ``None`` values into tool output.
"""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, ValidationError

from confluence_search.client import RemoteResponseError


class _RemoteModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class BodyRepresentation(_RemoteModel):
    value: str


class ContentBody(_RemoteModel):
    export_view: BodyRepresentation | None = None
    storage: BodyRepresentation | None = None


class ContentItem(_RemoteModel):
    """A Confluence page as returned by the content endpoints."""

    id: str
    title: str
    body: ContentBody | None = None


class ContentList(_RemoteModel):
    """Envelope of ``/content``, ``/content/search`` and ``/child/page``."""

    results: List[ContentItem]


class DirectoryUser(_RemoteModel):
    """A user from ``/rest/api/3/user/search``.

    Privacy settings and app accounts can hide the email and display name.
    """

    accountId: str
    displayName: str | None = None
    emailAddress: str | None = None


def parse_content_list(payload: Any) -> List[ContentItem]:
    return _validate(ContentList, payload, "content list").results


def parse_content_item(payload: Any) -> ContentItem:
    return _validate(ContentItem, payload, "content item")


def parse_user_list(payload: Any) -> List[DirectoryUser]:
    if not isinstance(payload, list):
        raise RemoteResponseError(
            f"Unexpected user search response: expected a list, got {type(payload).__name__}"
        )
    return [_validate(DirectoryUser, item, "user") for item in payload]


def _validate(model: type[_RemoteModel], payload: Any, label: str):
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise RemoteResponseError(f"Unexpected {label} response: {exc}") from exc
