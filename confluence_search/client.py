"""Authenticated HTTP client for the Atlassian Cloud REST APIs."""

from __future__ import annotations

import logging
from typing import Any, Dict

import requests

from confluence_search.config import AtlassianCredentials, ConfigurationError

logger = logging.getLogger("confluence_search.client")


class RemoteTransportError(RuntimeError):
    """Remote API unreachable, timed out, or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RemoteResponseError(RuntimeError):
    """Remote API answered, but the body does not have the expected shape."""


class AtlassianClient:
    """Thin wrapper over a ``requests.Session`` bound to one Atlassian site.

    Paths passed to :meth:`get_json` carry their full API prefix
    (``/wiki/rest/api/...`` for Confluence, ``/rest/api/3/...`` for the
    user directory), so one client serves both products.
    """

    def __init__(
        self,
        base_url: str,
        session: requests.Session,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.timeout = timeout

    def get_json(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RemoteTransportError(f"GET {path} failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise RemoteTransportError(
                f"GET {path} returned HTTP {response.status_code}: "
                f"{_truncate(response.text)}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise RemoteResponseError(f"GET {path} returned a non-JSON body") from exc

    def close(self) -> None:
        self.session.close()


def create_client(
    credentials: AtlassianCredentials,
    session: requests.Session | None = None,
) -> AtlassianClient:
    """Build an authenticated client; fail before any I/O if unconfigured."""
    missing = credentials.missing()
    if missing:
        raise ConfigurationError(
            "Missing required Confluence environment variables: " + ", ".join(missing)
        )

    timeout = credentials.request_timeout()

    session = session or requests.Session()
    session.auth = (credentials.user, credentials.token)
    session.headers.update({"Accept": "application/json"})
    return AtlassianClient(
        base_url=credentials.base_url,
        session=session,
        timeout=timeout,
    )


def _truncate(text: str, limit: int = 200) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
