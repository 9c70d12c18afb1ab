# confluence_search/config.py
from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

REQUIRED_SETTINGS = ("ATLAS_BASEURL", "ATLAS_USER", "ATLAS_KEY")


class ConfigurationError(Exception):
    """Raised when an Atlassian setting is missing or malformed."""


def load_settings() -> dict:
    load_dotenv()
    return {
        "ATLAS_BASEURL": os.getenv("ATLAS_BASEURL", ""),
        "ATLAS_USER": os.getenv("ATLAS_USER", ""),
        "ATLAS_KEY": os.getenv("ATLAS_KEY", ""),
        "ATLAS_TIMEOUT": os.getenv("ATLAS_TIMEOUT", ""),
        "LOG_LEVEL": os.getenv("CONFLUENCE_MCP_LOG_LEVEL", "INFO").upper(),
    }


class AtlassianCredentials(BaseModel):
    """Process-scoped credentials for the Atlassian Cloud APIs.

    Values are kept as read; the client factory decides whether the set
    is usable so errors surface at first use, not at import.
    """

    model_config = {"frozen": True}

    base_url: str = ""
    user: str = ""
    token: str = Field(default="", repr=False)
    timeout: str = ""

    @classmethod
    def from_settings(cls, settings: dict) -> "AtlassianCredentials":
        return cls(
            base_url=settings.get("ATLAS_BASEURL") or "",
            user=settings.get("ATLAS_USER") or "",
            token=settings.get("ATLAS_KEY") or "",
            timeout=str(settings.get("ATLAS_TIMEOUT") or ""),
        )

    def missing(self) -> list[str]:
        """Names of the required settings that are empty."""
        values = {
            "ATLAS_BASEURL": self.base_url,
            "ATLAS_USER": self.user,
            "ATLAS_KEY": self.token,
        }
        return [name for name in REQUIRED_SETTINGS if not values[name]]

    def request_timeout(self) -> float | None:
        """Seconds per request; ``None`` when unset or not positive."""
        raw = self.timeout.strip()
        if not raw:
            return None
        try:
            seconds = float(raw)
        except ValueError as exc:
            raise ConfigurationError(
                f"ATLAS_TIMEOUT must be a number of seconds, got {raw!r}"
            ) from exc
        return seconds if seconds > 0 else None
