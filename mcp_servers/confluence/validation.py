"""Validation helpers for Confluence MCP server inputs."""

from __future__ import annotations

from typing import Any


class ValidationError(ValueError):
    """Raised when input validation fails."""


def validate_required_string(value: Any, name: str, max_length: int = 10000) -> str:
    """Validate a required, non-empty textual parameter."""
    if value is None:
        raise ValidationError(f"{name} is required and cannot be empty")
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    if not value.strip():
        raise ValidationError(f"{name} is required and cannot be empty")
    if len(value) > max_length:
        raise ValidationError(
            f"{name} exceeds maximum length of {max_length} characters"
        )
    return value


def validate_cql(cql: Any) -> str:
    """Validate a CQL query string."""
    return validate_required_string(cql, "cql")


def validate_page_id(page_id: Any) -> str:
    """Validate a Confluence content identifier."""
    return validate_required_string(page_id, "id", max_length=255)


def validate_space_key(space_key: Any) -> str:
    """Validate a Confluence space key."""
    return validate_required_string(space_key, "spaceKey", max_length=255)


def validate_account_id(account_id: Any) -> str:
    """Validate an Atlassian account identifier."""
    return validate_required_string(account_id, "userAccountId", max_length=255)


def validate_user_query(query: Any) -> str:
    """Validate a user-directory search string."""
    return validate_required_string(query, "query", max_length=1000)
