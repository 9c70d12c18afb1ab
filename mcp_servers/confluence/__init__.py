"""Shared building blocks for the Confluence MCP server."""

from .execution import ToolMetrics, get_tool_metrics, tool_wrapper
from .formatting import (
    ContentEnvelope,
    build_envelope,
    select_page_summary,
    select_user,
    single_block,
    text_block,
)
from .validation import (
    ValidationError,
    validate_account_id,
    validate_cql,
    validate_page_id,
    validate_required_string,
    validate_space_key,
    validate_user_query,
)

__all__ = [
    "ToolMetrics",
    "get_tool_metrics",
    "tool_wrapper",
    "ContentEnvelope",
    "build_envelope",
    "select_page_summary",
    "select_user",
    "single_block",
    "text_block",
    "ValidationError",
    "validate_account_id",
    "validate_cql",
    "validate_page_id",
    "validate_required_string",
    "validate_space_key",
    "validate_user_query",
]
