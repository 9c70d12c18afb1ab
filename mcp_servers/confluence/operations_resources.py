"""Resource handlers for the Confluence MCP server."""

from __future__ import annotations

import json
from typing import Any

CQL_DOCS_URI = "docs://confluence/cql"

CQL_DOCS = """# Confluence Query Language (CQL) Documentation

CQL is used to search for content in Confluence. Here are the key concepts and examples:

## Basic Syntax
- Use AND, OR, NOT for boolean operations
- Use quotes for exact phrases: "exact match"
- Use parentheses for grouping: (term1 AND term2) OR term3

## Common Fields
- type: Filter by content type (page, blogpost, comment)
- space: Search in specific space
- title: Search in title
- text: Search in content text
- creator: Search by content creator (use Atlassian accountId)
- created: Search by creation date
- lastmodified: Search by last modification date
- label: Search by label

## Examples
1. Pages in a specific space:
   type = page AND space = "DEV"

2. Pages by creator:
   type = page AND creator = "accountId"

3. Recent modifications:
   lastmodified >= now("-1w")

4. Title and content search:
   type = page AND (title ~ "meeting" OR text ~ "agenda")

5. Multiple conditions:
   type = page AND space = "HR" AND label = "policy"

6. Pages created by a user in the last week:
   type = page AND creator = "accountId" AND created >= now("-1w")

## Date Formats
- Absolute: "YYYY-MM-DD"
- Relative: now("-1d") (1 day ago), now("-1w") (1 week ago), now("-1M") (1 month ago)

## Operators
- =  : Exact match
- != : Not equal
- ~  : Contains text
- !~ : Does not contain
- >  : Greater than
- >= : Greater than or equal
- <  : Less than
- <= : Less than or equal

## Best Practices
1. Always specify content type for better performance
2. Use contains (~) for partial text matches
3. Combine multiple conditions with AND for precise results
4. Use parentheses to control operator precedence
5. Quote values containing spaces or special characters (escape embedded quotes with a backslash)
"""


def get_cql_docs() -> str:
    """Get the CQL syntax guide.

    URI: docs://confluence/cql

    Returns:
        Markdown text, constant for the life of the process.
    """
    return CQL_DOCS


def get_health_status(
    credentials_configured: bool,
    tool_metrics: dict[str, Any],
) -> str:
    """Get server health status.

    Use this resource to check whether credentials are configured and how
    the tools have behaved so far.

    URI: status://health

    Returns:
        JSON string with health status and metrics.
    """
    total_calls = sum(m.call_count for m in tool_metrics.values())
    total_errors = sum(m.error_count for m in tool_metrics.values())

    return json.dumps(
        {
            "status": "healthy" if credentials_configured else "unconfigured",
            "server": "confluence-search",
            "credentials_configured": credentials_configured,
            "tool_metrics": {
                "total_calls": total_calls,
                "total_errors": total_errors,
                "tool_count": len(tool_metrics),
                "per_tool": {
                    name: {
                        "calls": m.call_count,
                        "errors": m.error_count,
                        "avg_time_ms": round(m.avg_execution_time_ms, 2),
                    }
                    for name, m in tool_metrics.items()
                },
            },
        },
        ensure_ascii=False,
        indent=2,
    )
