"""CQL (Confluence Query Language) query construction."""

from __future__ import annotations


def quote_cql_value(value: str) -> str:
    """Return ``value`` as a double-quoted CQL string literal.

    Backslashes and double quotes are backslash-escaped so the value can
    never close the literal early and alter the surrounding query.
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def pages_created_by(account_id: str) -> str:
    """CQL matching every page whose creator is ``account_id``."""
    return f"type=page AND creator={quote_cql_value(account_id)}"
