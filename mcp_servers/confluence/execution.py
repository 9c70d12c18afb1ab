"""Execution wrapper and metrics for Confluence MCP tools/resources."""

from __future__ import annotations

import functools
import inspect
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, TypeVar

import anyio.to_thread
from fastmcp.exceptions import ToolError

logger = logging.getLogger("confluence_search.mcp")


@dataclass
class ToolMetrics:
    """Tool execution metrics for monitoring."""

    call_count: int = 0
    total_execution_time_ms: float = 0.0
    error_count: int = 0

    @property
    def avg_execution_time_ms(self) -> float:
        if self.call_count == 0:
            return 0.0
        return self.total_execution_time_ms / self.call_count


_tool_metrics: Dict[str, ToolMetrics] = {}
T = TypeVar("T")


async def run_blocking(func: Callable[..., T], **kwargs: Any) -> T:
    """Run a blocking handler on a worker thread so other calls keep going."""
    return await anyio.to_thread.run_sync(functools.partial(func, **kwargs))


def tool_wrapper(tool_name: str) -> Callable:
    """Decorate tools/resources with metrics, logging and error reporting.

    Works on plain and ``async`` functions. Failures are logged, counted
    and re-raised as ``ToolError`` whose message names the original
    exception type, so callers can tell a transport failure from a
    malformed response. The original exception stays attached as
    ``__cause__``.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                start_time = _start(tool_name, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as exc:
                    raise _failed(tool_name, start_time, exc) from exc
                _completed(tool_name, start_time)
                return result

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            start_time = _start(tool_name, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                raise _failed(tool_name, start_time, exc) from exc
            _completed(tool_name, start_time)
            return result

        return wrapper

    return decorator


def get_tool_metrics() -> Dict[str, ToolMetrics]:
    return _tool_metrics


def _start(tool_name: str, params: Dict[str, Any]) -> float:
    if tool_name not in _tool_metrics:
        _tool_metrics[tool_name] = ToolMetrics()
    _tool_metrics[tool_name].call_count += 1

    logger.info(
        f"Executing tool: {tool_name}",
        extra={
            "tool_name": tool_name,
            "parameters": _sanitize_parameters(params),
        },
    )
    return time.time()


def _completed(tool_name: str, start_time: float) -> None:
    execution_time = (time.time() - start_time) * 1000
    _tool_metrics[tool_name].total_execution_time_ms += execution_time
    logger.info(
        f"Tool execution completed: {tool_name}",
        extra={
            "tool_name": tool_name,
            "execution_time_ms": execution_time,
            "success": True,
        },
    )


def _failed(tool_name: str, start_time: float, exc: Exception) -> ToolError:
    execution_time = (time.time() - start_time) * 1000
    metrics = _tool_metrics[tool_name]
    metrics.total_execution_time_ms += execution_time
    metrics.error_count += 1

    error_type = type(exc).__name__
    logger.error(
        f"Tool execution failed: {tool_name}",
        extra={
            "tool_name": tool_name,
            "execution_time_ms": execution_time,
            "error": str(exc),
            "error_type": error_type,
        },
        exc_info=exc,
    )
    return ToolError(f"{tool_name} failed ({error_type}): {exc}")


def _sanitize_parameters(params: Dict[str, Any]) -> Dict[str, Any]:
    sensitive_keys = {"password", "token", "secret", "api_key"}
    sanitized = {}
    for key, value in params.items():
        if any(sensitive in key.lower() for sensitive in sensitive_keys):
            sanitized[key] = "***REDACTED***"
        else:
            sanitized[key] = value
    return sanitized
