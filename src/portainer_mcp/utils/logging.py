# ABOUTME: Structured logging with correlation IDs for Portainer MCP Server
# ABOUTME: Configures structlog on stderr and records an audit trail of tool calls

"""
Structured logging with correlation IDs and audit trails.

=============================================================================
WHAT IS THIS FILE?
=============================================================================

Two observability features live here:

1. STRUCTURED LOGGING: Every log line is an event name plus key/value pairs,
   rendered either for humans (console) or for machines (JSON).

2. AUDIT LOGGING: One record per tool call, saying which tool ran against
   which Portainer object and whether it worked.

=============================================================================
WHY STDERR?
=============================================================================

The server talks MCP over stdio: stdout carries JSON-RPC frames to the
assistant. A single stray log line on stdout corrupts the protocol stream,
so every log line (including audit records) is written to stderr.

=============================================================================
CORRELATION IDs
=============================================================================

A tool call produces several log lines (HTTP request, API error, audit
record). They share a correlation ID so they can be grouped afterwards:

    {"correlation_id": "7", "event": "Portainer API request", "path": "/stacks"}
    {"correlation_id": "7", "event": "audit", "action": "list_docker_stacks"}

Each tool handler sets the ID from the MCP request id. Outside a request
(startup, shutdown) a short random ID is generated on first use.

The ID is stored in a ContextVar, so concurrent requests running as
separate asyncio tasks never see each other's ID.
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from pathlib import Path


# =============================================================================
# CORRELATION ID MANAGEMENT
# =============================================================================

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """
    Get current correlation ID or generate new one.

    Generated IDs are the first 8 characters of a UUID4: unique enough to
    tell requests apart in a log stream while staying readable.

    Returns:
        Correlation ID string for the current context.
    """
    cid = correlation_id.get()
    if not cid:
        cid = str(uuid.uuid4())[:8]
        correlation_id.set(cid)
    return cid


def set_correlation_id(cid: str) -> None:
    """
    Set correlation ID for current context.

    Called at the start of every tool handler with the MCP request id.
    Passing "" makes the next get_correlation_id() call generate a fresh ID.
    """
    correlation_id.set(cid)


def add_correlation_id(
    logger: structlog.types.WrappedLogger,  # noqa: ARG001 - Required by structlog Processor API
    method_name: str,  # noqa: ARG001 - Required by structlog Processor API
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """
    Structlog processor that stamps the correlation ID onto every event.

    Processors receive (logger, method_name, event_dict) and return the
    event_dict; only the last one is used here.
    """
    event_dict["correlation_id"] = get_correlation_id()
    return event_dict


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
) -> None:
    """
    Configure structured logging.

    Call once at startup; calling again reconfigures (used when settings
    change the level after the bootstrap configuration in main()).

    PROCESSOR PIPELINE:
    -------------------
    1. merge_contextvars: Values bound with structlog.contextvars
    2. add_log_level: "level" field
    3. TimeStamper: ISO 8601 "timestamp" field
    4. add_correlation_id: Request correlation ID
    5. Renderer: JSON lines or colored console output

    Args:
        level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
               Unknown values fall back to INFO.
        json_output: True for JSON lines (log aggregators),
                     False for console rendering (development).
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_correlation_id,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        # stdout belongs to the MCP stdio transport
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


# =============================================================================
# AUDIT LOGGER
# =============================================================================


class AuditLogger:
    """
    Audit logger recording every tool invocation.

    WHAT WE LOG:
    ------------
    - timestamp: When it happened (UTC ISO 8601)
    - correlation_id: Request identifier
    - action: Tool name ("list_docker_stacks", "delete_registry")
    - target: What was touched ("stack=12", "environment=3/crd=foo", "all")
    - result: "success" or "error"
    - details: Error message or write parameters (optional)

    OUTPUT:
    -------
    With a log_path, each record is appended to the file as one JSON line.
    Without one, records go through structlog as "audit" events.

    EXAMPLE ENTRIES:
    ----------------
    {"timestamp": "2025-01-15T10:30:00+00:00", "correlation_id": "12",
     "action": "list_registries", "target": "all", "result": "success"}

    {"timestamp": "2025-01-15T10:30:05+00:00", "correlation_id": "13",
     "action": "delete_registry", "target": "registry=4", "result": "error",
     "details": {"error": "API request failed with status 404: ..."}}
    """

    def __init__(self, log_path: Path | None = None) -> None:
        """
        Initialize audit logger.

        Args:
            log_path: Audit log file (appended, never truncated; parent
                      directory must exist), or None for structlog output.
        """
        self._log_path = log_path
        self._logger = structlog.get_logger("audit")

    def log(
        self,
        action: str,
        target: str,
        result: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Log an auditable action.

        All convenience methods delegate here.

        Args:
            action: Tool name.
            target: Target resource identifier.
            result: "success" or "error".
            details: Extra context, omitted from the record when empty.
        """
        entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "correlation_id": get_correlation_id(),
            "action": action,
            "target": target,
            "result": result,
        }

        if details:
            entry["details"] = details

        if self._log_path:
            with self._log_path.open("a") as f:
                f.write(json.dumps(entry) + "\n")
        else:
            self._logger.info(
                "audit",
                action=action,
                target=target,
                result=result,
                details=details,
            )

    def log_read(self, action: str, target: str) -> None:
        """Log a successful read tool call."""
        self.log(action, target, "success")

    def log_write(
        self,
        action: str,
        target: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Log a successful write tool call.

        Example:
            audit_logger.log_write(
                "update_docker_stack",
                "stack=12",
                {"environment_id": 3, "prune": True},
            )
        """
        self.log(action, target, "success", details)

    def log_error(
        self,
        action: str,
        target: str,
        error: str,
    ) -> None:
        """
        Log a failed tool call.

        Example:
            audit_logger.log_error(
                "get_edge_job",
                "edge_job=99",
                "API request failed with status 404: Edge job not found",
            )
        """
        self.log(action, target, "error", {"error": error})
