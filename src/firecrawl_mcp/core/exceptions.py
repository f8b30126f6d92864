"""Firecrawl MCP Exception Hierarchy.

This module defines the structured exceptions for the Firecrawl MCP server.
All custom exceptions inherit from FirecrawlMCPError, enabling consistent
error handling across the codebase.

Exception Categories:
- Startup/configuration errors → ConfigurationError (process cannot start)
- Tool call failures → ToolError, tagged with an ErrorKind

Every failed tool call surfaces as exactly one ToolError. The kind decides
the MCP error code returned to the client; the message carries the
upstream-provided detail when there is one.

Usage:
    from firecrawl_mcp.core.exceptions import ErrorKind, ToolError

    raise ToolError(ErrorKind.RATE_LIMITED, "Rate limit exceeded: slow down")
"""

from enum import Enum
from typing import Any, Optional

from mcp.shared.exceptions import McpError
from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    ErrorData,
)


class FirecrawlMCPError(Exception):
    """Base exception for all Firecrawl MCP errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: Optional[str] = None) -> None:
        """Initialize FirecrawlMCPError.

        Args:
            message: Optional custom message. Defaults to a generic message.
        """
        self.message = message or "A Firecrawl MCP error occurred."
        super().__init__(self.message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context dictionary for structured logging.

        Returns:
            dict: Key-value pairs of exception context.
        """
        return {}

    def __repr__(self) -> str:
        """Return debug representation."""
        return f"{self.__class__.__name__}({self.message!r})"


class ConfigurationError(FirecrawlMCPError):
    """Configuration file or value is invalid.

    Raised at startup when the API key is missing, a YAML config file
    cannot be parsed, or a value fails validation.

    Attributes:
        config_path: Path to the configuration source (file or "environment").
        key: The configuration key that caused the error.
    """

    def __init__(
        self,
        config_path: str,
        key: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            config_path: Path to the config file, or "environment".
            key: Optional key that caused the error.
            message: Optional custom message.
        """
        self.config_path = config_path
        self.key = key

        if message is None:
            key_info = f" key '{key}'" if key else ""
            message = f"Configuration error in '{config_path}'{key_info}."

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for configuration error."""
        return {
            "config_path": self.config_path,
            "key": self.key,
        }

    def __repr__(self) -> str:
        """Return debug representation with attributes."""
        return (
            f"ConfigurationError(config_path={self.config_path!r}, "
            f"key={self.key!r})"
        )


class ErrorKind(str, Enum):
    """Classification of a failed tool call."""

    RATE_LIMITED = "rate_limited"
    INVALID_PARAMETERS = "invalid_parameters"
    RESOURCE_NOT_FOUND = "resource_not_found"
    NETWORK_OR_TRANSPORT = "network_or_transport"
    INTERNAL = "internal"


# MCP JSON-RPC error code per kind
MCP_ERROR_CODES: dict[ErrorKind, int] = {
    ErrorKind.RATE_LIMITED: INVALID_REQUEST,
    ErrorKind.INVALID_PARAMETERS: INVALID_PARAMS,
    ErrorKind.RESOURCE_NOT_FOUND: INVALID_REQUEST,
    ErrorKind.NETWORK_OR_TRANSPORT: INTERNAL_ERROR,
    ErrorKind.INTERNAL: INTERNAL_ERROR,
}


class ToolError(FirecrawlMCPError):
    """Normalized error for a failed tool call.

    One class tagged with an ErrorKind rather than a subclass per kind:
    callers branch on ``kind``, and the MCP layer maps it to an error code.

    Attributes:
        kind: The error classification.
        message: Human-readable message, including upstream detail if any.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        """Initialize ToolError.

        Args:
            kind: The error classification.
            message: Human-readable message.
        """
        self.kind = kind
        super().__init__(message)

    @property
    def code(self) -> int:
        """MCP error code for this kind."""
        return MCP_ERROR_CODES[self.kind]

    @property
    def context(self) -> dict[str, Any]:
        """Return context for tool error."""
        return {
            "kind": self.kind.value,
            "code": self.code,
        }

    def to_mcp_error(self) -> McpError:
        """Convert to the MCP protocol error envelope."""
        return McpError(ErrorData(code=self.code, message=self.message))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToolError):
            return NotImplemented
        return self.kind == other.kind and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.kind, self.message))

    def __repr__(self) -> str:
        """Return debug representation with attributes."""
        return f"ToolError(kind={self.kind.value!r}, message={self.message!r})"
