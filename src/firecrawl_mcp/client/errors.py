"""Normalization of upstream failures into ToolError."""

from typing import Any, Optional

import httpx
import structlog

from firecrawl_mcp.core.exceptions import ErrorKind, ToolError

log = structlog.get_logger()

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


def _response_body(response: httpx.Response) -> Optional[dict[str, Any]]:
    """Decode a JSON object error body, or None if there is none."""
    try:
        body = response.json()
    except (ValueError, httpx.ResponseNotRead):
        return None
    return body if isinstance(body, dict) else None


def extract_message(failure: httpx.HTTPError) -> str:
    """Pick the most useful message for an HTTP failure.

    Precedence: body ``message``, body ``error``, then the exception text.
    """
    if isinstance(failure, httpx.HTTPStatusError):
        body = _response_body(failure.response)
        if body:
            for field in ("message", "error"):
                value = body.get(field)
                if value:
                    return str(value)
    return str(failure) or type(failure).__name__


def _classify_status(status: int, message: str) -> ToolError:
    if status == 429:
        return ToolError(ErrorKind.RATE_LIMITED, f"Rate limit exceeded: {message}")
    if status == 401:
        return ToolError(ErrorKind.INVALID_PARAMETERS, f"Invalid API key: {message}")
    if status == 400:
        return ToolError(ErrorKind.INVALID_PARAMETERS, f"Invalid request: {message}")
    if status == 404:
        return ToolError(ErrorKind.RESOURCE_NOT_FOUND, f"Resource not found: {message}")
    return ToolError(ErrorKind.INTERNAL, f"API error: {message}")


def classify(failure: object, debug: bool = False) -> ToolError:
    """Convert any raised failure into a single ToolError.

    Args:
        failure: Whatever the upstream operation raised.
        debug: If True, log the raw failure before classifying it.

    Returns:
        The normalized error. Classification never raises.
    """
    if debug:
        log.debug(
            "upstream_failure",
            error_class=type(failure).__name__,
            error=repr(failure),
        )

    if isinstance(failure, ToolError):
        return failure

    if isinstance(failure, httpx.HTTPStatusError):
        return _classify_status(failure.response.status_code, extract_message(failure))

    if isinstance(failure, httpx.TransportError):
        return ToolError(
            ErrorKind.NETWORK_OR_TRANSPORT,
            f"Network error: {extract_message(failure)}",
        )

    if isinstance(failure, Exception) and str(failure):
        return ToolError(ErrorKind.INTERNAL, str(failure))

    return ToolError(ErrorKind.INTERNAL, UNKNOWN_ERROR_MESSAGE)
