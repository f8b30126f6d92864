"""
Base Tool - Abstract base class for all Firecrawl tool handlers.

Provides:
- Static tool definition (name, description, JSON input schema)
- Shallow argument shape validation interface
- Upstream POST under the retry executor
- Standardized MCP text response
"""
from abc import ABC, abstractmethod
import json
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet

import httpx
import structlog

from firecrawl_mcp.client.executor import execute_with_retry
from firecrawl_mcp.client.http import post_json
from firecrawl_mcp.client.retry import RetryConfig

log = structlog.get_logger()


@dataclass(frozen=True)
class ToolDefinition:
    """Static description of a tool as advertised to MCP clients."""

    name: str
    description: str
    input_schema: Dict[str, Any]
    required_fields: FrozenSet[str] = field(default_factory=frozenset)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the MCP tools/list entry shape."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


def text_response(data: Any) -> Dict[str, Any]:
    """Wrap an upstream JSON body as a single pretty-printed text block."""
    return {
        "content": [
            {
                "type": "text",
                "text": json.dumps(data, indent=2, ensure_ascii=False),
            }
        ]
    }


class BaseTool(ABC):
    """
    Abstract base class for all tool handlers.

    Every tool is a thin pass-through: check the argument shape, POST the
    arguments unchanged to a fixed endpoint under retry, and wrap the
    response body.
    """

    #: MCP tool name, unique across the handler set
    name: str = ""
    #: Human-readable description advertised to clients
    description: str = ""
    #: Upstream endpoint path, relative to the API base URL
    endpoint: str = ""

    def __init__(self, client: httpx.AsyncClient, retry_config: RetryConfig):
        """
        Initialize the tool.

        Args:
            client: Shared async HTTP client configured with base URL and auth
            retry_config: Retry configuration for upstream calls
        """
        self.client = client
        self.retry_config = retry_config
        schema = self.input_schema()
        self._definition = ToolDefinition(
            name=self.name,
            description=self.description,
            input_schema=schema,
            required_fields=frozenset(schema.get("required", [])),
        )

    @abstractmethod
    def input_schema(self) -> Dict[str, Any]:
        """JSON schema describing the accepted arguments."""
        pass

    @abstractmethod
    def validate(self, args: Any) -> bool:
        """
        Check the argument shape.

        Required fields must be present with the right type; optional fields
        are checked only when present. Unknown fields are accepted.
        """
        pass

    def get_definition(self) -> ToolDefinition:
        """Return the static tool definition."""
        return self._definition

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        """
        Forward the arguments to the upstream endpoint.

        Args:
            args: Validated arguments, sent as the JSON body unchanged

        Returns:
            MCP response with the upstream body as pretty-printed JSON

        Raises:
            ToolError: If the request fails after retries
        """
        log.debug("tool_call_started", tool=self.name, endpoint=self.endpoint)
        data = await execute_with_retry(
            post_json(self.client, self.endpoint, args),
            self.retry_config,
        )
        return text_response(data)


# =============================================================================
# Shape check helpers
# =============================================================================


def is_number(value: Any) -> bool:
    """True for int/float; bool does not count as a number."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def optional(args: Dict[str, Any], key: str, check) -> bool:
    """Apply ``check`` to ``args[key]`` only when the key is present."""
    return key not in args or check(args[key])


def all_optional(args: Dict[str, Any], checks: Dict[str, Any]) -> bool:
    """Apply ``optional`` for every key/check pair."""
    return all(optional(args, key, check) for key, check in checks.items())


def is_str(value: Any) -> bool:
    return isinstance(value, str)


def is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def string_array_schema(description: str) -> Dict[str, Any]:
    return {
        "type": "array",
        "items": {"type": "string"},
        "description": description,
    }
