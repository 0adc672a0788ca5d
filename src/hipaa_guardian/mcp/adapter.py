"""Bridges MCP tool requests onto the operation registry.

``tools/list`` advertises one tool per registered operation with its JSON
Schema input shape. ``tools/call`` dispatches by name; every
``GuardianError`` is logged here and re-raised so the SDK returns it to the
caller as an ``isError`` result while the server keeps serving.
"""

from __future__ import annotations

from typing import Any

import mcp.types as types

from hipaa_guardian.core.errors import GuardianError, HandlerError
from hipaa_guardian.core.logging import get_logger
from hipaa_guardian.operations.registry import (
    InvocationRequest,
    InvocationResult,
    OperationDescriptor,
    OperationRegistry,
)

logger = get_logger(__name__)


def tool_definition(descriptor: OperationDescriptor) -> types.Tool:
    return types.Tool(
        name=descriptor.name,
        description=descriptor.description or None,
        inputSchema=descriptor.input_shape.json_schema(),
    )


def to_content(result: InvocationResult) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=block.text) for block in result.content]


class GuardianTools:
    """MCP tool handlers backed by an ``OperationRegistry``."""

    def __init__(self, registry: OperationRegistry):
        self._registry = registry
        self._tools = [tool_definition(d) for d in registry]

    @property
    def registry(self) -> OperationRegistry:
        return self._registry

    async def list_tools(self) -> list[types.Tool]:
        return list(self._tools)

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        request = InvocationRequest(name, arguments if arguments is not None else {})
        try:
            result = self._registry.dispatch(request)
        except HandlerError as e:
            logger.error("tool_call_failed", **e.to_dict())
            raise
        except GuardianError as e:
            logger.warning("tool_call_rejected", **e.to_dict())
            raise
        return to_content(result)
