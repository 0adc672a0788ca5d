"""HIPAA Compliance Guardian MCP Server.

Model Context Protocol (MCP) server exposing the HIPAA knowledge base and
compliance checklists as AI-callable tools.

Usage::

    # stdio mode (default)
    hipaa-guardian serve

    # HTTP mode
    hipaa-guardian serve --transport streamable-http --port 8100
"""

from hipaa_guardian.mcp.adapter import GuardianTools
from hipaa_guardian.mcp.server import SERVER_NAME, create_server, run

__all__ = [
    "GuardianTools",
    "SERVER_NAME",
    "create_server",
    "run",
]
