"""HIPAA Compliance Guardian MCP server.

Startup order is fixed: load the knowledge base, build the operation
registry, then open the transport. A knowledge base that fails to load stops
startup with ``LoadError`` before any request can be served.

Tags: mcp, server, ai-tools, compliance, protocol
Doc-Types: API_REFERENCE, TECHNICAL_DESIGN
"""

from __future__ import annotations

from pathlib import Path

from mcp.server.lowlevel import Server

from hipaa_guardian import __version__
from hipaa_guardian.core.knowledge import KnowledgeStore, load
from hipaa_guardian.core.logging import get_logger
from hipaa_guardian.core.settings import GuardianSettings
from hipaa_guardian.core.transports.mcp import create_guardian_mcp, run_guardian_mcp
from hipaa_guardian.mcp.adapter import GuardianTools
from hipaa_guardian.operations.catalog import build_registry
from hipaa_guardian.operations.registry import OperationRegistry

logger = get_logger(__name__)

SERVER_NAME = "HIPAA Compliance Guardian"

INSTRUCTIONS = """
HIPAA compliance reference server.

Capabilities:
- Decide whether an application must be HIPAA compliant
- Roadmap, core definitions, Security Rule safeguards, penalties, audits
- Mobile, API, privacy policy, PII, breach response and secure SDLC checklists
- Vendor (Business Associate) vetting checklist for a named vendor

Start with evaluateComplianceNeed. Before outputting code that handles PHI,
call confirmCodeCompliance with the code, the checklist it was checked
against, and a point-by-point justification.
"""


def create_server(
    registry: OperationRegistry | None = None,
    *,
    store: KnowledgeStore | None = None,
    knowledge_base: str | Path | None = None,
) -> Server:
    """Create the MCP server.

    Uses ``registry`` when given; otherwise builds one from ``store``, loading
    ``knowledge_base`` (or the bundled file) when no store is given.

    Raises:
        LoadError: The knowledge base could not be loaded.
    """
    if registry is None:
        if store is None:
            store = load(knowledge_base)
        registry = build_registry(store)

    tools = GuardianTools(registry)
    server = create_guardian_mcp(
        SERVER_NAME,
        version=__version__,
        instructions=INSTRUCTIONS,
        list_tools=tools.list_tools,
        call_tool=tools.call_tool,
    )
    logger.info("server_created", name=SERVER_NAME, version=__version__, tools=len(registry))
    return server


def run(settings: GuardianSettings | None = None) -> None:
    """Load, build and serve until the transport session ends."""
    settings = settings or GuardianSettings()
    server = create_server(knowledge_base=settings.knowledge_base_path)
    run_guardian_mcp(
        server,
        transport=settings.transport,
        host=settings.host,
        port=settings.port,
    )
