"""
HIPAA Compliance Guardian - MCP server for HIPAA compliance guidance.

- hipaa_guardian.core: errors, logging, settings, knowledge base, transports
- hipaa_guardian.operations: operation registry, catalog and templates
- hipaa_guardian.mcp: MCP server and tool adapter
- hipaa_guardian.cli: ``hipaa-guardian`` command line
"""

__version__ = "2.3.0"
