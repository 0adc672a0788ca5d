"""
CLI layer for the HIPAA Compliance Guardian.

Entry point::

    hipaa-guardian --help
"""

from hipaa_guardian.cli.app import app

__all__ = ["app"]
