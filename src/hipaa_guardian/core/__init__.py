"""
Core primitives: errors, logging, settings, knowledge base and transports.
"""

from hipaa_guardian.core.errors import (
    ArgumentIssue,
    DuplicateOperationError,
    ErrorCategory,
    ErrorContext,
    GuardianError,
    HandlerError,
    InvalidArgumentsError,
    KeyNotFoundError,
    LoadError,
    TemplateError,
    UnknownOperationError,
)
from hipaa_guardian.core.knowledge import REQUIRED_TOPICS, KnowledgeStore, load

__all__ = [
    "ArgumentIssue",
    "DuplicateOperationError",
    "ErrorCategory",
    "ErrorContext",
    "GuardianError",
    "HandlerError",
    "InvalidArgumentsError",
    "KeyNotFoundError",
    "LoadError",
    "TemplateError",
    "UnknownOperationError",
    "REQUIRED_TOPICS",
    "KnowledgeStore",
    "load",
]
