"""
Structured error types for the HIPAA Compliance Guardian.

Every failure the server can produce is a ``GuardianError`` subclass carrying
a category, a structured context and an optional chained cause. The transport
boundary converts them into caller-visible error results; only ``LoadError``
is allowed to stop the process.

Manifesto:
    - **Typed Error Hierarchy:** One error type per failure mode of dispatch
    - **Rich Context:** Errors carry the operation and fields they concern
    - **Error Chaining:** Original exceptions are preserved as ``cause``
    - **Safe Serialization:** ``to_dict()`` for structured logging

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                       GuardianError                          │
        │              (category, context, cause)                      │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  LoadError            KeyNotFoundError    TemplateError      │
        │  (SOURCE, fatal)      (INTERNAL)          (INTERNAL)         │
        │                                                              │
        │  DuplicateOperationError   UnknownOperationError             │
        │  (CONFIG)                  (DISPATCH)                        │
        │                                                              │
        │  InvalidArgumentsError     HandlerError                      │
        │  (VALIDATION, issues)      (INTERNAL, cause)                 │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = UnknownOperationError("getWeather")
    >>> error.category
    <ErrorCategory.DISPATCH: 'DISPATCH'>
    >>> error.context.operation
    'getWeather'

    >>> error = InvalidArgumentsError(
    ...     "getVendorVettingChecklist",
    ...     [ArgumentIssue("vendorName", "field required")],
    ... )
    >>> error.fields
    ['vendorName']

Guardrails:
    ❌ DON'T: Raise bare ``Exception`` from registry or store code
    ✅ DO: Raise the matching GuardianError subclass

    ❌ DON'T: Put argument values in error context (may hold PHI)
    ✅ DO: Reference field names only

Tags:
    error-handling, exception-hierarchy, error-context, dispatch,
    hipaa-guardian

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and logging."""

    SOURCE = "SOURCE"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    DISPATCH = "DISPATCH"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured context attached to a GuardianError.

    Attributes:
        operation: Operation name the error concerns
        fields: Argument field names involved (never values)
        source: Knowledge base location for load errors
        metadata: Additional key-value pairs
    """

    operation: str | None = None
    fields: list[str] | None = None
    source: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ["operation", "fields", "source"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class GuardianError(Exception):
    """
    Base exception for all guardian errors.

    Subclasses set ``default_category``; instances carry a message, a
    category, an ``ErrorContext`` and an optional ``cause`` which is also
    chained as ``__cause__`` for tracebacks.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> GuardianError:
        """
        Add context to this error (fluent API).

        Usage:
            raise LoadError("Bad JSON").with_context(source="./kb.json")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# KNOWLEDGE STORE ERRORS
# =============================================================================


class LoadError(GuardianError):
    """Knowledge base missing, unreadable, malformed or incomplete.

    Raised only during startup. The process must not begin serving.
    """

    default_category = ErrorCategory.SOURCE

    def __init__(self, message: str, *, source: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        if source is not None:
            self.context.source = source


class KeyNotFoundError(GuardianError):
    """Topic key absent from the store at lookup time."""

    default_category = ErrorCategory.INTERNAL

    def __init__(self, key: str):
        super().__init__(f"Topic '{key}' is not present in the knowledge base")
        self.key = key
        self.context.metadata["topic"] = key


class TemplateError(GuardianError):
    """Template placeholder with no supplied value."""

    default_category = ErrorCategory.INTERNAL


# =============================================================================
# REGISTRY / DISPATCH ERRORS
# =============================================================================


class DuplicateOperationError(GuardianError):
    """Operation name registered twice."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, name: str):
        super().__init__(
            f"Operation '{name}' is already registered",
            context=ErrorContext(operation=name),
        )
        self.name = name


class UnknownOperationError(GuardianError):
    """Requested operation is not in the registry."""

    default_category = ErrorCategory.DISPATCH

    def __init__(self, name: str):
        super().__init__(
            f"Unknown operation: '{name}'",
            context=ErrorContext(operation=name),
        )
        self.name = name


@dataclass(frozen=True)
class ArgumentIssue:
    """One field-level reason an argument set was rejected."""

    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


class InvalidArgumentsError(GuardianError):
    """Arguments do not conform to the operation's input shape."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, operation: str, issues: Iterable[ArgumentIssue]):
        self.issues = list(issues)
        detail = "; ".join(str(issue) for issue in self.issues)
        super().__init__(
            f"Invalid arguments for '{operation}': {detail}",
            context=ErrorContext(operation=operation, fields=self.fields),
        )

    @property
    def fields(self) -> list[str]:
        """Field names with at least one issue, in reporting order."""
        return list(dict.fromkeys(issue.field for issue in self.issues))

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["issues"] = [{"field": i.field, "reason": i.reason} for i in self.issues]
        return result


class HandlerError(GuardianError):
    """Unexpected failure inside an operation handler."""

    default_category = ErrorCategory.INTERNAL

    def __init__(self, operation: str, cause: Exception):
        super().__init__(
            f"Internal error while running '{operation}'",
            context=ErrorContext(operation=operation),
            cause=cause,
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, GuardianError):
        return error.category
    if isinstance(error, (OSError, ValueError)):
        return ErrorCategory.SOURCE
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "GuardianError",
    "LoadError",
    "KeyNotFoundError",
    "TemplateError",
    "DuplicateOperationError",
    "UnknownOperationError",
    "ArgumentIssue",
    "InvalidArgumentsError",
    "HandlerError",
    "categorize_error",
]
