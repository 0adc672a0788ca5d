"""Operation registry and dispatch.

Manifesto:
    One table maps operation names to descriptors (input shape + handler).
    Dispatch is a single lookup plus one shared validation routine; no
    operation carries its own ad hoc argument checks.

    - Names are unique; registering twice raises ``DuplicateOperationError``
    - Arguments are validated all-or-nothing before the handler runs
    - Handler failures are wrapped in ``HandlerError`` with the cause chained

Tags:
    registry, dispatch, operations, validation, hipaa-guardian

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from hipaa_guardian.core.errors import (
    DuplicateOperationError,
    HandlerError,
    InvalidArgumentsError,
    UnknownOperationError,
    categorize_error,
)
from hipaa_guardian.core.logging import LogContext, get_logger
from hipaa_guardian.operations.shapes import NO_INPUT, InputShape

logger = get_logger(__name__)

Handler = Callable[[Mapping[str, Any]], str]


@dataclass(frozen=True)
class TextBlock:
    """A single text payload block."""

    text: str
    type: Literal["text"] = "text"

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class InvocationRequest:
    operation_name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class InvocationResult:
    """Ordered payload blocks returned by an operation."""

    content: tuple[TextBlock, ...]

    @classmethod
    def text(cls, text: str) -> InvocationResult:
        return cls((TextBlock(text),))

    def to_dict(self) -> dict[str, Any]:
        return {"content": [block.to_dict() for block in self.content]}


@dataclass(frozen=True)
class OperationDescriptor:
    """Registered operation: name, declared input shape and handler."""

    name: str
    handler: Handler
    input_shape: InputShape = NO_INPUT
    description: str = ""


class OperationRegistry:
    """Name-keyed table of operation descriptors."""

    def __init__(self) -> None:
        self._operations: dict[str, OperationDescriptor] = {}

    def register(self, descriptor: OperationDescriptor) -> OperationDescriptor:
        if descriptor.name in self._operations:
            raise DuplicateOperationError(descriptor.name)
        self._operations[descriptor.name] = descriptor
        logger.debug(
            "operation_registered",
            name=descriptor.name,
            fields=descriptor.input_shape.field_names,
        )
        return descriptor

    def add(
        self,
        name: str,
        input_shape: InputShape,
        handler: Handler,
        description: str = "",
    ) -> OperationDescriptor:
        """Register an operation from its parts."""
        return self.register(OperationDescriptor(name, handler, input_shape, description))

    def get(self, name: str) -> OperationDescriptor:
        try:
            return self._operations[name]
        except KeyError:
            raise UnknownOperationError(name) from None

    def names(self) -> list[str]:
        """Operation names in registration order."""
        return list(self._operations)

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __iter__(self) -> Iterator[OperationDescriptor]:
        return iter(self._operations.values())

    def __len__(self) -> int:
        return len(self._operations)

    def dispatch(self, request: InvocationRequest) -> InvocationResult:
        """Run one operation.

        Raises:
            UnknownOperationError: The name is not registered.
            InvalidArgumentsError: The arguments do not match the input shape.
                The handler is not called.
            HandlerError: The handler raised.
        """
        name = request.operation_name
        with LogContext(operation=name):
            descriptor = self.get(name)

            arguments, issues = descriptor.input_shape.validate(request.arguments)
            if issues:
                error = InvalidArgumentsError(name, issues)
                logger.info("operation_rejected", fields=error.fields)
                raise error

            try:
                text = descriptor.handler(arguments)
            except Exception as e:
                logger.error("operation_failed", error=repr(e), category=categorize_error(e).value)
                raise HandlerError(name, e) from e

            logger.debug("operation_dispatched", fields=sorted(arguments))
            return InvocationResult.text(text)


__all__ = [
    "Handler",
    "TextBlock",
    "InvocationRequest",
    "InvocationResult",
    "OperationDescriptor",
    "OperationRegistry",
]
