"""Operation registry, input shapes, templates and the HIPAA catalog."""

from hipaa_guardian.operations.catalog import build_registry, catalog_entries
from hipaa_guardian.operations.registry import (
    InvocationRequest,
    InvocationResult,
    OperationDescriptor,
    OperationRegistry,
    TextBlock,
)
from hipaa_guardian.operations.shapes import NO_INPUT, InputField, InputShape
from hipaa_guardian.operations.templates import fill_template

__all__ = [
    "build_registry",
    "catalog_entries",
    "InvocationRequest",
    "InvocationResult",
    "OperationDescriptor",
    "OperationRegistry",
    "TextBlock",
    "NO_INPUT",
    "InputField",
    "InputShape",
    "fill_template",
]
