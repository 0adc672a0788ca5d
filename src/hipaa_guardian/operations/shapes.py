"""Declared input shapes for operations.

An ``InputShape`` is an ordered set of ``InputField`` declarations. It is the
single source for both the JSON Schema advertised to callers and the strict
validation applied before a handler runs. Validation is delegated to a
pydantic model generated once per shape (``extra="forbid"``, ``strict=True``),
so every operation shares one validation routine.

Tags:
    validation, json-schema, pydantic, dispatch, hipaa-guardian

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model

from hipaa_guardian.core.errors import ArgumentIssue

FieldKind = Literal["string", "enum"]

_ROOT_FIELD = "<arguments>"


@dataclass(frozen=True)
class InputField:
    """One named argument of an operation."""

    name: str
    kind: FieldKind = "string"
    description: str | None = None
    choices: tuple[str, ...] = ()
    required: bool = True

    def __post_init__(self) -> None:
        if self.kind == "enum" and not self.choices:
            raise ValueError(f"Enum field '{self.name}' needs at least one choice")
        if self.kind == "string" and self.choices:
            raise ValueError(f"String field '{self.name}' cannot declare choices")

    def annotation(self) -> Any:
        base: Any = str if self.kind == "string" else Literal[self.choices]
        return base if self.required else base | None


@dataclass(frozen=True)
class InputShape:
    """Ordered, immutable set of input fields."""

    fields: tuple[InputField, ...] = ()
    model_name: str = "Arguments"

    def __post_init__(self) -> None:
        names = [f.name for f in self.fields]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate input fields: {', '.join(duplicates)}")

    @classmethod
    def of(cls, *fields: InputField, model_name: str = "Arguments") -> InputShape:
        return cls(tuple(fields), model_name=model_name)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def required(self) -> list[str]:
        return [f.name for f in self.fields if f.required]

    @cached_property
    def model(self) -> type[BaseModel]:
        definitions: dict[str, Any] = {
            f.name: (
                f.annotation(),
                Field(... if f.required else None, description=f.description),
            )
            for f in self.fields
        }
        return create_model(
            self.model_name,
            __config__=ConfigDict(extra="forbid", strict=True),
            **definitions,
        )

    def json_schema(self) -> dict[str, Any]:
        """JSON Schema object advertised in tool listings."""
        return self.model.model_json_schema()

    def validate(self, arguments: Mapping[str, Any] | None) -> tuple[dict[str, Any], list[ArgumentIssue]]:
        """Check ``arguments`` against the shape.

        Returns the validated arguments and an empty issue list, or an empty
        dict and every issue found. Nothing partial is ever returned.
        """
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            return {}, [ArgumentIssue(_ROOT_FIELD, f"expected an object, got {type(arguments).__name__}")]

        try:
            validated = self.model.model_validate(dict(arguments))
        except ValidationError as e:
            return {}, [_issue_from(err) for err in e.errors()]

        return validated.model_dump(exclude_unset=True), []


def _issue_from(error: Mapping[str, Any]) -> ArgumentIssue:
    loc = error.get("loc") or ()
    name = ".".join(str(part) for part in loc) or _ROOT_FIELD
    return ArgumentIssue(name, error.get("msg", "invalid value"))


NO_INPUT = InputShape()


__all__ = [
    "InputField",
    "InputShape",
    "NO_INPUT",
]
