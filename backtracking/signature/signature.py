"""Typed input/output interfaces for LLM calls."""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, model_validator

from backtracking.reasoner.exceptions import InputValidationError, SignatureConflictError

_FIELD_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_FUNCTION_FORM_RE = re.compile(r"^(\w+)\s*\((.*)\)$")


class FieldType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    JSON = "json"
    CODE = "code"


_TYPE_ALIASES = {
    "str": FieldType.STRING,
    "string": FieldType.STRING,
    "int": FieldType.INTEGER,
    "integer": FieldType.INTEGER,
    "float": FieldType.NUMBER,
    "number": FieldType.NUMBER,
    "bool": FieldType.BOOLEAN,
    "boolean": FieldType.BOOLEAN,
    "json": FieldType.JSON,
    "code": FieldType.CODE,
}


def normalize_type(type_name: str) -> FieldType:
    try:
        return _TYPE_ALIASES[type_name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown field type: {type_name!r}") from None


def humanize(name: str) -> str:
    return " ".join(part.capitalize() for part in name.replace("_", " ").split())


class SignatureField(BaseModel):
    name: str
    type: FieldType = FieldType.STRING
    description: str = ""
    required: bool = True
    default: Any = None
    one_of: Optional[List[Any]] = None

    @model_validator(mode="after")
    def _check(self) -> "SignatureField":
        if not _FIELD_NAME_RE.match(self.name):
            raise ValueError(f"Invalid field name: {self.name!r}")
        if not self.description:
            self.description = humanize(self.name)
        return self

    @property
    def label(self) -> str:
        """Prompt label, e.g. ``previous_reasoning`` -> ``Previous_reasoning``."""
        return self.name.capitalize()


class Signature(BaseModel):
    name: str
    description: Optional[str] = None
    input_fields: List[SignatureField] = Field(default_factory=list)
    output_fields: List[SignatureField] = Field(default_factory=list)
    instructions: Optional[str] = None

    @classmethod
    def define(cls, text: str) -> "Signature":
        """Build a signature from a string.

        Supported forms::

            "question -> answer"
            "question, context -> answer, score: float"
            "solve(problem: str) -> answer: str, steps: int"
        """
        text = " ".join(text.split())
        parts = text.split("->")
        if len(parts) > 2:
            raise ValueError("Invalid signature format: multiple '->' found")

        input_part = parts[0].strip()
        output_part = parts[1].strip() if len(parts) == 2 else ""

        match = _FUNCTION_FORM_RE.match(input_part)
        if match:
            name, params = match.groups()
            return cls(
                name=name,
                input_fields=_parse_fields(params, require_type=True),
                output_fields=_parse_fields(output_part, require_type=True),
            )

        if len(parts) != 2:
            raise ValueError("Invalid signature format: expected 'inputs -> outputs'")
        return cls(
            name=text,
            input_fields=_parse_fields(input_part, require_type=False),
            output_fields=_parse_fields(output_part, require_type=False),
        )

    @property
    def input_names(self) -> List[str]:
        return [f.name for f in self.input_fields]

    @property
    def output_names(self) -> List[str]:
        return [f.name for f in self.output_fields]

    def validate_inputs(self, inputs: Mapping[str, Any]) -> None:
        if not isinstance(inputs, Mapping):
            raise InputValidationError(self.input_names)
        missing = [f.name for f in self.input_fields if f.required and f.name not in inputs]
        if missing:
            raise InputValidationError(missing)

    def extend(
        self,
        *,
        inputs: Iterable[SignatureField] = (),
        outputs: Iterable[SignatureField] = (),
        prepend_inputs: bool = False,
        instructions: Optional[str] = None,
    ) -> "Signature":
        """Copy of this signature with extra fields and (optionally) new instructions.

        Raises:
            SignatureConflictError: an extra field reuses a name already in the signature.
        """
        extra_inputs = list(inputs)
        extra_outputs = list(outputs)
        seen = set(self.input_names + self.output_names)
        clashes = []
        for field in extra_inputs + extra_outputs:
            if field.name in seen:
                clashes.append(field.name)
            seen.add(field.name)
        if clashes:
            raise SignatureConflictError(clashes)

        input_fields = extra_inputs + self.input_fields if prepend_inputs else self.input_fields + extra_inputs
        return self.model_copy(
            update={
                "input_fields": input_fields,
                "output_fields": self.output_fields + extra_outputs,
                "instructions": instructions if instructions is not None else self.instructions,
            }
        )


def _parse_fields(fields_str: str, *, require_type: bool) -> List[SignatureField]:
    fields: List[SignatureField] = []
    for raw in (p.strip() for p in fields_str.split(",")):
        if not raw:
            continue
        name, type_name = _split_field(raw)
        if type_name is None and require_type:
            raise ValueError(f"Invalid field format {raw!r}: expected 'name: type'")
        fields.append(
            SignatureField(
                name=name,
                type=normalize_type(type_name) if type_name else FieldType.STRING,
            )
        )
    return fields


def _split_field(raw: str) -> Tuple[str, Optional[str]]:
    if ":" in raw:
        name, type_name = raw.split(":", 1)
        return name.strip(), type_name.strip()
    return raw.strip(), None


def coerce_mapping(value: Any) -> Dict[str, Any]:
    """Accept plain mappings and pydantic models as example records."""
    if isinstance(value, Mapping):
        return dict(value)
    if hasattr(value, "model_dump"):
        return value.model_dump()
    raise TypeError(f"Expected a mapping, got {type(value).__name__}")
