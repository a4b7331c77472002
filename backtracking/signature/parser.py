"""Extract signature output fields from a raw LLM reply.

Two passes: a JSON object anywhere in the reply, then ``Label: value``
lines for whatever the JSON did not supply. Every value is then coerced to
its declared type. A required field that is missing, fails coercion or
falls outside ``one_of`` raises ``OutputParseError``; an optional field that
fails is dropped.
"""
from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterable, List, Optional

from backtracking.reasoner.exceptions import OutputParseError
from backtracking.signature.signature import FieldType, Signature, SignatureField

from utils.logger import get_logger

logger = get_logger(__name__)

_TRUE = {"true", "yes", "1"}
_FALSE = {"false", "no", "0"}
_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]+?)\s*```")


def signature_labels(signature: Signature) -> List[str]:
    return [f.label for f in (*signature.input_fields, *signature.output_fields)]


def _label_patterns(label: str, stop_labels: Iterable[str]) -> List[re.Pattern]:
    escaped = re.escape(label)
    stops = "|".join(re.escape(s) for s in stop_labels if s != label)
    # a multi-line value runs until another of the signature's labels or the end of the reply
    boundary = rf"\n(?:{stops})\s*:|\Z" if stops else r"\Z"
    return [
        re.compile(rf"{escaped}:\s*(.+?)(?={boundary})", re.DOTALL),
        re.compile(rf"{escaped}:\s*(.+)"),
        re.compile(rf"{escaped}\s*:\s*(.+)"),
    ]


def extract_field_value(text: str, field: SignatureField, stop_labels: Iterable[str] = ()) -> Optional[str]:
    for pattern in _label_patterns(field.label, list(stop_labels)):
        match = pattern.search(text)
        if match:
            value = match.group(1).strip()
            if value:
                return value
    return None


def _extract_json_object(text: str) -> Optional[str]:
    fenced = _FENCE_RE.search(text)
    if fenced:
        text = fenced.group(1)
    trimmed = text.strip()
    if trimmed.startswith("{") and trimmed.endswith("}"):
        return trimmed
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end == -1 or start >= end:
        return None
    return text[start:end + 1].strip()


def _json_values(signature: Signature, text: str) -> Dict[str, Any]:
    candidate = _extract_json_object(text)
    if candidate is None:
        return {}
    try:
        decoded = json.loads(candidate)
    except json.JSONDecodeError:
        return {}
    if not isinstance(decoded, dict):
        return {}
    return {f.name: decoded[f.name] for f in signature.output_fields if f.name in decoded}


def coerce_value(value: Any, field: SignatureField) -> Any:
    """Convert ``value`` to the field's declared type.

    Raises:
        ValueError / TypeError: the value does not convert, or is not one of ``field.one_of``.
    """
    typed = _coerce(value, field.type)
    if field.one_of and typed not in field.one_of:
        raise ValueError(f"{typed!r} is not one of {field.one_of}")
    return typed


def _coerce(value: Any, field_type: FieldType) -> Any:
    if field_type in (FieldType.STRING, FieldType.CODE):
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False)
        return str(value)
    if field_type == FieldType.INTEGER:
        if isinstance(value, bool):
            raise TypeError("boolean is not an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return int(str(value).strip())
    if field_type == FieldType.NUMBER:
        if isinstance(value, bool):
            raise TypeError("boolean is not a number")
        return float(value) if isinstance(value, (int, float)) else float(str(value).strip())
    if field_type == FieldType.BOOLEAN:
        if isinstance(value, bool):
            return value
        lowered = str(value).strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"not a boolean: {value!r}")
    if field_type == FieldType.JSON:
        return json.loads(value) if isinstance(value, str) else value
    return value


def parse_outputs(
    signature: Signature, text: str, *, stop_labels: Iterable[str] | None = None
) -> Dict[str, Any]:
    """Parse ``signature``'s outputs out of ``text``.

    ``stop_labels`` ends a multi-line value; it defaults to the labels of
    every field in ``signature``.
    """
    stops = list(stop_labels) if stop_labels is not None else signature_labels(signature)
    raw_values = _json_values(signature, text)

    for field in signature.output_fields:
        if field.name in raw_values:
            continue
        raw = extract_field_value(text, field, stops)
        if raw is not None:
            raw_values[field.name] = raw

    missing = [f.name for f in signature.output_fields if f.required and f.name not in raw_values]
    if missing:
        raise OutputParseError(f"Missing required output fields: {', '.join(missing)}", field=missing[0])

    outputs: Dict[str, Any] = {}
    for field in signature.output_fields:
        if field.name not in raw_values:
            continue
        try:
            outputs[field.name] = coerce_value(raw_values[field.name], field)
        except (TypeError, ValueError) as exc:
            if field.required:
                raise OutputParseError(
                    f"Invalid value for output field '{field.name}' ({field.type.value}): {exc}", field=field.name
                ) from exc
            logger.debug("optional_output_dropped", field=field.name, type=field.type.value, error=str(exc))
    return outputs
