"""Render a signature, its inputs and few-shot examples into a plain-text prompt."""
from __future__ import annotations

import json
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from backtracking.signature.signature import Signature, SignatureField, coerce_mapping

from utils.logger import get_logger

logger = get_logger(__name__)

MAX_PROMPT_LENGTH = 8000
TRUNCATION_SUFFIX = "..."
INPUT_PLACEHOLDER = "[input]"


def format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple, dict)):
        # Single-line and key-sorted so prompts stay deterministic
        return json.dumps(value, sort_keys=True, ensure_ascii=False, default=str)
    return repr(value)


def _instruction_section(signature: Signature) -> Optional[str]:
    if not signature.instructions:
        return None
    return f"Instructions: {signature.instructions}"


def _format_section(signature: Signature) -> str:
    lines = [f"{f.label}: [your {f.description}]" for f in signature.output_fields]
    return "Follow this exact format for your response:\n" + "\n".join(lines)


def _describe_fields(title: str, fields: Sequence[SignatureField]) -> Optional[str]:
    if not fields:
        return None
    lines = []
    for f in fields:
        suffix = f" (one of: {', '.join(str(v) for v in f.one_of)})" if f.one_of else ""
        lines.append(f"- {f.name}: {f.description}{suffix}")
    return f"{title} Fields:\n" + "\n".join(lines)


def _field_descriptions_section(signature: Signature) -> Optional[str]:
    parts = [
        _describe_fields("Input", signature.input_fields),
        _describe_fields("Output", signature.output_fields),
    ]
    present = [p for p in parts if p]
    return "\n\n".join(present) if present else None


def _examples_section(signature: Signature, examples: Sequence[Any]) -> Optional[str]:
    if not examples:
        return None
    rendered: List[str] = []
    for idx, example in enumerate(examples, 1):
        record = coerce_mapping(example)
        inputs = "\n".join(f"{f.label}: {format_value(record.get(f.name, ''))}" for f in signature.input_fields)
        outputs = "\n".join(f"{f.label}: {format_value(record.get(f.name, ''))}" for f in signature.output_fields)
        rendered.append(f"Example {idx}:\n{inputs}\n{outputs}")
    return "Examples:\n\n" + "\n\n".join(rendered)


def _input_section(signature: Signature, inputs: Mapping[str, Any]) -> str:
    input_lines = [
        f"{f.label}: {format_value(inputs[f.name]) if f.name in inputs else INPUT_PLACEHOLDER}"
        for f in signature.input_fields
    ]
    output_labels = [f"{f.label}:" for f in signature.output_fields]
    return "\n".join(input_lines + output_labels)


def build_prompt(
    signature: Signature,
    inputs: Mapping[str, Any],
    examples: Iterable[Any] | None = None,
    *,
    max_length: int = MAX_PROMPT_LENGTH,
) -> str:
    """Render the prompt; anything past ``max_length`` is cut and marked with '...'."""
    sections = [
        _instruction_section(signature),
        _format_section(signature),
        _field_descriptions_section(signature),
        _examples_section(signature, list(examples or [])),
        _input_section(signature, inputs),
    ]
    prompt = "\n\n".join(s for s in sections if s)

    if len(prompt) > max_length:
        logger.debug("prompt_truncated", signature=signature.name, length=len(prompt), max_length=max_length)
        prompt = prompt[:max_length] + TRUNCATION_SUFFIX
    return prompt
