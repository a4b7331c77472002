"""Minimal tracing decorator for the backtracking reasoner."""

from __future__ import annotations

from functools import wraps
from inspect import signature
from typing import Any, Callable, Optional
from contextvars import ContextVar
from dataclasses import is_dataclass, asdict
import json
import time

from opentelemetry import trace

TRACER_NAME = "adaptive-backtracking"

SECRET_REDACT_KEYS = {
    "apikey", "accesstoken", "refreshtoken", "clientsecret", "secret",
    "password", "authorization", "bearer", "cookie", "setcookie", "privatekey",
}


def observe(_fn: Optional[Callable[..., Any]] = None, *, llm: bool = False, root: bool = False) -> Callable[..., Any]:
    """Wrap a function in an OpenTelemetry span.

    Usage:
        @observe
        def helper(): ...

        @observe(llm=True)
        def completion(self, messages): ...

        @observe(root=True)
        def run(self, signature, inputs): ...

    - Span name is ``module.qualname``
    - Records duration, exceptions and input/output previews
    - ``llm=True`` captures the chat messages and the reply text
    - ``root=True`` marks the span as the top of a reasoning run and
      counts the LLM calls made beneath it
    """

    def _decorate(fn: Callable[..., Any]) -> Callable[..., Any]:
        module = getattr(fn, "__module__", "") or ""
        qualname = getattr(fn, "__qualname__", fn.__name__)
        span_name = f"{module}.{qualname}" if module else qualname

        @wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = trace.get_tracer(TRACER_NAME)
            start_time = time.perf_counter()

            with tracer.start_as_current_span(span_name) as span:
                try:
                    if root:
                        _start_call_counter(span)
                    if llm:
                        _count_llm_call()

                    _capture_input(span, fn, args, kwargs, llm)
                    result = fn(*args, **kwargs)
                    _capture_output(span, result)
                    return result

                except Exception as e:
                    span.record_exception(e)
                    span.set_status(trace.Status(trace.StatusCode.ERROR))
                    raise

                finally:
                    span.set_attribute("duration_ms", int((time.perf_counter() - start_time) * 1000))
                    if root:
                        _finalize_call_counter(span)

        return wrapper

    if callable(_fn):
        return _decorate(_fn)
    return _decorate


def _safe_preview(val: Any, max_len: int = 512) -> Any:
    """Create a JSON-friendly preview of any value, redacting secrets."""
    if val is None or isinstance(val, (bool, int, float)):
        return val
    if isinstance(val, str):
        return val if len(val) <= max_len else val[:max_len] + "..."
    if isinstance(val, dict):
        return {
            str(k): ("<redacted>" if str(k).lower().replace("_", "").replace("-", "") in SECRET_REDACT_KEYS
                     else _safe_preview(v, max_len))
            for k, v in list(val.items())[:20]
        }
    if isinstance(val, (list, tuple)):
        items = [_safe_preview(v, max_len) for v in list(val)[:20]]
        if len(val) > 20:
            items.append("...")
        return items
    if is_dataclass(val) and not isinstance(val, type):
        return _safe_preview(asdict(val), max_len)
    if hasattr(val, "model_dump"):
        return _safe_preview(val.model_dump(), max_len)
    return repr(val)[:max_len]


def _capture_input(span: Any, fn: Callable, args: tuple, kwargs: dict, llm: bool) -> None:
    try:
        bound = signature(fn).bind_partial(*args, **kwargs)
    except TypeError:
        return

    if llm:
        messages = bound.arguments.get("messages")
        if messages:
            msg_str = json.dumps(messages, ensure_ascii=False, separators=(",", ":"))
            span.set_attribute("input", msg_str[:12288])
        return

    inputs = {name: _safe_preview(value) for name, value in bound.arguments.items() if name not in {"self", "cls"}}
    input_str = json.dumps(inputs, ensure_ascii=False, separators=(",", ":"), default=str)
    span.set_attribute("input", input_str[:6144] + ("..." if len(input_str) > 6144 else ""))


def _capture_output(span: Any, result: Any) -> None:
    # Prediction-like results carry outputs plus run metadata
    outputs = getattr(result, "outputs", None)
    if isinstance(outputs, dict):
        span.set_attribute("output", json.dumps(_safe_preview(outputs), default=str)[:8192])
        metadata = getattr(result, "metadata", None) or {}
        if "confidence" in metadata:
            span.set_attribute("result_confidence", float(metadata["confidence"]))
        if "termination" in metadata:
            span.set_attribute("result_termination", str(metadata["termination"]))
        return
    span.set_attribute("output", str(result)[:8192])


# ── LLM call accounting ─────────────────────────────────────────────────────
# Root spans start a counter; nested LLM spans increment it; root writes the total.

_llm_calls: ContextVar[Optional[int]] = ContextVar("llm_calls", default=None)
_owner: ContextVar[Optional[int]] = ContextVar("llm_calls_owner", default=None)


def _start_call_counter(span: Any) -> None:
    if _llm_calls.get() is None:
        _llm_calls.set(0)
        _owner.set(id(span))


def _count_llm_call() -> None:
    current = _llm_calls.get()
    if isinstance(current, int):
        _llm_calls.set(current + 1)


def _finalize_call_counter(span: Any) -> None:
    if _owner.get() == id(span):
        span.set_attribute("llm.calls", _llm_calls.get() or 0)
        _llm_calls.set(None)
        _owner.set(None)
