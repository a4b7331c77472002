"""Observability utilities for the backtracking reasoner.

- @observe decorator for automatic span creation on top of OpenTelemetry
- LLM call accounting per reasoning run
"""

from .observe import observe

__all__ = ["observe"]
