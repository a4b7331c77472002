from __future__ import annotations

from typing import List

from utils.logger import get_logger

logger = get_logger(__name__)


class ReasoningError(Exception):
    """Base exception for all backtracking-reasoner errors."""

    def __init__(self, message: str):
        super().__init__(message)

        # Log all reasoning errors at warning level for visibility
        logger.warning(
            "reasoning_error",
            error_type=self.__class__.__name__,
            message=message,
        )


class InputValidationError(ReasoningError, ValueError):
    """Required signature inputs are missing; raised before exploration starts."""

    def __init__(self, missing_fields: List[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(f"Missing required input fields: {', '.join(self.missing_fields)}")


class GenerationError(ReasoningError):
    """The LLM call kept failing after every retry."""


class NoBacktrackPoint(ReasoningError):
    """Backtracking was requested but memory holds no successful step to return to."""


class NoReasoningPath(ReasoningError):
    """Path selection was asked to choose from an empty set of steps."""


class StrategyNotImplementedError(ReasoningError, NotImplementedError):
    """The configured exploration strategy has no implementation yet."""


class SignatureConflictError(ReasoningError, ValueError):
    """A signature declares a field name that is already taken."""

    def __init__(self, fields: List[str]):
        self.fields = list(fields)
        super().__init__(f"Signature field names already in use: {', '.join(self.fields)}")


class OutputParseError(ReasoningError):
    """A required output field could not be extracted from the LLM reply."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)
