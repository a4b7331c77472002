"""Adaptive backtracking reasoning over typed LLM signatures."""

from backtracking.reasoner.adaptive_backtracking import AdaptiveBacktrackingReasoner
from backtracking.reasoner.config import BacktrackingConfig, ExplorationStrategy
from backtracking.reasoner.exceptions import (
    GenerationError,
    InputValidationError,
    NoBacktrackPoint,
    NoReasoningPath,
    OutputParseError,
    ReasoningError,
    SignatureConflictError,
    StrategyNotImplementedError,
)
from backtracking.reasoner.ids import SequentialStepIds, uuid_step_id
from backtracking.reasoner.models import BacktrackDecision, BacktrackReason, ReasoningStep
from backtracking.signature.prediction import Prediction
from backtracking.signature.signature import FieldType, Signature, SignatureField

__all__ = [
    "AdaptiveBacktrackingReasoner",
    "BacktrackingConfig",
    "ExplorationStrategy",
    "ReasoningError",
    "InputValidationError",
    "GenerationError",
    "NoBacktrackPoint",
    "NoReasoningPath",
    "OutputParseError",
    "SignatureConflictError",
    "StrategyNotImplementedError",
    "SequentialStepIds",
    "uuid_step_id",
    "BacktrackDecision",
    "BacktrackReason",
    "ReasoningStep",
    "Prediction",
    "FieldType",
    "Signature",
    "SignatureField",
]
