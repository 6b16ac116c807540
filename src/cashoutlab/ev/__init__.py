"""Expected-value evaluation for live cashout decisions."""

from cashoutlab.ev.errors import (
    EvaluationError,
    InvalidNumericInput,
    InvalidOddsFormat,
    MissingRequiredField,
)
from cashoutlab.ev.evaluator import evaluate
from cashoutlab.ev.types import BetRequest, BetType, EvaluationResult, Leg, LegStatus

__all__ = [
    "BetRequest",
    "BetType",
    "EvaluationError",
    "EvaluationResult",
    "InvalidNumericInput",
    "InvalidOddsFormat",
    "Leg",
    "LegStatus",
    "MissingRequiredField",
    "evaluate",
]
