"""Evaluation error taxonomy."""

from __future__ import annotations


class EvaluationError(Exception):
    """Base class for failures reported back to the caller."""

    kind = "EvaluationError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"error": self.kind, "message": self.message}


class InvalidNumericInput(EvaluationError):
    """Stake or cashout offer is not a finite number."""

    kind = "InvalidNumericInput"

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"{field} must be a valid number, got {value!r}")
        self.field = field


class InvalidOddsFormat(EvaluationError):
    """A leg's original or current odds could not be parsed."""

    kind = "InvalidOddsFormat"

    def __init__(self, team: str, field: str, value: object) -> None:
        super().__init__(f"Invalid {field} for leg {team!r}: {value!r}")
        self.team = team
        self.field = field


class MissingRequiredField(EvaluationError):
    kind = "MissingRequiredField"

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field: {field}")
        self.field = field
