"""Dataclasses describing a bet and its evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

LET_IT_RIDE = "Let it ride - the expected value is higher than the cashout offer."
CASH_OUT = "Cash out - the cashout offer is higher than the expected value."
ALREADY_LOST = "Cash out - your bet has already lost."


class LegStatus(str, Enum):
    PENDING = "pending"
    WON = "won"
    LOST = "lost"


class BetType(str, Enum):
    SINGLE = "single"
    PARLAY = "parlay"


@dataclass(frozen=True)
class Leg:
    team: str
    status: LegStatus
    original_odds: int | float | str | None
    current_odds: int | float | str | None = None


@dataclass(frozen=True)
class BetRequest:
    stake: int | float | str | None
    cashout_offer: int | float | str | None
    legs: List[Leg] = field(default_factory=list)
    bet_type: BetType = BetType.SINGLE


@dataclass(frozen=True)
class EvaluationResult:
    expected_value: float
    payout_factor: float
    potential_payout: float
    combined_probability: float
    cashout_offer: float
    recommendation: str

    def to_dict(self) -> dict[str, float | str]:
        return {
            "expectedValue": self.expected_value,
            "payoutFactor": self.payout_factor,
            "potentialPayout": self.potential_payout,
            "combinedProbability": self.combined_probability,
            "cashoutOffer": self.cashout_offer,
            "recommendation": self.recommendation,
        }
