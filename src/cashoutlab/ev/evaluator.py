"""Expected-value evaluation of a live bet against a cashout offer."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import List

from cashoutlab.ev.errors import InvalidNumericInput, InvalidOddsFormat, MissingRequiredField
from cashoutlab.ev.odds import (
    american_to_decimal,
    american_to_probability,
    parse_american_odds,
    round_half_up,
)
from cashoutlab.ev.types import (
    ALREADY_LOST,
    CASH_OUT,
    LET_IT_RIDE,
    BetRequest,
    EvaluationResult,
    Leg,
    LegStatus,
)

logger = logging.getLogger(__name__)


@dataclass
class LegPartition:
    pending: List[Leg] = field(default_factory=list)
    won: List[Leg] = field(default_factory=list)
    lost: List[Leg] = field(default_factory=list)

    @property
    def is_dead(self) -> bool:
        return bool(self.lost)


def _parse_amount(name: str, raw: object) -> float:
    if raw is None or isinstance(raw, bool):
        raise InvalidNumericInput(name, raw)
    try:
        value = float(str(raw).strip())
    except ValueError as exc:
        raise InvalidNumericInput(name, raw) from exc
    if not math.isfinite(value):
        raise InvalidNumericInput(name, raw)
    return value


def _leg_odds(leg: Leg, field_name: str) -> float:
    raw = getattr(leg, field_name)
    odds = parse_american_odds(raw)
    if odds is None:
        raise InvalidOddsFormat(leg.team, field_name, raw)
    return odds


def classify_legs(legs: Iterable[Leg]) -> LegPartition:
    """Split legs by status, keeping input order within each group."""

    partition = LegPartition()
    buckets = {
        LegStatus.PENDING: partition.pending,
        LegStatus.WON: partition.won,
        LegStatus.LOST: partition.lost,
    }
    for leg in legs:
        buckets[LegStatus(leg.status)].append(leg)
    return partition


def payout_factor(legs: Iterable[Leg]) -> float:
    """Multiply the decimal odds of each leg's original price.

    Each leg's decimal odds are rounded to 2 places before being multiplied
    into the running product, so long parlays carry compounded rounding.
    """

    factor = 1.0
    for leg in legs:
        odds = _leg_odds(leg, "original_odds")
        decimal_odds = american_to_decimal(odds)
        logger.debug("Leg %s: original odds %+g -> decimal %.2f", leg.team, odds, decimal_odds)
        factor *= decimal_odds
    return factor


def combined_probability(pending_legs: Sequence[Leg]) -> float:
    """Product of implied win probabilities at current odds; 1.0 when nothing is pending."""

    prob = 1.0
    for leg in pending_legs:
        odds = _leg_odds(leg, "current_odds")
        leg_prob = american_to_probability(odds)
        logger.debug("Leg %s: current odds %+g -> probability %.2f%%", leg.team, odds, leg_prob * 100)
        prob *= leg_prob
    return prob


def evaluate(bet: BetRequest) -> EvaluationResult:
    """Compute the bet's expected value and compare it with the cashout offer.

    Raises:
        InvalidNumericInput: stake or cashout offer is not a finite number.
        MissingRequiredField: the bet has no legs.
        InvalidOddsFormat: a leg's odds could not be parsed; no partial result.
    """

    stake = _parse_amount("stake", bet.stake)
    cashout_offer = _parse_amount("cashout_offer", bet.cashout_offer)
    if not bet.legs:
        raise MissingRequiredField("legs")

    legs = classify_legs(bet.legs)
    if legs.is_dead:
        logger.debug("%d lost leg(s); bet is dead", len(legs.lost))
        return EvaluationResult(
            expected_value=0.0,
            payout_factor=0.0,
            potential_payout=0.0,
            combined_probability=0.0,
            cashout_offer=cashout_offer,
            recommendation=ALREADY_LOST,
        )

    logger.debug("Processing %d won and %d pending legs", len(legs.won), len(legs.pending))
    factor = payout_factor([*legs.won, *legs.pending])
    potential_payout = round_half_up(stake * factor, 2)
    prob = combined_probability(legs.pending)
    expected_value = round_half_up(prob * potential_payout - stake, 2)
    logger.debug(
        "EV: %.4f x %.2f - %.2f = %.2f (cashout %.2f)",
        prob,
        potential_payout,
        stake,
        expected_value,
        cashout_offer,
    )

    recommendation = LET_IT_RIDE if expected_value > cashout_offer else CASH_OUT
    return EvaluationResult(
        expected_value=expected_value,
        payout_factor=round_half_up(factor, 2),
        potential_payout=potential_payout,
        combined_probability=prob,
        cashout_offer=cashout_offer,
        recommendation=recommendation,
    )
