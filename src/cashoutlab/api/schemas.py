"""Pydantic schemas for the CashoutLab API."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, field_validator

from cashoutlab.ev.errors import InvalidNumericInput, InvalidOddsFormat, MissingRequiredField
from cashoutlab.ev.types import BetRequest, BetType, Leg, LegStatus

STATUS_LABELS: dict[str, LegStatus] = {
    "pending": LegStatus.PENDING,
    "hit / won": LegStatus.WON,
    "won": LegStatus.WON,
    "lost": LegStatus.LOST,
}
WIRE_LABELS: dict[LegStatus, str] = {
    LegStatus.PENDING: "Pending",
    LegStatus.WON: "Hit / Won",
    LegStatus.LOST: "Lost",
}

# Strict so JSON booleans reach validation as errors instead of becoming 1/0.
Amount = StrictInt | StrictFloat | StrictStr

AMOUNT_FIELDS = ("stake", "cashoutOffer")
ODDS_FIELDS = ("originalOdds", "currentOdds")


class LegPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    team: str = ""
    status: LegStatus = LegStatus.PENDING
    original_odds: Amount | None = Field(default=None, alias="originalOdds")
    current_odds: Amount | None = Field(default=None, alias="currentOdds")

    @field_validator("status", mode="before")
    @classmethod
    def _map_status_label(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return STATUS_LABELS[value.strip().lower()]
            except KeyError as exc:
                raise ValueError(f"Unknown leg status {value!r}") from exc
        return value

    def to_leg(self) -> Leg:
        return Leg(
            team=self.team,
            status=self.status,
            original_odds=self.original_odds,
            current_odds=self.current_odds,
        )


def leg_to_wire(leg: Leg) -> dict[str, Any]:
    """Render a leg the way ``POST /api/calculate-ev`` expects it."""

    return {
        "team": leg.team,
        "status": WIRE_LABELS[LegStatus(leg.status)],
        "originalOdds": leg.original_odds,
        "currentOdds": leg.current_odds,
    }


class BetPayload(BaseModel):
    """Request body for ``POST /api/calculate-ev``."""

    model_config = ConfigDict(populate_by_name=True)

    bet_type: BetType = Field(default=BetType.SINGLE, alias="betType")
    stake: Amount
    cashout_offer: Amount = Field(alias="cashoutOffer")
    legs: list[LegPayload]

    @field_validator("bet_type", mode="before")
    @classmethod
    def _lower_bet_type(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value

    def to_request(self) -> BetRequest:
        return BetRequest(
            stake=self.stake,
            cashout_offer=self.cashout_offer,
            legs=[leg.to_leg() for leg in self.legs],
            bet_type=self.bet_type,
        )


def request_error(errors: Sequence[dict[str, Any]]) -> dict[str, str]:
    """Collapse pydantic validation errors into one ``{"error", "message"}`` body.

    Locations may start with ``"body"`` (FastAPI) or with the field itself.
    """

    if not errors:
        return {"error": "InvalidRequest", "message": "Invalid request"}
    missing = [err for err in errors if err.get("type") == "missing"]
    first = missing[0] if missing else errors[0]
    loc = [part for part in first.get("loc", ()) if part != "body"]
    if missing:
        field = ".".join(str(part) for part in loc)
        return MissingRequiredField(field or "body").to_dict()
    if loc and loc[0] in AMOUNT_FIELDS:
        return InvalidNumericInput(str(loc[0]), first.get("input")).to_dict()
    if len(loc) >= 3 and loc[0] == "legs" and loc[2] in ODDS_FIELDS:
        return InvalidOddsFormat(f"leg #{int(loc[1]) + 1}", str(loc[2]), first.get("input")).to_dict()
    return {"error": "InvalidRequest", "message": str(first.get("msg", "Invalid request"))}


class EvaluationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    expected_value: float = Field(alias="expectedValue")
    payout_factor: float = Field(alias="payoutFactor")
    potential_payout: float = Field(alias="potentialPayout")
    combined_probability: float = Field(alias="combinedProbability")
    cashout_offer: float = Field(alias="cashoutOffer")
    recommendation: str


class ErrorResponse(BaseModel):
    error: str
    message: str
