"""FastAPI backend for CashoutLab."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Annotated, Any

import httpx
from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cashoutlab import __version__
from cashoutlab.api.schemas import (
    BetPayload,
    ErrorResponse,
    EvaluationResponse,
    leg_to_wire,
    request_error,
)
from cashoutlab.config import get_settings
from cashoutlab.data.markets import VALID_MARKETS, sanitize_markets
from cashoutlab.data.odds_api_client import (
    OddsApiClient,
    filter_events_by_team,
    group_player_props,
    leg_from_outcome,
)
from cashoutlab.ev.errors import EvaluationError
from cashoutlab.ev.evaluator import evaluate

logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(
    title="CashoutLab API",
    version=__version__,
    description="Expected-value check for live cashout offers, plus odds lookup.",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.cors_origin],
    allow_methods=["*"],
    allow_headers=["*"],
)


def api_error(status_code: int, kind: str, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"error": kind, "message": message})


@app.exception_handler(EvaluationError)
async def evaluation_error_handler(request: Request, exc: EvaluationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_shape_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=request_error(exc.errors()))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    body = exc.detail if isinstance(exc.detail, dict) else {"error": "HTTPError", "message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


def require_sport(sport: Annotated[str | None, Query()] = None) -> str:
    if not sport:
        raise api_error(400, "MissingRequiredField", "Sport parameter is required")
    return sport


SportDep = Annotated[str, Depends(require_sport)]


def get_odds_client(_: SportDep) -> Iterator[OddsApiClient]:
    try:
        client = OddsApiClient()
    except RuntimeError as exc:
        logger.error("Odds API unavailable: %s", exc)
        raise api_error(500, "ConfigurationError", "API key not configured") from exc
    try:
        yield client
    finally:
        client.close()


OddsClientDep = Annotated[OddsApiClient, Depends(get_odds_client)]
EventIdQuery = Annotated[str | None, Query(alias="eventId")]


def _upstream_error(action: str, exc: httpx.HTTPError) -> HTTPException:
    message = str(exc)
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            message = exc.response.json().get("message", message)
        except ValueError:
            pass
    logger.error("Failed to %s: %s", action, message)
    return api_error(502, "UpstreamError", f"Failed to {action}: {message}")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post(
    "/api/calculate-ev",
    response_model=EvaluationResponse,
    responses={400: {"model": ErrorResponse}},
)
def calculate_ev(payload: BetPayload) -> dict[str, Any]:
    bet = payload.to_request()
    logger.info("Evaluating %s bet with %d leg(s)", bet.bet_type.value, len(bet.legs))
    result = evaluate(bet)
    logger.info("EV %.2f vs cashout %.2f: %s", result.expected_value, result.cashout_offer, result.recommendation)
    return result.to_dict()


@app.get("/api/events")
def list_events(sport: SportDep, client: OddsClientDep) -> list[dict[str, Any]]:
    try:
        return client.get_events(sport)
    except httpx.HTTPError as exc:
        raise _upstream_error("fetch events", exc) from exc


@app.get("/api/odds")
def list_odds(
    sport: SportDep,
    client: OddsClientDep,
    markets: str | None = None,
    regions: str | None = None,
    team: str | None = None,
    bookmakers: str | None = None,
    event_id: EventIdQuery = None,
) -> Any:
    market_keys = sanitize_markets(markets)
    if not market_keys:
        raise api_error(400, "InvalidRequest", "Invalid markets parameter")
    try:
        odds = client.get_odds(
            sport,
            market_keys,
            regions=regions,
            bookmakers=bookmakers,
            event_id=event_id,
        )
    except httpx.HTTPError as exc:
        raise _upstream_error("fetch odds", exc) from exc
    if not event_id and team:
        return filter_events_by_team(odds, team)
    return odds


@app.get("/api/player-props")
def list_player_props(
    sport: SportDep,
    client: OddsClientDep,
    event_id: EventIdQuery = None,
    market: str = "player_points",
    regions: str | None = None,
) -> dict[str, list[dict[str, Any]]]:
    """Player-prop prices for one event, grouped by player, each with a ready-to-submit leg."""

    if not event_id:
        raise api_error(400, "MissingRequiredField", "eventId parameter is required")
    if market not in VALID_MARKETS:
        raise api_error(400, "InvalidRequest", "Invalid markets parameter")
    try:
        event = client.get_odds(sport, [market], regions=regions, event_id=event_id)
    except httpx.HTTPError as exc:
        raise _upstream_error("fetch player props", exc) from exc

    players = group_player_props(event, market)
    for player, entries in players.items():
        for entry in entries:
            selection = " ".join(str(part) for part in (player, entry["name"], entry["point"]) if part is not None)
            leg = leg_from_outcome({"name": selection, "price": entry["price"]}, market)
            entry["leg"] = leg_to_wire(leg)
    return players
