"""Thin client for The Odds API plus helpers for turning its payloads into legs."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx
from tenacity import RetryCallState, retry, retry_if_exception, stop_after_attempt, wait_fixed

from cashoutlab.config import get_odds_api_key, get_settings
from cashoutlab.ev.types import Leg, LegStatus

logger = logging.getLogger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.TransportError)


def _retry_log(retry_state: RetryCallState) -> None:  # pragma: no cover - logging helper
    attempt = retry_state.attempt_number
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning("Odds API retry attempt %s due to %s", attempt, exception)


class OddsApiClient:
    """Convenient wrapper for The Odds API v4."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key or get_odds_api_key()
        self.base_url = (base_url or settings.odds_api_base_url).rstrip("/")
        self._client = httpx.Client(timeout=settings.http_timeout, transport=transport)

    def __enter__(self) -> "OddsApiClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @retry(
        retry=retry_if_exception(_is_retryable),
        stop=stop_after_attempt(3),
        wait=wait_fixed(1),
        after=_retry_log,
        reraise=True,
    )
    def _request(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        query = {"apiKey": self.api_key, "dateFormat": "iso", **(params or {})}
        response = self._client.get(url, params=query)
        response.raise_for_status()
        logger.info(
            "Odds API quota: %s used, %s remaining",
            response.headers.get("x-requests-used"),
            response.headers.get("x-requests-remaining"),
        )
        return response.json()

    def get_events(self, sport: str) -> List[Dict[str, Any]]:
        """Return upcoming and live events for a sport key."""

        return self._request(f"/sports/{sport}/events")

    def get_odds(
        self,
        sport: str,
        markets: Iterable[str],
        regions: Optional[str] = None,
        bookmakers: Optional[str] = None,
        event_id: Optional[str] = None,
    ) -> Any:
        """Fetch American-format odds for a sport, or for one event when ``event_id`` is given.

        The sport-wide endpoint returns a list of events; the event endpoint
        returns a single event object.
        """

        params: Dict[str, Any] = {
            "regions": regions or get_settings().default_regions,
            "markets": ",".join(markets),
            "oddsFormat": "american",
        }
        if bookmakers:
            params["bookmakers"] = bookmakers
        if event_id:
            return self._request(f"/sports/{sport}/events/{event_id}/odds", params)
        return self._request(f"/sports/{sport}/odds", params)


def _outcomes(event: Dict[str, Any]) -> Iterable[Dict[str, Any]]:
    for bookmaker in event.get("bookmakers") or []:
        for market in bookmaker.get("markets") or []:
            yield from market.get("outcomes") or []


def filter_events_by_team(events: Iterable[Dict[str, Any]], team: str) -> List[Dict[str, Any]]:
    """Keep events whose teams or any outcome name contain ``team`` (case-insensitive)."""

    needle = team.lower()
    matched = []
    for event in events:
        names = [event.get("home_team") or "", event.get("away_team") or ""]
        names.extend(outcome.get("name") or "" for outcome in _outcomes(event))
        if any(needle in name.lower() for name in names):
            matched.append(event)
    return matched


def group_player_props(event: Dict[str, Any], market_key: str) -> Dict[str, List[Dict[str, Any]]]:
    """Group an event's player-prop outcomes by player name."""

    players: Dict[str, List[Dict[str, Any]]] = {}
    for bookmaker in event.get("bookmakers") or []:
        for market in bookmaker.get("markets") or []:
            if market.get("key") != market_key:
                continue
            for outcome in market.get("outcomes") or []:
                players.setdefault(outcome.get("description") or "", []).append(
                    {
                        "bookmaker": bookmaker.get("title"),
                        "bookmaker_key": bookmaker.get("key"),
                        "market": market_key,
                        "name": outcome.get("name"),
                        "point": outcome.get("point"),
                        "price": outcome.get("price"),
                    }
                )
    return players


def leg_from_outcome(
    outcome: Dict[str, Any],
    market_key: str,
    original_odds: int | float | str | None = None,
) -> Leg:
    """Build a pending leg priced at the outcome's current odds."""

    label = "ML" if market_key == "h2h" else market_key
    price = outcome.get("price")
    return Leg(
        team=f"{outcome.get('name')} ({label})",
        status=LegStatus.PENDING,
        original_odds=original_odds if original_odds is not None else price,
        current_odds=price,
    )
